"""SimpleWeb: convention-based POST handler contracts and dispatch.

Application handlers implement exactly one of the POST contract shapes, get
registered against a path, and are invoked by the dispatcher once per request.
"""

from ._version import __version__
from .core.errors import (
    HandlerActivationError,
    HandlerContractError,
    HandlerRegistrationError,
    InputDeserializationError,
    InvalidStatusError,
    MethodNotAllowedError,
    NoMatchingHandlerError,
    ResponseAlreadyWrittenError,
    RouteNotFoundError,
    SimpleWebError,
)
from .core.status import Status, coerce_status
from .dispatch import (
    BufferedResponseWriter,
    DispatchRequest,
    DispatchResult,
    Dispatcher,
    ResponseWriter,
)
from .handlers import (
    AsyncPostHandler,
    AsyncTypedPostHandler,
    HandlerKind,
    HandlerRegistration,
    HandlerRegistry,
    PostHandler,
    TypedPostHandler,
    amaterialize,
    materialize,
)


__all__ = [
    "__version__",
    # Contracts
    "PostHandler",
    "AsyncPostHandler",
    "TypedPostHandler",
    "AsyncTypedPostHandler",
    "HandlerKind",
    "materialize",
    "amaterialize",
    # Registration and dispatch
    "HandlerRegistration",
    "HandlerRegistry",
    "Dispatcher",
    "DispatchRequest",
    "DispatchResult",
    "ResponseWriter",
    "BufferedResponseWriter",
    # Status
    "Status",
    "coerce_status",
    # Errors
    "SimpleWebError",
    "HandlerRegistrationError",
    "HandlerContractError",
    "HandlerActivationError",
    "InputDeserializationError",
    "InvalidStatusError",
    "RouteNotFoundError",
    "MethodNotAllowedError",
    "NoMatchingHandlerError",
    "ResponseAlreadyWrittenError",
]
