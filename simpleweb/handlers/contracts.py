"""POST handler contracts.

A handler class implements exactly one of the four shapes below. The shape
decides how the dispatcher invokes it:

=========================  =========  ====================================
Contract                   Input      ``post`` returns
=========================  =========  ====================================
``PostHandler``            none       ``Status | int``
``AsyncPostHandler``       none       awaitable of ``Status | int``
``TypedPostHandler[T]``    ``T``      ``Status | int``
``AsyncTypedPostHandler``  ``T``      awaitable of ``Status | int``
=========================  =========  ====================================

Returned integers must be valid HTTP status codes (100..599).

For the async shapes the awaitable returned by ``post`` must be the last step
of the handler's work: the dispatcher writes the response as soon as it
resolves. Any lazily evaluated output (generators, ``map`` objects, async
generators) has to be materialized before then, e.g. with :func:`materialize`
or :func:`amaterialize`, otherwise response writing may block on it.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar, get_args, get_origin, get_type_hints

from simpleweb.core.errors import HandlerRegistrationError
from simpleweb.core.status import Status


__all__ = [
    "HandlerKind",
    "http_method",
    "PostHandler",
    "AsyncPostHandler",
    "TypedPostHandler",
    "AsyncTypedPostHandler",
    "CONTRACTS",
    "classify_handler",
    "check_handler_shape",
    "resolve_input_type",
    "materialize",
    "amaterialize",
]


T_contra = TypeVar("T_contra", contravariant=True)
C = TypeVar("C", bound=type)


class HandlerKind(str, Enum):
    """The four POST handler shapes."""

    SYNC = "sync"
    ASYNC = "async"
    TYPED_SYNC = "typed_sync"
    TYPED_ASYNC = "typed_async"

    @property
    def is_async(self) -> bool:
        return self in (HandlerKind.ASYNC, HandlerKind.TYPED_ASYNC)

    @property
    def is_typed(self) -> bool:
        return self in (HandlerKind.TYPED_SYNC, HandlerKind.TYPED_ASYNC)


def http_method(verb: str) -> Callable[[C], C]:
    """Tag a contract class with the HTTP method it answers."""

    def decorator(cls: C) -> C:
        cls.http_method = verb.upper()  # type: ignore[attr-defined]
        return cls

    return decorator


@http_method("POST")
class PostHandler(ABC):
    """Synchronous POST handler without an input model."""

    http_method: ClassVar[str]
    handler_kind: ClassVar[HandlerKind] = HandlerKind.SYNC

    @abstractmethod
    def post(self) -> Status | int:
        """Handle the request.

        Returns:
            A Status, or an int that is a valid HTTP status code
        """


@http_method("POST")
class AsyncPostHandler(ABC):
    """Asynchronous POST handler without an input model."""

    http_method: ClassVar[str]
    handler_kind: ClassVar[HandlerKind] = HandlerKind.ASYNC

    @abstractmethod
    def post(self) -> Awaitable[Status | int]:
        """Handle the request.

        Returns:
            An awaitable resolving to a Status or int status code. It must be
            the final step of the handler's work, with output materialized.
        """


@http_method("POST")
class TypedPostHandler(ABC, Generic[T_contra]):
    """Synchronous POST handler receiving the deserialized input model."""

    http_method: ClassVar[str]
    handler_kind: ClassVar[HandlerKind] = HandlerKind.TYPED_SYNC

    @abstractmethod
    def post(self, input: T_contra) -> Status | int:
        """Handle the request.

        Args:
            input: The input model, deserialized from the request body

        Returns:
            A Status, or an int that is a valid HTTP status code
        """


@http_method("POST")
class AsyncTypedPostHandler(ABC, Generic[T_contra]):
    """Asynchronous POST handler receiving the deserialized input model."""

    http_method: ClassVar[str]
    handler_kind: ClassVar[HandlerKind] = HandlerKind.TYPED_ASYNC

    @abstractmethod
    def post(self, input: T_contra) -> Awaitable[Status | int]:
        """Handle the request.

        Args:
            input: The input model, deserialized from the request body

        Returns:
            An awaitable resolving to a Status or int status code. It must be
            the final step of the handler's work, with output materialized.
        """


CONTRACTS: dict[HandlerKind, type] = {
    HandlerKind.SYNC: PostHandler,
    HandlerKind.ASYNC: AsyncPostHandler,
    HandlerKind.TYPED_SYNC: TypedPostHandler,
    HandlerKind.TYPED_ASYNC: AsyncTypedPostHandler,
}


def classify_handler(handler_type: type) -> HandlerKind | None:
    """Return the contract shape ``handler_type`` implements.

    Returns:
        The kind, or None when the class implements none of the contracts

    Raises:
        HandlerRegistrationError: If the class implements more than one shape
    """
    implemented = [
        kind
        for kind, contract in CONTRACTS.items()
        if issubclass(handler_type, contract)
    ]
    if len(implemented) > 1:
        raise HandlerRegistrationError(
            f"{handler_type.__name__} implements several POST shapes; "
            "a handler must implement exactly one",
            details={"kinds": [kind.value for kind in implemented]},
        )
    return implemented[0] if implemented else None


def check_handler_shape(handler_type: type, kind: HandlerKind) -> None:
    """Verify that ``handler_type.post`` can be called the way ``kind`` requires.

    Raises:
        HandlerRegistrationError: If ``post`` is missing or has the wrong shape
    """
    post = getattr(handler_type, "post", None)
    if post is None or not callable(post):
        raise HandlerRegistrationError(
            f"{handler_type.__name__} has no callable 'post' method"
        )

    if not kind.is_async and inspect.iscoroutinefunction(post):
        raise HandlerRegistrationError(
            f"{handler_type.__name__}.post is a coroutine function but the "
            f"handler is registered as {kind.value}"
        )

    signature = inspect.signature(post)
    # ``post`` is looked up on the class, so ``self`` is still a parameter
    args: tuple[Any, ...] = (None, None) if kind.is_typed else (None,)
    try:
        signature.bind(*args)
    except TypeError as e:
        expected = "one input argument" if kind.is_typed else "no arguments"
        raise HandlerRegistrationError(
            f"{handler_type.__name__}.post must accept {expected} for a "
            f"{kind.value} handler",
            details={"signature": str(signature)},
        ) from e


def resolve_input_type(handler_type: type) -> Any:
    """Find the input model type declared by a typed handler.

    Looks at the generic argument of the contract base first
    (``TypedPostHandler[Order]``), then at the annotation of the first
    parameter of ``post``. Falls back to ``Any``.
    """
    typed_contracts = (TypedPostHandler, AsyncTypedPostHandler)
    for klass in handler_type.__mro__:
        for base in getattr(klass, "__orig_bases__", ()):
            if get_origin(base) in typed_contracts:
                args = get_args(base)
                if args and not isinstance(args[0], TypeVar):
                    return args[0]

    post = getattr(handler_type, "post", None)
    if post is not None:
        try:
            hints = get_type_hints(post)
        except (NameError, TypeError):
            hints = {}
        params = [
            name
            for name in inspect.signature(post).parameters
            if name != "self"
        ]
        if params and params[0] in hints and not isinstance(hints[params[0]], TypeVar):
            return hints[params[0]]

    return Any


def is_lazy(value: Any) -> bool:
    """Whether ``value`` is a one-shot iterator that still has to be evaluated."""
    return isinstance(value, Iterator | AsyncIterator)


def materialize(value: Any) -> Any:
    """Force a lazily evaluated sequence into a list.

    Generators, ``map``/``filter`` objects and other iterators become lists.
    Everything else (lists, dicts, strings, models) is returned unchanged.

    Raises:
        TypeError: If ``value`` is an async iterator; use :func:`amaterialize`
    """
    if isinstance(value, AsyncIterator):
        raise TypeError("async iterators must be materialized with amaterialize()")
    if isinstance(value, Iterator):
        return list(value)
    return value


async def amaterialize(value: Any) -> Any:
    """Like :func:`materialize`, also draining async iterators."""
    if isinstance(value, AsyncIterator):
        return [item async for item in value]
    return materialize(value)
