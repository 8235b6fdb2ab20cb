"""Registry of POST handlers keyed by path.

The handler shape is determined once, at registration time, and stored on a
:class:`HandlerRegistration` record together with the verb and the declared
input type. The dispatcher only ever looks at these records.
"""

import inspect
import sys
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from simpleweb.core.errors import (
    HandlerRegistrationError,
    MethodNotAllowedError,
    NoMatchingHandlerError,
    RouteNotFoundError,
)
from simpleweb.core.logging import get_logger

from .contracts import (
    CONTRACTS,
    HandlerKind,
    check_handler_shape,
    classify_handler,
    resolve_input_type,
)


__all__ = ["HandlerRegistration", "HandlerRegistry", "normalize_path"]

H = TypeVar("H", bound=type)

logger = get_logger(__name__)


def normalize_path(path: str) -> str:
    """Normalize a route path: leading slash, no trailing slash except root."""
    return "/" + path.strip().strip("/")


def type_name(value: Any) -> str:
    if value is Any:
        return "Any"
    return getattr(value, "__name__", None) or repr(value)


@dataclass(frozen=True)
class HandlerRegistration:
    """A handler class bound to a path, with its shape decided up front."""

    path: str
    handler_type: type
    kind: HandlerKind
    input_type: Any = Any
    method: str = "POST"
    factory: Callable[[], Any] | None = None

    @property
    def name(self) -> str:
        return f"{self.handler_type.__module__}.{self.handler_type.__qualname__}"

    def activate(self) -> Any:
        """Create a fresh handler instance for one request."""
        if self.factory is not None:
            return self.factory()
        return self.handler_type()

    def input_distance(self, input_type: type | None) -> int | None:
        """How closely the declared input type matches a runtime input type.

        Input is contravariant: a handler declared for ``S`` accepts any
        subclass of ``S``. Returns the MRO distance from ``input_type`` to the
        declared type (0 is an exact match), a large number for ``Any`` or for
        declared types that are not plain classes, and None when the handler
        does not accept ``input_type`` at all.
        """
        if not self.kind.is_typed:
            return None
        if self.input_type is Any:
            return sys.maxsize
        if input_type is None or not inspect.isclass(self.input_type):
            return sys.maxsize - 1
        try:
            return input_type.__mro__.index(self.input_type)
        except ValueError:
            return None


class HandlerRegistry:
    """Holds handler registrations and resolves the one to invoke."""

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, list[HandlerRegistration]]] = defaultdict(
            lambda: defaultdict(list)
        )

    def register(
        self,
        handler_type: type,
        path: str,
        *,
        kind: HandlerKind | None = None,
        input_type: Any = None,
        factory: Callable[[], Any] | None = None,
    ) -> HandlerRegistration:
        """Register a handler class for a path.

        Args:
            handler_type: The handler class. It should subclass one of the POST
                contracts; otherwise ``kind`` must be given
            path: Route path the handler answers
            kind: Explicit handler shape, required for classes that do not
                subclass a contract
            input_type: Explicit input model for typed handlers
            factory: Optional callable creating handler instances

        Returns:
            The registration record

        Raises:
            HandlerRegistrationError: If the shape cannot be determined or
                clashes with an existing registration
        """
        if not inspect.isclass(handler_type):
            raise HandlerRegistrationError(
                f"Handlers must be classes, got {handler_type!r}"
            )

        declared = classify_handler(handler_type)
        if kind is not None and declared is not None and kind != declared:
            raise HandlerRegistrationError(
                f"{handler_type.__name__} implements {declared.value} but was "
                f"registered as {kind.value}"
            )
        kind = kind or declared
        if kind is None:
            raise HandlerRegistrationError(
                f"{handler_type.__name__} implements no POST handler contract; "
                "subclass one or pass kind="
            )
        check_handler_shape(handler_type, kind)
        if inspect.isabstract(handler_type):
            raise HandlerRegistrationError(
                f"{handler_type.__name__} is abstract and cannot be instantiated",
                details={
                    "abstract_methods": sorted(handler_type.__abstractmethods__)
                },
            )

        if kind.is_typed:
            if input_type is None:
                input_type = resolve_input_type(handler_type)
        elif input_type is not None:
            raise HandlerRegistrationError(
                f"{handler_type.__name__} is an untyped handler and takes no input_type"
            )
        else:
            input_type = Any

        registration = HandlerRegistration(
            path=normalize_path(path),
            handler_type=handler_type,
            kind=kind,
            input_type=input_type,
            method=CONTRACTS[kind].http_method,
            factory=factory,
        )
        self._check_clash(registration)
        self._routes[registration.path][registration.method].append(registration)

        logger.info(
            "handler_registered",
            path=registration.path,
            method=registration.method,
            kind=registration.kind.value,
            input_type=type_name(registration.input_type),
            handler=registration.name,
        )
        return registration

    def post(
        self,
        path: str,
        *,
        kind: HandlerKind | None = None,
        input_type: Any = None,
        factory: Callable[[], Any] | None = None,
    ) -> Callable[[H], H]:
        """Decorator form of :meth:`register`."""

        def decorator(handler_type: H) -> H:
            self.register(
                handler_type, path, kind=kind, input_type=input_type, factory=factory
            )
            return handler_type

        return decorator

    def _check_clash(self, registration: HandlerRegistration) -> None:
        existing = self._routes.get(registration.path, {}).get(registration.method, [])
        for other in existing:
            if not (registration.kind.is_typed and other.kind.is_typed):
                raise HandlerRegistrationError(
                    f"{registration.method} {registration.path} is already handled "
                    f"by {other.name}",
                    details={"existing": other.name, "new": registration.name},
                )
            if other.input_type == registration.input_type:
                raise HandlerRegistrationError(
                    f"{registration.method} {registration.path} already has a handler "
                    f"for input {type_name(other.input_type)} ({other.name})",
                    details={"existing": other.name, "new": registration.name},
                )

    def candidates(
        self, method: str, path: str, input_type: type | None = None
    ) -> list[HandlerRegistration]:
        """All registrations able to serve a request, best match first.

        Raises:
            RouteNotFoundError: If nothing is registered for the path
            MethodNotAllowedError: If the path is registered for other methods only
            NoMatchingHandlerError: If no typed handler accepts ``input_type``
        """
        path = normalize_path(path)
        methods = self._routes.get(path)
        if not methods:
            raise RouteNotFoundError(path)
        registrations = methods.get(method.upper())
        if not registrations:
            raise MethodNotAllowedError(method.upper(), path, sorted(methods))

        if len(registrations) == 1 and not registrations[0].kind.is_typed:
            return list(registrations)

        scored = [
            (distance, index, registration)
            for index, registration in enumerate(registrations)
            if (distance := registration.input_distance(input_type)) is not None
        ]
        if not scored:
            raise NoMatchingHandlerError(path, input_type)
        scored.sort(key=lambda item: (item[0], item[1]))
        return [registration for _, _, registration in scored]

    def resolve(
        self, method: str, path: str, input_type: type | None = None
    ) -> HandlerRegistration:
        """The registration to invoke for a request; see :meth:`candidates`."""
        return self.candidates(method, path, input_type)[0]

    def registrations(self) -> list[HandlerRegistration]:
        return [
            registration
            for methods in self._routes.values()
            for registrations in methods.values()
            for registration in registrations
        ]

    def paths(self) -> list[str]:
        return list(self._routes)

    def __len__(self) -> int:
        return len(self.registrations())
