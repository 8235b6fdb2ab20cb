"""Dispatch core: invoke the registered handler and write exactly one response.

Per request the dispatcher

1. resolves the registration for the method and path,
2. activates a fresh handler instance,
3. deserializes the body into the input model for typed handlers,
4. invokes ``post``; async handlers are awaited to completion,
5. coerces the result into a :class:`~simpleweb.core.status.Status`,
6. materializes lazy handler output,
7. hands status and output to the response writer.

Nothing reaches the writer before step 4 has fully completed.
"""

import inspect
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from starlette.concurrency import run_in_threadpool

from simpleweb.config.settings import Settings, get_settings
from simpleweb.core.errors import (
    HandlerActivationError,
    HandlerContractError,
    InputDeserializationError,
    InvalidStatusError,
    SimpleWebError,
)
from simpleweb.core.logging import get_logger
from simpleweb.core.status import Status, coerce_status
from simpleweb.handlers.contracts import amaterialize, is_lazy, materialize
from simpleweb.handlers.registry import (
    HandlerRegistration,
    HandlerRegistry,
    type_name,
)
from simpleweb.hooks import HookEvent, HookManager

from .writer import ResponseWriter


logger = get_logger(__name__)

_RAW_BODY_TYPES = (bytes, bytearray, memoryview, str)
_PARSED_BODY_TYPES = (dict, list, int, float, bool)


@dataclass
class DispatchRequest:
    """An incoming request as seen by the dispatcher.

    ``body`` is either raw JSON (bytes or str), already-parsed JSON data, or a
    value that an external deserializer produced. In the last case its type
    drives handler selection unless ``input_type`` is given.
    """

    method: str
    path: str
    body: Any = None
    input_type: type | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def runtime_input_type(self) -> type | None:
        if self.input_type is not None:
            return self.input_type
        if self.body is None or isinstance(
            self.body, _RAW_BODY_TYPES + _PARSED_BODY_TYPES
        ):
            return None
        return type(self.body)


@dataclass
class DispatchResult:
    """Outcome of a dispatched request."""

    registration: HandlerRegistration
    status: Status
    output: Any = None
    duration_ms: float = 0.0


@lru_cache(maxsize=256)
def _type_adapter(input_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(input_type)


class Dispatcher:
    """Invokes registered POST handlers according to their contract shape."""

    def __init__(
        self,
        registry: HandlerRegistry,
        *,
        settings: Settings | None = None,
        hooks: HookManager | None = None,
    ) -> None:
        self._registry = registry
        self._settings = settings or get_settings()
        self._hooks = hooks or HookManager()

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    async def dispatch(
        self, request: DispatchRequest, writer: ResponseWriter
    ) -> DispatchResult:
        """Run one request through its handler and write the response.

        Args:
            request: The request to dispatch
            writer: Receives the final status and output, exactly once

        Returns:
            The dispatch result

        Raises:
            SimpleWebError: For routing, input, activation and contract failures
            Exception: Whatever the handler itself raised, unchanged
        """
        started = time.perf_counter()
        method = request.method.upper()
        log = logger.bind(method=method, path=request.path)
        await self._hooks.emit(
            HookEvent.DISPATCH_STARTED, method=method, path=request.path
        )

        registration: HandlerRegistration | None = None
        try:
            candidates = self._registry.candidates(
                method, request.path, request.runtime_input_type
            )
            registration, value = self._select(candidates, request)
            log = log.bind(handler=registration.name, kind=registration.kind.value)

            handler = self._activate(registration)
            await self._hooks.emit(
                HookEvent.HANDLER_ACTIVATED,
                method=method,
                path=registration.path,
                handler=registration.name,
            )

            result = await self._invoke(registration, handler, value)
            status = self._coerce(registration, result)
            output = await self._collect_output(registration, handler)
            await self._hooks.emit(
                HookEvent.HANDLER_COMPLETED,
                method=method,
                path=registration.path,
                handler=registration.name,
                status_code=status.code,
            )

            await writer.write(status, output)
        except SimpleWebError as e:
            log.warning(
                "dispatch_failed",
                error_type=e.error_type,
                status_code=e.status_code,
                error=str(e),
            )
            await self._emit_failure(method, request, registration, e)
            raise
        except Exception as e:
            log.error("handler_failed", error=str(e), exc_info=e)
            await self._emit_failure(method, request, registration, e)
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        await self._hooks.emit(
            HookEvent.RESPONSE_WRITTEN,
            data={"duration_ms": duration_ms},
            method=method,
            path=registration.path,
            handler=registration.name,
            status_code=status.code,
        )
        log.debug("dispatch_completed", status_code=status.code, duration_ms=duration_ms)
        return DispatchResult(
            registration=registration,
            status=status,
            output=output,
            duration_ms=duration_ms,
        )

    async def _emit_failure(
        self,
        method: str,
        request: DispatchRequest,
        registration: HandlerRegistration | None,
        error: Exception,
    ) -> None:
        await self._hooks.emit(
            HookEvent.DISPATCH_FAILED,
            method=method,
            path=request.path,
            handler=registration.name if registration else None,
            error=error,
        )

    def _select(
        self, candidates: list[HandlerRegistration], request: DispatchRequest
    ) -> tuple[HandlerRegistration, Any]:
        """Pick the handler and build its input value.

        With several typed candidates and a body that still needs
        deserializing, the first candidate whose input model accepts the body
        wins.
        """
        first = candidates[0]
        if not first.kind.is_typed:
            return first, None

        errors: list[InputDeserializationError] = []
        for registration in candidates:
            try:
                return registration, self._deserialize(registration, request.body)
            except InputDeserializationError as e:
                errors.append(e)
        raise errors[0]

    def _deserialize(self, registration: HandlerRegistration, body: Any) -> Any:
        if body is None or (isinstance(body, _RAW_BODY_TYPES) and len(body) == 0):
            raise InputDeserializationError(
                "Request body is required",
                details={"input_type": type_name(registration.input_type)},
            )

        declared = registration.input_type
        # Raw bodies are always JSON text. typing.Any is a class on 3.11+ but
        # rejects isinstance().
        if (
            not isinstance(body, _RAW_BODY_TYPES)
            and declared is not Any
            and inspect.isclass(declared)
            and isinstance(body, declared)
        ):
            return body

        adapter = _type_adapter(declared)
        strict = self._settings.dispatch.strict_json
        try:
            if isinstance(body, memoryview):
                body = body.tobytes()
            if isinstance(body, _RAW_BODY_TYPES):
                return adapter.validate_json(body, strict=strict)
            return adapter.validate_python(body, strict=strict)
        except ValidationError as e:
            raise InputDeserializationError(
                f"Request body is not a valid {type_name(declared)}",
                details={
                    "input_type": type_name(declared),
                    "errors": e.errors(
                        include_url=False, include_context=False, include_input=False
                    ),
                },
            ) from e

    def _activate(self, registration: HandlerRegistration) -> Any:
        try:
            return registration.activate()
        except Exception as e:
            raise HandlerActivationError(
                f"Could not create handler {registration.name}: {e}",
                details={"handler": registration.name},
            ) from e

    async def _invoke(
        self, registration: HandlerRegistration, handler: Any, value: Any
    ) -> Any:
        args: tuple[Any, ...] = (value,) if registration.kind.is_typed else ()

        if registration.kind.is_async:
            pending = handler.post(*args)
            if not inspect.isawaitable(pending):
                raise HandlerContractError(
                    f"{registration.name}.post must return an awaitable, "
                    f"got {type(pending).__name__}",
                    details={"handler": registration.name},
                )
            return await pending

        if self._settings.dispatch.run_sync_in_threadpool:
            return await run_in_threadpool(handler.post, *args)
        return handler.post(*args)

    def _coerce(self, registration: HandlerRegistration, result: Any) -> Status:
        if inspect.iscoroutine(result):
            result.close()
            raise HandlerContractError(
                f"{registration.name}.post returned a coroutine but is registered "
                f"as {registration.kind.value}",
                details={"handler": registration.name},
            )
        if result is None:
            raise HandlerContractError(
                f"{registration.name}.post returned no status",
                details={"handler": registration.name},
            )
        try:
            return coerce_status(result)
        except InvalidStatusError as e:
            logger.error(
                "handler_returned_invalid_status",
                handler=registration.name,
                value=repr(result),
            )
            raise HandlerContractError(
                f"{registration.name}.post returned {result!r}, which is not a "
                "valid HTTP status",
                details={"handler": registration.name, "value": repr(result)},
            ) from e

    async def _collect_output(
        self, registration: HandlerRegistration, handler: Any
    ) -> Any:
        output = getattr(handler, "output", None)
        if not self._settings.dispatch.materialize_output or not is_lazy(output):
            return output

        if registration.kind.is_async:
            logger.warning(
                "lazy_output_after_completion",
                handler=registration.name,
                output_type=type(output).__name__,
            )
            return await amaterialize(output)
        if self._settings.dispatch.run_sync_in_threadpool and isinstance(
            output, Iterator
        ):
            return await run_in_threadpool(materialize, output)
        return await amaterialize(output)
