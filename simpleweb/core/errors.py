"""Custom exceptions for SimpleWeb."""

from typing import Any


class SimpleWebError(Exception):
    """Base exception for SimpleWeb errors."""

    def __init__(
        self,
        message: str,
        error_type: str = "internal_server_error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.details = details or {}


class ConfigurationError(SimpleWebError):
    """Raised when configuration loading or validation fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_type="configuration_error",
            status_code=500,
            details=details,
        )


class HandlerRegistrationError(SimpleWebError):
    """A handler class cannot be registered (no shape, several shapes, clash)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_type="handler_registration_error",
            status_code=500,
            details=details,
        )


class InvalidStatusError(SimpleWebError):
    """A value cannot be interpreted as an HTTP status."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            message=f"Invalid HTTP status: {value!r}",
            error_type="invalid_status_error",
            status_code=500,
            details={"value": repr(value)},
        )
        self.value = value


class HandlerContractError(SimpleWebError):
    """A handler broke its contract (bad return value, missing awaitable)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_type="handler_contract_error",
            status_code=500,
            details=details,
        )


class HandlerActivationError(SimpleWebError):
    """The handler instance could not be created for a request."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            error_type="handler_activation_error",
            status_code=500,
            details=details,
        )


class InputDeserializationError(SimpleWebError):
    """The request body could not be turned into the handler's input model (400)."""

    def __init__(
        self, message: str = "Invalid request body", details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message=message,
            error_type="invalid_request_error",
            status_code=400,
            details=details,
        )


class RouteNotFoundError(SimpleWebError):
    """No handler is registered for the path (404)."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"No handler registered for '{path}'",
            error_type="not_found_error",
            status_code=404,
            details={"path": path},
        )


class MethodNotAllowedError(SimpleWebError):
    """The path exists but not for the requested method (405)."""

    def __init__(self, method: str, path: str, allowed: list[str]) -> None:
        super().__init__(
            message=f"Method {method} not allowed for '{path}'",
            error_type="method_not_allowed_error",
            status_code=405,
            details={"method": method, "path": path, "allowed": allowed},
        )
        self.allowed = allowed


class NoMatchingHandlerError(SimpleWebError):
    """No typed handler on the path accepts the request's input type (415)."""

    def __init__(self, path: str, input_type: Any) -> None:
        type_name = getattr(input_type, "__name__", repr(input_type))
        super().__init__(
            message=f"No handler for '{path}' accepts input of type {type_name}",
            error_type="unsupported_input_error",
            status_code=415,
            details={"path": path, "input_type": type_name},
        )


class ResponseAlreadyWrittenError(SimpleWebError):
    """A response writer was asked to write a second response."""

    def __init__(self) -> None:
        super().__init__(
            message="Response has already been written",
            error_type="response_already_written_error",
            status_code=500,
        )
