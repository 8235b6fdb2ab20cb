"""Tests for custom exceptions."""

import pytest

from simpleweb.core.errors import (
    HandlerContractError,
    InputDeserializationError,
    MethodNotAllowedError,
    NoMatchingHandlerError,
    ResponseAlreadyWrittenError,
    RouteNotFoundError,
    SimpleWebError,
)


@pytest.mark.unit
class TestSimpleWebError:
    """Test SimpleWebError base exception."""

    def test_init_with_defaults(self) -> None:
        error = SimpleWebError("Test message")
        assert str(error) == "Test message"
        assert error.message == "Test message"
        assert error.error_type == "internal_server_error"
        assert error.status_code == 500
        assert error.details == {}

    def test_init_with_custom_values(self) -> None:
        details = {"field": "value"}
        error = SimpleWebError(
            message="Custom message",
            error_type="custom_error",
            status_code=400,
            details=details,
        )
        assert error.error_type == "custom_error"
        assert error.status_code == 400
        assert error.details == details


@pytest.mark.unit
class TestDispatchErrors:
    """Test the status codes carried by dispatch errors."""

    def test_input_deserialization_error_is_client_error(self) -> None:
        error = InputDeserializationError()
        assert error.status_code == 400
        assert error.error_type == "invalid_request_error"
        assert isinstance(error, SimpleWebError)

    def test_route_not_found(self) -> None:
        error = RouteNotFoundError("/missing")
        assert error.status_code == 404
        assert error.details == {"path": "/missing"}

    def test_method_not_allowed_keeps_allowed_methods(self) -> None:
        error = MethodNotAllowedError("GET", "/orders", ["POST"])
        assert error.status_code == 405
        assert error.allowed == ["POST"]
        assert "GET" in error.message

    def test_no_matching_handler_names_type(self) -> None:
        error = NoMatchingHandlerError("/orders", int)
        assert error.status_code == 415
        assert error.details["input_type"] == "int"

    def test_contract_errors_are_server_errors(self) -> None:
        assert HandlerContractError("bad").status_code == 500
        assert ResponseAlreadyWrittenError().status_code == 500
