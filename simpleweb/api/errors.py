"""Error handlers mapping dispatch failures to JSON responses."""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from simpleweb.core.errors import MethodNotAllowedError, SimpleWebError
from simpleweb.core.logging import get_logger


logger = get_logger(__name__)


def setup_error_handlers(app: FastAPI) -> None:
    """Setup error handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(SimpleWebError)
    async def simpleweb_error_handler(
        request: Request, exc: SimpleWebError
    ) -> JSONResponse:
        log_kwargs = {
            "error_type": exc.error_type,
            "error_message": exc.message,
            "status_code": exc.status_code,
            "request_method": request.method,
            "request_url": str(request.url.path),
        }
        # Handler defects are server errors; bad requests are the client's
        if exc.status_code >= 500:
            logger.error("request_failed", **log_kwargs)
        else:
            logger.info("request_rejected", **log_kwargs)

        headers: dict[str, str] = {}
        if isinstance(exc, MethodNotAllowedError):
            headers["Allow"] = ", ".join(exc.allowed)

        content: dict[str, object] = {
            "type": exc.error_type,
            "message": exc.message,
        }
        if exc.status_code < 500 and exc.details:
            content["details"] = jsonable_encoder(exc.details)

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": content},
            headers=headers or None,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_error",
            error_type=type(exc).__name__,
            error_message=str(exc),
            request_method=request.method,
            request_url=str(request.url.path),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "type": "internal_server_error",
                    "message": "Internal server error",
                }
            },
        )
