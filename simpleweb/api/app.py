"""FastAPI application factory mounting registered POST handlers."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.responses import Response

from simpleweb import __version__
from simpleweb.api.errors import setup_error_handlers
from simpleweb.api.responses import StarletteResponseWriter
from simpleweb.api.routes.health import router as health_router
from simpleweb.config.settings import Settings, get_settings
from simpleweb.core.logging import get_logger
from simpleweb.dispatch import DispatchRequest, Dispatcher
from simpleweb.handlers import HandlerRegistry
from simpleweb.hooks import HookManager


logger = get_logger(__name__)

# Every verb is routed to the dispatcher so the registry decides between
# 404 and 405 for paths and methods it does not serve.
DISPATCHED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    registry: HandlerRegistry,
    *,
    settings: Settings | None = None,
    hooks: HookManager | None = None,
) -> FastAPI:
    """Create a FastAPI application serving the handlers in ``registry``.

    Args:
        registry: Registered handlers
        settings: Optional settings; defaults to ``get_settings()``
        hooks: Optional hook manager receiving dispatch events

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    dispatcher = Dispatcher(registry, settings=settings, hooks=hooks)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "app_startup",
            version=__version__,
            handlers=len(registry),
            paths=registry.paths(),
        )
        yield
        logger.info("app_shutdown")

    app = FastAPI(
        title="SimpleWeb",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    setup_error_handlers(app)
    app.include_router(health_router, tags=["health"])

    async def dispatch_endpoint(request: Request, path: str) -> Response:
        body = await request.body()
        writer = StarletteResponseWriter()
        await dispatcher.dispatch(
            DispatchRequest(
                method=request.method,
                path=path,
                body=body or None,
                headers=dict(request.headers),
            ),
            writer,
        )
        return writer.response

    app.add_api_route(
        "/{path:path}",
        dispatch_endpoint,
        methods=DISPATCHED_METHODS,
        include_in_schema=False,
    )

    return app
