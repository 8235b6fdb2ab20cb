"""Health check endpoint."""

from typing import Any

from fastapi import APIRouter, Request, Response

from simpleweb.core import __version__


router = APIRouter()


@router.get("/health")
async def health_check(request: Request, response: Response) -> dict[str, Any]:
    """Liveness check reporting the version and the number of registered handlers."""
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"

    dispatcher = request.app.state.dispatcher
    return {
        "status": "pass",
        "version": __version__,
        "handlers": len(dispatcher.registry),
    }
