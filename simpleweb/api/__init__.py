"""ASGI integration: serve registered handlers with FastAPI."""

from .app import create_app
from .responses import StarletteResponseWriter


__all__ = ["StarletteResponseWriter", "create_app"]
