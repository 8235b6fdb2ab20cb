"""POST handler contracts and their registry."""

from .contracts import (
    AsyncPostHandler,
    AsyncTypedPostHandler,
    HandlerKind,
    PostHandler,
    TypedPostHandler,
    amaterialize,
    classify_handler,
    http_method,
    materialize,
)
from .registry import HandlerRegistration, HandlerRegistry, normalize_path


__all__ = [
    "AsyncPostHandler",
    "AsyncTypedPostHandler",
    "HandlerKind",
    "HandlerRegistration",
    "HandlerRegistry",
    "PostHandler",
    "TypedPostHandler",
    "amaterialize",
    "classify_handler",
    "http_method",
    "materialize",
    "normalize_path",
]
