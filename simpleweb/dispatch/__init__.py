"""Dispatch core for registered POST handlers."""

from .dispatcher import DispatchRequest, DispatchResult, Dispatcher
from .writer import BufferedResponseWriter, ResponseWriter, SingleResponseWriter


__all__ = [
    "BufferedResponseWriter",
    "DispatchRequest",
    "DispatchResult",
    "Dispatcher",
    "ResponseWriter",
    "SingleResponseWriter",
]
