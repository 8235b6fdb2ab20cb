"""Built-in hook implementations."""

from .logging import LoggingHook


__all__ = ["LoggingHook"]
