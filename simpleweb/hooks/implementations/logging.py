"""Structured logging hook implementation."""

from typing import Any

import structlog

from simpleweb.core.logging import get_logger

from ..base import HookContext
from ..events import HookEvent


class LoggingHook:
    """Structured logging for all events"""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        """Initialize logging hook.

        Args:
            logger: Optional structlog logger instance. If None, creates a new one.
        """
        self.logger = logger or get_logger(__name__)
        self._name = "logging_hook"
        self._events = list(HookEvent)

    @property
    def name(self) -> str:
        return self._name

    @property
    def events(self) -> list[HookEvent]:
        return self._events

    async def __call__(self, context: HookContext) -> None:
        """Log event with structured context."""
        log_data: dict[str, Any] = {
            "hook_event": context.event.value,
            "timestamp": context.timestamp.isoformat(),
        }

        if context.data:
            log_data["data"] = context.data
        if context.metadata:
            log_data["metadata"] = context.metadata

        for key in ("method", "path", "handler", "status_code"):
            value = getattr(context, key)
            if value is not None:
                log_data[key] = value

        if context.error:
            log_data["error"] = {
                "type": type(context.error).__name__,
                "message": str(context.error),
            }
            self.logger.warning("hook_event", **log_data)
        else:
            self.logger.debug("hook_event", **log_data)
