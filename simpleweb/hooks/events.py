"""Event definitions for the hook system."""

from enum import Enum


class HookEvent(str, Enum):
    """Event types that can trigger hooks"""

    # Dispatch Lifecycle
    DISPATCH_STARTED = "dispatch.started"
    HANDLER_ACTIVATED = "handler.activated"
    HANDLER_COMPLETED = "handler.completed"
    RESPONSE_WRITTEN = "response.written"
    DISPATCH_FAILED = "dispatch.failed"
