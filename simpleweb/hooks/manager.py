"""Hook execution manager.

Emits dispatch lifecycle events to registered hooks. A failing hook is
logged and skipped; it never affects the request being dispatched.
"""

import asyncio
from datetime import UTC, datetime
from typing import Any

from simpleweb.core.logging import get_logger

from .base import Hook, HookContext
from .events import HookEvent
from .registry import HookRegistry


class HookManager:
    """Manages hook execution with error isolation and async/sync support."""

    def __init__(self, registry: HookRegistry | None = None):
        """Initialize the hook manager.

        Args:
            registry: The hook registry to get hooks from
        """
        self._registry = registry or HookRegistry()
        self._logger = get_logger(__name__)

    @property
    def registry(self) -> HookRegistry:
        return self._registry

    async def emit(
        self, event: HookEvent, data: dict[str, Any] | None = None, **kwargs: Any
    ) -> None:
        """Emit an event to all registered hooks.

        Args:
            event: The event to emit
            data: Optional data dictionary to include in context
            **kwargs: Additional context fields (method, path, handler, status_code, error)
        """
        hooks = self._registry.get_hooks(event)
        if not hooks:
            return

        context = HookContext(
            event=event,
            timestamp=datetime.now(UTC),
            data=data or {},
            metadata={},
            **kwargs,
        )

        for hook in hooks:
            try:
                await self._execute_hook(hook, context)
            except Exception as e:
                self._logger.error(
                    "hook_failed",
                    hook=hook.name,
                    hook_event=event.value,
                    error=str(e),
                    exc_info=e,
                )

    async def _execute_hook(self, hook: Hook, context: HookContext) -> None:
        result = hook(context)
        if asyncio.iscoroutine(result):
            await result
