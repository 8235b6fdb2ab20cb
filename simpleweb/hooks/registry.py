"""Registry mapping dispatch events to the hooks observing them."""

from collections import defaultdict

from simpleweb.core.errors import ConfigurationError
from simpleweb.core.logging import get_logger

from .base import Hook
from .events import HookEvent


logger = get_logger(__name__)


class HookRegistry:
    """Hooks per dispatch event, in registration order.

    Hooks are registered at application setup. ``get_hooks`` hands out a
    snapshot, so an emission in progress never sees later registrations.
    """

    def __init__(self) -> None:
        self._hooks: dict[HookEvent, list[Hook]] = defaultdict(list)

    def register(self, hook: Hook) -> None:
        """Register a hook for every event it declares.

        Registering the same hook twice for an event is a no-op.

        Raises:
            ConfigurationError: If the hook declares no events
        """
        events = list(hook.events)
        if not events:
            raise ConfigurationError(
                f"Hook '{hook.name}' does not observe any dispatch event"
            )

        for event in events:
            if hook in self._hooks[event]:
                continue
            self._hooks[event].append(hook)
            logger.debug("hook_registered", hook=hook.name, hook_event=event.value)

    def get_hooks(self, event: HookEvent) -> tuple[Hook, ...]:
        return tuple(self._hooks.get(event, ()))
