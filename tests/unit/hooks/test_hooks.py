"""Tests for the hook system and its dispatch events."""

from typing import Any
from unittest.mock import Mock

import pytest

from simpleweb.core.errors import ConfigurationError, HandlerContractError
from simpleweb.dispatch import BufferedResponseWriter, DispatchRequest, Dispatcher
from simpleweb.handlers import HandlerRegistry
from simpleweb.hooks import HookContext, HookEvent, HookManager, HookRegistry
from simpleweb.hooks.implementations import LoggingHook
from tests.helpers.handlers import BrokenStatusHandler, CreateWidget


class RecordingHook:
    """Sync hook remembering every context it sees."""

    def __init__(self, events: list[HookEvent] | None = None) -> None:
        self.contexts: list[HookContext] = []
        self._events = events or list(HookEvent)

    @property
    def name(self) -> str:
        return "recording_hook"

    @property
    def events(self) -> list[HookEvent]:
        return self._events

    def __call__(self, context: HookContext) -> None:
        self.contexts.append(context)


class FailingHook(RecordingHook):
    @property
    def name(self) -> str:
        return "failing_hook"

    def __call__(self, context: HookContext) -> None:
        raise RuntimeError("hook exploded")


@pytest.mark.unit
class TestHookRegistry:
    def test_register_for_declared_events(self, hook_registry: HookRegistry) -> None:
        hook = RecordingHook([HookEvent.DISPATCH_STARTED])
        hook_registry.register(hook)
        assert hook_registry.get_hooks(HookEvent.DISPATCH_STARTED) == (hook,)
        assert hook_registry.get_hooks(HookEvent.DISPATCH_FAILED) == ()

    def test_registering_twice_is_a_no_op(self, hook_registry: HookRegistry) -> None:
        hook = RecordingHook([HookEvent.DISPATCH_STARTED])
        hook_registry.register(hook)
        hook_registry.register(hook)
        assert hook_registry.get_hooks(HookEvent.DISPATCH_STARTED) == (hook,)

    def test_hook_without_events_is_rejected(self, hook_registry: HookRegistry) -> None:
        hook = Mock()
        hook.name = "silent_hook"
        hook.events = []

        with pytest.raises(ConfigurationError):
            hook_registry.register(hook)

    def test_get_hooks_is_a_snapshot(self, hook_registry: HookRegistry) -> None:
        first = RecordingHook([HookEvent.DISPATCH_STARTED])
        hook_registry.register(first)
        snapshot = hook_registry.get_hooks(HookEvent.DISPATCH_STARTED)

        hook_registry.register(RecordingHook([HookEvent.DISPATCH_STARTED]))

        assert snapshot == (first,)
        assert len(hook_registry.get_hooks(HookEvent.DISPATCH_STARTED)) == 2


@pytest.mark.unit
class TestHookManager:
    async def test_emit_builds_context(
        self, hook_registry: HookRegistry, hooks: HookManager
    ) -> None:
        hook = RecordingHook()
        hook_registry.register(hook)

        await hooks.emit(
            HookEvent.RESPONSE_WRITTEN, {"duration_ms": 1.5}, path="/x", status_code=201
        )

        (context,) = hook.contexts
        assert context.event is HookEvent.RESPONSE_WRITTEN
        assert context.data == {"duration_ms": 1.5}
        assert context.path == "/x"
        assert context.status_code == 201

    async def test_async_hooks_are_awaited(
        self, hook_registry: HookRegistry, hooks: HookManager
    ) -> None:
        seen: list[HookEvent] = []

        class AsyncHook(RecordingHook):
            async def __call__(self, context: HookContext) -> None:  # type: ignore[override]
                seen.append(context.event)

        hook_registry.register(AsyncHook([HookEvent.DISPATCH_STARTED]))
        await hooks.emit(HookEvent.DISPATCH_STARTED)

        assert seen == [HookEvent.DISPATCH_STARTED]

    async def test_failing_hook_does_not_stop_others(
        self, hook_registry: HookRegistry, hooks: HookManager
    ) -> None:
        recorder = RecordingHook()
        hook_registry.register(FailingHook())
        hook_registry.register(recorder)

        await hooks.emit(HookEvent.DISPATCH_STARTED)

        assert len(recorder.contexts) == 1


@pytest.mark.unit
class TestDispatchEvents:
    async def test_successful_dispatch_event_sequence(
        self,
        registry: HandlerRegistry,
        hook_registry: HookRegistry,
        dispatcher: Dispatcher,
    ) -> None:
        recorder = RecordingHook()
        hook_registry.register(recorder)
        registry.register(CreateWidget, "/widgets")

        await dispatcher.dispatch(
            DispatchRequest(method="POST", path="/widgets"), BufferedResponseWriter()
        )

        assert [c.event for c in recorder.contexts] == [
            HookEvent.DISPATCH_STARTED,
            HookEvent.HANDLER_ACTIVATED,
            HookEvent.HANDLER_COMPLETED,
            HookEvent.RESPONSE_WRITTEN,
        ]
        assert recorder.contexts[-1].status_code == 201
        assert recorder.contexts[-1].handler is not None
        assert recorder.contexts[-1].handler.endswith("CreateWidget")

    async def test_failed_dispatch_emits_failure(
        self,
        registry: HandlerRegistry,
        hook_registry: HookRegistry,
        dispatcher: Dispatcher,
    ) -> None:
        recorder = RecordingHook([HookEvent.DISPATCH_FAILED])
        hook_registry.register(recorder)
        registry.register(BrokenStatusHandler, "/broken")

        with pytest.raises(HandlerContractError):
            await dispatcher.dispatch(
                DispatchRequest(method="POST", path="/broken"), BufferedResponseWriter()
            )

        (context,) = recorder.contexts
        assert context.error is not None
        assert context.path == "/broken"


@pytest.mark.unit
class TestLoggingHook:
    async def test_logs_every_event(self) -> None:
        logger = Mock()
        hook = LoggingHook(logger=logger)
        assert set(hook.events) == set(HookEvent)

        manager = HookManager()
        manager.registry.register(hook)
        await manager.emit(HookEvent.HANDLER_COMPLETED, method="POST", status_code=200)

        logger.debug.assert_called_once()
        _, kwargs = logger.debug.call_args
        assert kwargs["hook_event"] == "handler.completed"
        assert kwargs["status_code"] == 200

    async def test_errors_are_logged_as_warnings(self) -> None:
        logger = Mock()
        manager = HookManager()
        manager.registry.register(LoggingHook(logger=logger))

        error: Any = RuntimeError("bad")
        await manager.emit(HookEvent.DISPATCH_FAILED, error=error)

        _, kwargs = logger.warning.call_args
        assert kwargs["error"] == {"type": "RuntimeError", "message": "bad"}
