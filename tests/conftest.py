"""Shared test fixtures and configuration for SimpleWeb tests."""

from collections.abc import Generator

import pytest

from simpleweb.config import DispatchSettings, Settings
from simpleweb.core.logging import setup_logging
from simpleweb.dispatch import BufferedResponseWriter, Dispatcher
from simpleweb.handlers import HandlerRegistry
from simpleweb.hooks import HookManager, HookRegistry
from tests.helpers.handlers import PlaceOrder


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom settings."""
    setup_logging(json_logs=False, log_level_name="DEBUG")


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, independent of the environment."""
    return Settings(dispatch=DispatchSettings())


@pytest.fixture
def registry() -> HandlerRegistry:
    return HandlerRegistry()


@pytest.fixture
def hook_registry() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def hooks(hook_registry: HookRegistry) -> HookManager:
    return HookManager(hook_registry)


@pytest.fixture
def dispatcher(
    registry: HandlerRegistry, settings: Settings, hooks: HookManager
) -> Dispatcher:
    return Dispatcher(registry, settings=settings, hooks=hooks)


@pytest.fixture
def writer() -> BufferedResponseWriter:
    return BufferedResponseWriter()


@pytest.fixture(autouse=True)
def reset_recorded_orders() -> Generator[None, None, None]:
    PlaceOrder.received.clear()
    yield
    PlaceOrder.received.clear()
