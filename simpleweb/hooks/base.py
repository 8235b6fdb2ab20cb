"""Hook protocol and the context handed to hooks."""

from collections.abc import Awaitable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from .events import HookEvent


@dataclass
class HookContext:
    """Data passed to every hook invocation."""

    event: HookEvent
    timestamp: datetime
    data: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    method: str | None = None
    path: str | None = None
    handler: str | None = None
    status_code: int | None = None
    error: Exception | None = None


@runtime_checkable
class Hook(Protocol):
    """Protocol for hook implementations; ``__call__`` may be sync or async."""

    @property
    def name(self) -> str: ...

    @property
    def events(self) -> list[HookEvent]: ...

    def __call__(self, context: HookContext) -> Awaitable[None] | None: ...
