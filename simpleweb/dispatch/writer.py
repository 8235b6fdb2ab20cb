"""Response writers: the boundary where a resolved status becomes a response."""

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from simpleweb.core.errors import ResponseAlreadyWrittenError
from simpleweb.core.status import Status


@runtime_checkable
class ResponseWriter(Protocol):
    """Consumes the final status and output of a handler."""

    async def write(self, status: Status, output: Any) -> None: ...


class SingleResponseWriter(ABC):
    """Base writer that refuses to write more than one response."""

    def __init__(self) -> None:
        self._written = False

    @property
    def written(self) -> bool:
        return self._written

    async def write(self, status: Status, output: Any) -> None:
        """Write the response.

        Raises:
            ResponseAlreadyWrittenError: If a response was already written
        """
        if self._written:
            raise ResponseAlreadyWrittenError()
        self._written = True
        await self._write(status, output)

    @abstractmethod
    async def _write(self, status: Status, output: Any) -> None:
        """Produce the actual response."""


class BufferedResponseWriter(SingleResponseWriter):
    """Keeps the written status and output in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.status: Status | None = None
        self.output: Any = None

    async def _write(self, status: Status, output: Any) -> None:
        self.status = status
        self.output = output
