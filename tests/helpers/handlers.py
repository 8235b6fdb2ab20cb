"""Sample handlers covering every POST contract shape."""

import asyncio
from typing import Any

from pydantic import BaseModel

from simpleweb.core import status
from simpleweb.core.status import Status
from simpleweb.handlers import (
    AsyncPostHandler,
    AsyncTypedPostHandler,
    PostHandler,
    TypedPostHandler,
    materialize,
)


class Order(BaseModel):
    item: str
    quantity: int = 1


class PriorityOrder(Order):
    priority: int = 1


class Refund(BaseModel):
    order_id: int
    reason: str


class CreateWidget(PostHandler):
    """Returns a bare integer status."""

    def post(self) -> int:
        return 201


class CreateWidgetWithLocation(PostHandler):
    def __init__(self) -> None:
        self.output: Any = None

    def post(self) -> Status:
        self.output = {"id": 42}
        return Status.created_at("/widgets/42")


class AcceptJob(AsyncPostHandler):
    def __init__(self) -> None:
        self.output: Any = None

    async def post(self) -> Status:
        await asyncio.sleep(0)
        self.output = {"job": "queued"}
        return status.ACCEPTED


class PlaceOrder(TypedPostHandler[Order]):
    """Records the input it receives so tests can inspect it."""

    received: list[Order] = []

    def __init__(self) -> None:
        self.output: Any = None

    def post(self, input: Order) -> int:
        PlaceOrder.received.append(input)
        self.output = {"item": input.item, "quantity": input.quantity}
        return 201


class PlaceOrderAsync(AsyncTypedPostHandler[Order]):
    def __init__(self) -> None:
        self.output: Any = None

    async def post(self, input: Order) -> Status:
        await asyncio.sleep(0)
        self.output = {"item": input.item, "type": type(input).__name__}
        return status.CREATED


class LazyOutputHandler(PostHandler):
    """Leaves a generator as output for the dispatcher to materialize."""

    def __init__(self) -> None:
        self.output: Any = None

    def post(self) -> int:
        self.output = (n * n for n in range(4))
        return 200


class EagerAsyncOutputHandler(AsyncPostHandler):
    """Materializes its lazy output before completing."""

    def __init__(self) -> None:
        self.output: Any = None

    async def post(self) -> int:
        self.output = materialize(map(str, range(3)))
        return 200


class BrokenStatusHandler(PostHandler):
    def post(self) -> int:
        return 700


class NoStatusHandler(PostHandler):
    def post(self) -> Any:
        return None


class FailingHandler(PostHandler):
    def post(self) -> int:
        raise RuntimeError("boom")


class DuckTypedHandler:
    """Implements no contract base; registered with an explicit kind."""

    def post(self, input: Refund) -> int:
        return 202
