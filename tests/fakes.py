"""In-memory fake gateway for testing.

Implements the same abstract interface as the HTTP and JSON gateways
but keeps everything in a list. No network, no file I/O.
"""

from __future__ import annotations

import asyncio

from stockout.domain.exceptions import CommitError, NetworkError
from stockout.domain.model.commit import (
    CommitAck,
    CommitRequest,
    MovementDirection,
    StockMovement,
)
from stockout.domain.model.item import Item
from stockout.domain.model.value_objects import Money
from stockout.domain.repository.inventory_gateway import InventoryGateway


def make_item(
    id: int,
    code: str,
    name: str,
    price: str = "1.00",
    stock: int = 100,
) -> Item:
    return Item(
        id=id,
        code=code,
        name=name,
        quantity_on_hand=stock,
        unit_price=Money.of(price),
    )


BOLT = make_item(1, "A100", "Bolt", "2.50")
NUT = make_item(2, "A200", "Nut", "1.00")


class FakeInventoryGateway(InventoryGateway):

    def __init__(self, items: list[Item] | None = None) -> None:
        self.items: list[Item] = list(items or [])
        self.fetch_calls: list[str | None] = []
        self.commits: list[CommitRequest] = []
        self.movements: list[StockMovement] = []

        # Failure injection
        self.fail_fetch = False
        self.fail_commit_with: Exception | None = None

        # When set, commit_batch waits on it before answering
        self.commit_gate: asyncio.Event | None = None

    async def fetch_items(self, query: str | None = None) -> list[Item]:
        self.fetch_calls.append(query)
        if self.fail_fetch:
            raise NetworkError("Inventory service unreachable: connection refused")
        if query is None:
            return list(self.items)
        needle = query.casefold()
        return [item for item in self.items if item.matches(needle)]

    async def commit_batch(self, request: CommitRequest) -> CommitAck:
        self.commits.append(request)
        if self.commit_gate is not None:
            await self.commit_gate.wait()
        if self.fail_commit_with is not None:
            raise self.fail_commit_with

        before = list(self.items)
        try:
            for line in request.lines:
                self._adjust(line.item_id, -line.quantity)
        except CommitError:
            self.items = before
            raise
        return CommitAck(request_id=request.request_id, line_count=len(request.lines))

    async def record_movement(self, movement: StockMovement) -> None:
        self.movements.append(movement)
        delta = movement.quantity.value
        if movement.direction is MovementDirection.OUT:
            delta = -delta
        self._adjust(movement.item_id, delta)

    def _adjust(self, item_id, delta: int) -> None:
        for i, item in enumerate(self.items):
            if item.id == item_id:
                if item.quantity_on_hand + delta < 0:
                    raise CommitError(f"Insufficient stock for {item.code}")
                self.items[i] = Item(
                    id=item.id,
                    code=item.code,
                    name=item.name,
                    quantity_on_hand=item.quantity_on_hand + delta,
                    unit_price=item.unit_price,
                )
                return
        raise CommitError(f"Unknown item id {item_id!r}")
