"""Batch commit and stock movement types.

A CommitRequest is frozen at the moment checkout is invoked; later
edits to the cart never leak into a request already on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from stockout.domain.model.cart import Cart
from stockout.domain.model.item import ItemId
from stockout.domain.model.value_objects import Quantity


class CheckoutStatus(Enum):
    IDLE = "IDLE"
    SUBMITTING = "SUBMITTING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class CommitLine:
    """One item removal as sent on the wire."""

    item_id: ItemId
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class CommitRequest:
    """One atomic batch of stock removals.

    ``request_id`` is generated client-side and travels with the request
    so the service can spot a retried batch it has already applied.
    """

    request_id: str
    lines: tuple[CommitLine, ...]

    @staticmethod
    def from_cart(cart: Cart, request_id: str | None = None) -> CommitRequest:
        return CommitRequest(
            request_id=request_id or uuid4().hex,
            lines=tuple(
                CommitLine(
                    item_id=line.item_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price.amount,
                )
                for line in cart.lines
            ),
        )


@dataclass(frozen=True)
class CommitAck:
    request_id: str
    line_count: int
    message: str = ""


class MovementDirection(Enum):
    IN = "masuk"
    OUT = "keluar"


@dataclass(frozen=True)
class StockMovement:
    """A single-item stock adjustment outside the cart."""

    item_id: ItemId
    direction: MovementDirection
    quantity: Quantity
