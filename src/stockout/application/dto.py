"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockout.domain.model.cart import Cart
from stockout.domain.model.item import Item


@dataclass(frozen=True)
class ItemDTO:
    """Output: one catalog item as displayed to the operator."""

    code: str
    name: str
    quantity_on_hand: int
    unit_price: str  # formatted, e.g. "IDR 2.50"

    @staticmethod
    def from_item(item: Item) -> ItemDTO:
        return ItemDTO(
            code=item.code,
            name=item.name,
            quantity_on_hand=item.quantity_on_hand,
            unit_price=str(item.unit_price),
        )


@dataclass(frozen=True)
class CandidateDTO:
    position: int  # 1-based, as typed by the operator
    item: ItemDTO
    highlighted: bool


@dataclass(frozen=True)
class CartLineDTO:
    code: str
    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    total: str

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        return CartDTO(
            lines=[
                CartLineDTO(
                    code=line.code,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in cart.lines
            ],
            total=str(cart.total()),
        )
