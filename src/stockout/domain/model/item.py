"""Item: a sellable stock item as known to the inventory service.

The inventory service owns items.  This side only ever holds a
read-only, possibly stale copy of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from stockout.domain.exceptions import ValidationError
from stockout.domain.model.value_objects import Money

# Opaque identifier assigned by the inventory service.
ItemId = Union[int, str]


@dataclass(frozen=True)
class Item:
    """Read-only view of one inventory record."""

    id: ItemId
    code: str
    name: str
    quantity_on_hand: int
    unit_price: Money

    def __post_init__(self) -> None:
        if self.quantity_on_hand < 0:
            raise ValidationError(
                f"Quantity on hand for {self.code} cannot be negative, "
                f"got {self.quantity_on_hand}"
            )

    def matches(self, needle: str) -> bool:
        """True if *needle* (already casefolded) occurs in code or name."""
        return needle in self.code.casefold() or needle in self.name.casefold()
