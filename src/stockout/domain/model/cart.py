"""Cart aggregate: pending stock-removal lines.

The Cart is immutable: every operation returns a new Cart and leaves
the receiver untouched.

Invariants:
- at most one line per ``item_id``
- every line has ``quantity >= 1``
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from stockout.domain.exceptions import EntityNotFoundError
from stockout.domain.model.item import Item, ItemId
from stockout.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLine:
    """One pending removal.

    ``name``, ``code`` and ``unit_price`` are snapshots taken when the
    item was first added; later catalog refreshes do not touch them.
    """

    item_id: ItemId
    code: str
    name: str
    unit_price: Money
    quantity: int

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Cart:
    """Ordered, immutable collection of pending removal lines."""

    lines: tuple[CartLine, ...] = ()

    # --- Mutations (each returns a new Cart) ----------------------------------

    def add(self, item: Item, quantity: int) -> Cart:
        """Add *quantity* units of *item*.

        Adding an item that is already in the cart sums the quantities
        onto the existing line; the line keeps its original price.
        Raises InvalidQuantity for anything below 1.
        """
        qty = Quantity(quantity).value

        existing = self.get(item.id)
        if existing is None:
            line = CartLine(
                item_id=item.id,
                code=item.code,
                name=item.name,
                unit_price=item.unit_price,  # <-- price snapshot
                quantity=qty,
            )
            return Cart(self.lines + (line,))

        merged = replace(existing, quantity=existing.quantity + qty)
        return self._replace_line(merged)

    def set_quantity(self, item_id: ItemId, quantity: int) -> Cart:
        """Overwrite a line's quantity, clamping anything below 1 to 1."""
        existing = self.get(item_id)
        if existing is None:
            raise EntityNotFoundError(f"Item {item_id!r} is not in the cart")
        return self._replace_line(replace(existing, quantity=max(1, int(quantity))))

    def remove(self, item_id: ItemId) -> Cart:
        """Drop the line for *item_id*; unknown ids are ignored."""
        if self.get(item_id) is None:
            return self
        return Cart(tuple(line for line in self.lines if line.item_id != item_id))

    def clear(self) -> Cart:
        return Cart()

    # --- Queries --------------------------------------------------------------

    def get(self, item_id: ItemId) -> CartLine | None:
        for line in self.lines:
            if line.item_id == item_id:
                return line
        return None

    def line_count(self) -> int:
        return len(self.lines)

    def total(self) -> Money:
        if not self.lines:
            return Money.zero()
        result = Money.zero(self.lines[0].unit_price.currency)
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def is_empty(self) -> bool:
        return not self.lines

    # --- Internal helpers -----------------------------------------------------

    def _replace_line(self, new_line: CartLine) -> Cart:
        return Cart(
            tuple(
                new_line if line.item_id == new_line.item_id else line
                for line in self.lines
            )
        )
