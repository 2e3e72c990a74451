"""CatalogSnapshot: the set of items as last fetched.

A snapshot is never patched in place: a refresh builds a new one and the
old one is simply dropped.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from stockout.domain.exceptions import ValidationError
from stockout.domain.model.item import Item, ItemId


class CatalogSnapshot:
    """Ordered, immutable sequence of items with unique ids."""

    __slots__ = ("_items", "_by_id")

    def __init__(self, items: Iterable[Item] = ()) -> None:
        ordered = tuple(items)
        by_id: dict[ItemId, Item] = {}
        for item in ordered:
            if item.id in by_id:
                raise ValidationError(f"Duplicate item id {item.id!r} in catalog")
            by_id[item.id] = item
        self._items = ordered
        self._by_id = by_id

    @classmethod
    def empty(cls) -> CatalogSnapshot:
        return cls(())

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    def find(self, item_id: ItemId) -> Item | None:
        return self._by_id.get(item_id)

    def find_by_code(self, code: str) -> Item | None:
        """Exact, case-insensitive lookup by business code."""
        wanted = code.strip().casefold()
        if not wanted:
            return None
        for item in self._items:
            if item.code.casefold() == wanted:
                return item
        return None

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"CatalogSnapshot({len(self._items)} items)"
