"""JSON-file-backed implementation of InventoryGateway.

A local stand-in for the inventory service, used when no service URL
is configured.  Items live in one JSON file; batch commits are
all-or-nothing: every line is validated before anything is written.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from stockout.domain.exceptions import CommitError
from stockout.domain.model.commit import (
    CommitAck,
    CommitRequest,
    MovementDirection,
    StockMovement,
)
from stockout.domain.model.item import Item, ItemId
from stockout.domain.model.value_objects import Money
from stockout.domain.repository.inventory_gateway import InventoryGateway


class JsonInventoryGateway(InventoryGateway):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- InventoryGateway interface -------------------------------------------

    async def fetch_items(self, query: str | None = None) -> list[Item]:
        items = [self._to_domain(raw) for raw in self._load_raw()]
        if query is None:
            return items
        needle = query.casefold()
        return [item for item in items if item.matches(needle)]

    async def commit_batch(self, request: CommitRequest) -> CommitAck:
        records = self._load_raw()
        by_id = {raw["id"]: raw for raw in records}

        # Phase 1: validate every line before touching anything
        for line in request.lines:
            raw = self._require(by_id, line.item_id)
            if line.quantity > raw["quantity"]:
                raise CommitError(
                    f"Insufficient stock for {raw['kode']} "
                    f"(need {line.quantity}, have {raw['quantity']})"
                )

        # Phase 2: mutate and persist
        for line in request.lines:
            by_id[line.item_id]["quantity"] -= line.quantity
        self._persist_raw(records)

        return CommitAck(
            request_id=request.request_id,
            line_count=len(request.lines),
            message="Stock updated",
        )

    async def record_movement(self, movement: StockMovement) -> None:
        records = self._load_raw()
        raw = self._require({r["id"]: r for r in records}, movement.item_id)

        qty = movement.quantity.value
        if movement.direction is MovementDirection.OUT:
            if qty > raw["quantity"]:
                raise CommitError(
                    f"Insufficient stock for {raw['kode']} "
                    f"(need {qty}, have {raw['quantity']})"
                )
            qty = -qty
        raw["quantity"] += qty
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        return Item(
            id=raw["id"],
            code=raw["kode"],
            name=raw["nama"],
            quantity_on_hand=raw["quantity"],
            unit_price=Money(Decimal(raw["price"]), raw.get("currency", "IDR")),
        )

    @staticmethod
    def _to_raw(item: Item) -> dict:
        return {
            "id": item.id,
            "kode": item.code,
            "nama": item.name,
            "quantity": item.quantity_on_hand,
            "price": str(item.unit_price.amount),
            "currency": item.unit_price.currency,
        }

    def seed(self, items: list[Item]) -> None:
        """Overwrite the file with *items* (fixtures and demos)."""
        self._persist_raw([self._to_raw(item) for item in items])

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _require(by_id: dict[ItemId, dict], item_id: ItemId) -> dict:
        raw = by_id.get(item_id)
        if raw is None:
            raise CommitError(f"Unknown item id {item_id!r}")
        return raw

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
