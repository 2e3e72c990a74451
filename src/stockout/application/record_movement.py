"""Application service: Record Movement use case.

A single stock-in or stock-out for one item, outside the cart.  The
item is resolved by code against the current catalog snapshot.
"""

from __future__ import annotations

from stockout.application.catalog_repository import CatalogRepository
from stockout.domain.exceptions import EntityNotFoundError
from stockout.domain.model.commit import MovementDirection, StockMovement
from stockout.domain.model.item import Item
from stockout.domain.model.value_objects import Quantity
from stockout.domain.repository.inventory_gateway import InventoryGateway
from stockout.logging_config import get_logger

logger = get_logger("movement")


class RecordMovementHandler:

    def __init__(
        self,
        gateway: InventoryGateway,
        catalog: CatalogRepository,
    ) -> None:
        self._gateway = gateway
        self._catalog = catalog

    async def handle(
        self,
        code: str,
        direction: MovementDirection,
        quantity: int,
    ) -> Item:
        """Apply the movement and return the item as it is after refresh."""
        qty = Quantity(quantity)

        item = self._catalog.find_by_code(code)
        if item is None:
            # Snapshot may be stale or not loaded yet
            await self._catalog.refresh()
            item = self._catalog.find_by_code(code)
        if item is None:
            raise EntityNotFoundError(f"Item not found: '{code}'")

        await self._gateway.record_movement(
            StockMovement(item_id=item.id, direction=direction, quantity=qty)
        )
        logger.info(
            "stock movement recorded",
            extra={"code": item.code, "direction": direction, "quantity": qty.value},
        )

        await self._catalog.refresh()
        return self._catalog.find(item.id) or item
