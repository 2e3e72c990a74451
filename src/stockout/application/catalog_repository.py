"""Application service: Catalog Repository.

Holds the most recently fetched CatalogSnapshot.  A load swaps the
whole snapshot at once, and only after the fetch has completed, so
readers see the previous snapshot for as long as a load is outstanding.
"""

from __future__ import annotations

from stockout.domain.exceptions import NetworkError
from stockout.domain.model.catalog import CatalogSnapshot
from stockout.domain.model.item import Item, ItemId
from stockout.domain.repository.inventory_gateway import InventoryGateway
from stockout.logging_config import get_logger

logger = get_logger("catalog")


class CatalogRepository:

    def __init__(self, gateway: InventoryGateway) -> None:
        self._gateway = gateway
        self._snapshot = CatalogSnapshot.empty()
        self._last_query: str | None = None

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def last_query(self) -> str | None:
        return self._last_query

    async def load(self, query: str | None = None) -> CatalogSnapshot:
        """Fetch the catalog and replace the snapshot.

        Args:
            query: Optional server-side filter.  ``None`` loads everything.

        On NetworkError the previous snapshot is kept and the error is
        re-raised; there is no retry.
        """
        try:
            items = await self._gateway.fetch_items(query)
        except NetworkError:
            logger.warning(
                "catalog load failed, keeping previous snapshot",
                extra={"query": query, "kept_items": len(self._snapshot)},
            )
            raise

        self._snapshot = CatalogSnapshot(items)
        self._last_query = query
        logger.info(
            "catalog loaded",
            extra={"query": query, "item_count": len(self._snapshot)},
        )
        return self._snapshot

    async def refresh(self) -> CatalogSnapshot:
        """Repeat the last load, with the same query if there was one."""
        return await self.load(self._last_query)

    def find(self, item_id: ItemId) -> Item | None:
        return self._snapshot.find(item_id)

    def find_by_code(self, code: str) -> Item | None:
        return self._snapshot.find_by_code(code)
