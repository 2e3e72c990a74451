"""Abstract gateway to the external inventory service.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (HTTP, JSON file) live in the
infrastructure layer.

Implementations translate transport failures into NetworkError and
service-side rejections into CommitError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockout.domain.model.commit import CommitAck, CommitRequest, StockMovement
from stockout.domain.model.item import Item


class InventoryGateway(ABC):

    @abstractmethod
    async def fetch_items(self, query: str | None = None) -> list[Item]:
        """Return every item, or only those the service matches to *query*."""

    @abstractmethod
    async def commit_batch(self, request: CommitRequest) -> CommitAck:
        """Apply every line of *request* atomically."""

    @abstractmethod
    async def record_movement(self, movement: StockMovement) -> None:
        """Apply a single stock-in or stock-out movement."""
