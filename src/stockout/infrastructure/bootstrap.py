"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Configuration comes from the environment:

    STOCKOUT_API_URL        inventory service base URL (enables HTTP)
    STOCKOUT_HTTP_TIMEOUT   seconds, default 10
    STOCKOUT_DATA_DIR       directory for the local JSON stand-in
    STOCKOUT_LOG_LEVEL      default WARNING
"""

from __future__ import annotations

import os
from pathlib import Path

from stockout.application.catalog_repository import CatalogRepository
from stockout.application.checkout import CheckoutSubmitter
from stockout.application.record_movement import RecordMovementHandler
from stockout.application.stock_out_session import StockOutSession
from stockout.domain.repository.inventory_gateway import InventoryGateway
from stockout.infrastructure.http.http_inventory_gateway import (
    DEFAULT_TIMEOUT,
    HttpInventoryGateway,
)
from stockout.infrastructure.persistence.json_inventory_gateway import (
    JsonInventoryGateway,
)
from stockout.logging_config import configure_logging

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def setup_logging() -> None:
    configure_logging(level=os.getenv("STOCKOUT_LOG_LEVEL", "WARNING").upper())


def inventory_gateway() -> InventoryGateway:
    api_url = os.getenv("STOCKOUT_API_URL", "")
    if api_url:
        timeout = float(os.getenv("STOCKOUT_HTTP_TIMEOUT", DEFAULT_TIMEOUT))
        return HttpInventoryGateway(api_url, timeout=timeout)

    data_dir = Path(os.getenv("STOCKOUT_DATA_DIR") or _DEFAULT_DATA_DIR)
    return JsonInventoryGateway(data_dir / "items.json")


def catalog_repository(gateway: InventoryGateway) -> CatalogRepository:
    return CatalogRepository(gateway)


def stock_out_session() -> StockOutSession:
    gateway = inventory_gateway()
    catalog = catalog_repository(gateway)
    return StockOutSession(catalog, CheckoutSubmitter(gateway, catalog))


def record_movement_handler() -> RecordMovementHandler:
    gateway = inventory_gateway()
    return RecordMovementHandler(gateway, catalog_repository(gateway))
