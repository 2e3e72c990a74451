"""httpx-backed implementation of InventoryGateway.

Talks to the inventory service's JSON API:

    GET  /api/items                  full catalog
    GET  /api/items/search?q=...     server-side filtered catalog
    POST /api/stock/out/batch        batch stock-out
    POST /api/items/stock            single stock-in / stock-out
"""

from __future__ import annotations

from typing import Any

import httpx

from stockout.domain.exceptions import CommitError, NetworkError, ValidationError
from stockout.domain.model.commit import CommitAck, CommitRequest, StockMovement
from stockout.domain.model.item import Item
from stockout.domain.model.value_objects import Money
from stockout.domain.repository.inventory_gateway import InventoryGateway
from stockout.logging_config import get_logger

logger = get_logger("http")

DEFAULT_TIMEOUT = 10.0


class HttpInventoryGateway(InventoryGateway):

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    # --- InventoryGateway interface -------------------------------------------

    async def fetch_items(self, query: str | None = None) -> list[Item]:
        if query is None:
            path, params = "/api/items", None
        else:
            path, params = "/api/items/search", {"q": query}

        resp = await self._send("GET", path, params=params)
        if resp.is_error:
            raise NetworkError(
                f"Catalog fetch failed: {self._error_message(resp)}"
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise NetworkError("Catalog fetch returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise NetworkError("Catalog fetch returned an unexpected payload")
        return [self._to_domain(raw) for raw in payload.get("items") or []]

    async def commit_batch(self, request: CommitRequest) -> CommitAck:
        body = {
            "items": [
                {
                    "itemId": line.item_id,
                    "quantity": line.quantity,
                    "unitPrice": str(line.unit_price),
                }
                for line in request.lines
            ]
        }
        resp = await self._send(
            "POST",
            "/api/stock/out/batch",
            json=body,
            headers={"Idempotency-Key": request.request_id},
        )
        if resp.is_error:
            raise CommitError(self._error_message(resp))

        return CommitAck(
            request_id=request.request_id,
            line_count=len(request.lines),
            message=self._payload_message(resp) or "",
        )

    async def record_movement(self, movement: StockMovement) -> None:
        body = {
            "itemId": movement.item_id,
            "type": movement.direction.value,
            "jumlah": movement.quantity.value,
        }
        resp = await self._send("POST", "/api/items/stock", json=body)
        if resp.is_error:
            raise CommitError(self._error_message(resp))

    # --- Transport ------------------------------------------------------------

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                return await client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.warning(
                "inventory service unreachable",
                extra={"method": method, "path": path, "reason": str(exc)},
            )
            raise NetworkError(f"Inventory service unreachable: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "inventory service request failed",
                extra={"method": method, "path": path, "reason": str(exc)},
            )
            raise NetworkError(f"Inventory service request failed: {exc}") from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        try:
            return Item(
                id=raw["id"],
                code=str(raw.get("kode", raw.get("code", ""))),
                name=str(raw.get("nama", raw.get("name", ""))),
                quantity_on_hand=int(raw.get("quantity") or 0),
                unit_price=Money.of(raw.get("price") or 0),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"Malformed item record: {raw!r}") from exc

    @staticmethod
    def _payload_message(resp: httpx.Response) -> str | None:
        try:
            payload = resp.json()
        except ValueError:
            return None
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("error")
            if message:
                return str(message)
        return None

    @classmethod
    def _error_message(cls, resp: httpx.Response) -> str:
        """Service message verbatim, or a generic one with the status code."""
        return (
            cls._payload_message(resp)
            or f"Inventory service returned HTTP {resp.status_code}"
        )
