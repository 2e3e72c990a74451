"""Application service: Checkout Submitter.

Turns the cart into one CommitRequest, sends it to the inventory
service and refreshes the catalog afterwards.  Only one batch may be
outstanding at a time; ``status`` is the guard.

    IDLE / SUCCEEDED / FAILED --commit--> SUBMITTING --> SUCCEEDED | FAILED
"""

from __future__ import annotations

from stockout.application.catalog_repository import CatalogRepository
from stockout.domain.exceptions import (
    AlreadyInFlightError,
    CommitError,
    DomainException,
    EmptyCartError,
    NetworkError,
)
from stockout.domain.model.cart import Cart
from stockout.domain.model.commit import CheckoutStatus, CommitAck, CommitRequest
from stockout.domain.repository.inventory_gateway import InventoryGateway
from stockout.logging_config import get_logger

logger = get_logger("checkout")


class CheckoutSubmitter:

    def __init__(
        self,
        gateway: InventoryGateway,
        catalog: CatalogRepository,
    ) -> None:
        self._gateway = gateway
        self._catalog = catalog
        self._status = CheckoutStatus.IDLE
        self._failed_request: CommitRequest | None = None
        self._last_error: str | None = None

    @property
    def status(self) -> CheckoutStatus:
        return self._status

    @property
    def in_flight(self) -> bool:
        return self._status is CheckoutStatus.SUBMITTING

    @property
    def last_error(self) -> str | None:
        return self._last_error

    async def commit(self, cart: Cart) -> CommitAck:
        """Submit every line of *cart* as one batch.

        The caller is expected to replace its cart with an empty one when
        this returns; on any exception the cart must be kept as it is so
        the operator can correct it and try again.

        Raises:
            EmptyCartError: nothing to submit; the service is not contacted.
            AlreadyInFlightError: another commit has not finished yet.
            CommitError: the service rejected the batch.
            NetworkError: the service could not be reached.
        """
        if cart.line_count() == 0:
            raise EmptyCartError("Cart is empty, nothing to commit")
        if self.in_flight:
            raise AlreadyInFlightError("A stock-out commit is already in progress")

        request = self._build_request(cart)
        self._status = CheckoutStatus.SUBMITTING
        logger.info(
            "submitting stock-out batch",
            extra={"request_id": request.request_id, "line_count": len(request.lines)},
        )

        try:
            ack = await self._gateway.commit_batch(request)
        except (CommitError, NetworkError) as exc:
            self._mark_failed(request, str(exc))
            raise
        except BaseException as exc:
            # Unexpected gateway fault or cancellation; outcome unknown.
            self._mark_failed(request, str(exc) or type(exc).__name__)
            logger.error(
                "stock-out batch aborted",
                extra={"request_id": request.request_id},
                exc_info=True,
            )
            raise

        self._failed_request = None
        self._last_error = None
        logger.info("stock-out batch applied", extra={"request_id": ack.request_id})

        # Still SUBMITTING here: the caller has not cleared its cart yet.
        try:
            await self._refresh_catalog()
        finally:
            self._status = CheckoutStatus.SUCCEEDED
        return ack

    # --- Internal helpers -----------------------------------------------------

    def _build_request(self, cart: Cart) -> CommitRequest:
        """Reuse the failed request's id when the same lines are resent.

        The id travels as the Idempotency-Key header.
        """
        request = CommitRequest.from_cart(cart)
        previous = self._failed_request
        if previous is not None and previous.lines == request.lines:
            return previous
        return request

    def _mark_failed(self, request: CommitRequest, reason: str) -> None:
        self._status = CheckoutStatus.FAILED
        self._failed_request = request
        self._last_error = reason
        logger.warning(
            "stock-out batch failed",
            extra={"request_id": request.request_id, "reason": reason},
        )

    async def _refresh_catalog(self) -> None:
        try:
            await self._catalog.refresh()
        except DomainException:
            # The batch is applied; only the displayed quantities are stale.
            logger.warning("catalog refresh after commit failed", exc_info=True)
