"""Integration tests for the Checkout Submitter."""

import asyncio

import pytest

from stockout.application.catalog_repository import CatalogRepository
from stockout.application.checkout import CheckoutSubmitter
from stockout.domain.exceptions import (
    AlreadyInFlightError,
    CommitError,
    EmptyCartError,
    NetworkError,
)
from stockout.domain.model.cart import Cart
from stockout.domain.model.commit import CheckoutStatus
from tests.fakes import BOLT, NUT, FakeInventoryGateway


async def _setup():
    gateway = FakeInventoryGateway([BOLT, NUT])
    catalog = CatalogRepository(gateway)
    await catalog.load()
    return CheckoutSubmitter(gateway, catalog), gateway, catalog


class TestCommitPreconditions:

    @pytest.mark.asyncio
    async def test_empty_cart_rejected_without_network_call(self):
        submitter, gateway, _ = await _setup()

        with pytest.raises(EmptyCartError):
            await submitter.commit(Cart())

        assert gateway.commits == []
        assert submitter.status is CheckoutStatus.IDLE

    @pytest.mark.asyncio
    async def test_second_commit_while_submitting_rejected(self):
        submitter, gateway, _ = await _setup()
        gateway.commit_gate = asyncio.Event()
        cart = Cart().add(BOLT, 2)

        first = asyncio.create_task(submitter.commit(cart))
        await asyncio.sleep(0)
        assert submitter.status is CheckoutStatus.SUBMITTING

        with pytest.raises(AlreadyInFlightError):
            await submitter.commit(cart)

        gateway.commit_gate.set()
        ack = await first

        assert ack.line_count == 1
        assert len(gateway.commits) == 1
        assert submitter.status is CheckoutStatus.SUCCEEDED


class TestCommitSuccess:

    @pytest.mark.asyncio
    async def test_sends_one_batch_and_refreshes_catalog(self):
        submitter, gateway, catalog = await _setup()
        cart = Cart().add(BOLT, 5).add(NUT, 1)

        ack = await submitter.commit(cart)

        [request] = gateway.commits
        assert ack.request_id == request.request_id
        assert [(line.item_id, line.quantity) for line in request.lines] == [(1, 5), (2, 1)]
        assert gateway.fetch_calls == [None, None]
        assert catalog.find(BOLT.id).quantity_on_hand == 95

    @pytest.mark.asyncio
    async def test_refresh_failure_does_not_fail_commit(self):
        submitter, gateway, catalog = await _setup()
        before = catalog.snapshot

        async def broken_fetch(query=None):
            raise NetworkError("down")

        gateway.fetch_items = broken_fetch
        await submitter.commit(Cart().add(BOLT, 1))

        assert submitter.status is CheckoutStatus.SUCCEEDED
        assert catalog.snapshot is before


class TestCommitFailure:

    @pytest.mark.asyncio
    async def test_service_message_surfaced_verbatim(self):
        submitter, gateway, _ = await _setup()
        gateway.fail_commit_with = CommitError("Stok A100 tidak cukup")

        with pytest.raises(CommitError, match="Stok A100 tidak cukup"):
            await submitter.commit(Cart().add(BOLT, 1))

        assert submitter.status is CheckoutStatus.FAILED
        assert submitter.last_error == "Stok A100 tidak cukup"
        assert gateway.fetch_calls == [None]  # no refresh

    @pytest.mark.asyncio
    async def test_network_failure_then_manual_retry(self):
        submitter, gateway, _ = await _setup()
        cart = Cart().add(BOLT, 1)
        gateway.fail_commit_with = NetworkError("timeout")

        with pytest.raises(NetworkError):
            await submitter.commit(cart)
        assert len(gateway.commits) == 1  # no automatic retry

        gateway.fail_commit_with = None
        await submitter.commit(cart)
        assert submitter.status is CheckoutStatus.SUCCEEDED

    @pytest.mark.asyncio
    async def test_retry_of_same_lines_reuses_request_id(self):
        submitter, gateway, _ = await _setup()
        cart = Cart().add(BOLT, 1)
        gateway.fail_commit_with = NetworkError("ack lost")

        with pytest.raises(NetworkError):
            await submitter.commit(cart)
        gateway.fail_commit_with = None
        await submitter.commit(cart)

        first, second = gateway.commits
        assert first.request_id == second.request_id

    @pytest.mark.asyncio
    async def test_changed_cart_gets_new_request_id(self):
        submitter, gateway, _ = await _setup()
        gateway.fail_commit_with = CommitError("nope")

        with pytest.raises(CommitError):
            await submitter.commit(Cart().add(BOLT, 1))
        gateway.fail_commit_with = None
        await submitter.commit(Cart().add(BOLT, 2))

        first, second = gateway.commits
        assert first.request_id != second.request_id

    @pytest.mark.asyncio
    async def test_unexpected_gateway_fault_releases_guard(self):
        submitter, gateway, _ = await _setup()
        cart = Cart().add(BOLT, 1)
        gateway.fail_commit_with = KeyError("quantity")

        with pytest.raises(KeyError):
            await submitter.commit(cart)

        assert submitter.status is CheckoutStatus.FAILED
        assert not submitter.in_flight
        assert submitter.last_error == "'quantity'"

        gateway.fail_commit_with = None
        await submitter.commit(cart)

        first, second = gateway.commits
        assert first.request_id == second.request_id
        assert submitter.status is CheckoutStatus.SUCCEEDED

    @pytest.mark.asyncio
    async def test_cancelled_commit_releases_guard(self):
        submitter, gateway, _ = await _setup()
        gateway.commit_gate = asyncio.Event()
        cart = Cart().add(BOLT, 1)

        pending = asyncio.create_task(submitter.commit(cart))
        await asyncio.sleep(0)
        pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await pending

        assert submitter.status is CheckoutStatus.FAILED
        gateway.commit_gate = None
        await submitter.commit(cart)
        assert submitter.status is CheckoutStatus.SUCCEEDED

    @pytest.mark.asyncio
    async def test_last_error_is_read_only(self):
        submitter, _, _ = await _setup()
        with pytest.raises(AttributeError):
            submitter.last_error = "overridden"

    @pytest.mark.asyncio
    async def test_successful_commits_get_distinct_ids(self):
        submitter, gateway, _ = await _setup()
        cart = Cart().add(NUT, 1)

        await submitter.commit(cart)
        await submitter.commit(cart)

        first, second = gateway.commits
        assert first.request_id != second.request_id
