"""Application service: Stock-Out Session.

The controller behind one operator's stock-out screen.  All mutable
state lives in a single frozen ``SessionState``; each operation builds
the next state from the pure domain pieces (matcher, navigator, cart)
and swaps it in whole.

    keystroke -> match -> navigator -> confirm -> add(quantity) -> checkout
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from stockout.application.catalog_repository import CatalogRepository
from stockout.application.checkout import CheckoutSubmitter
from stockout.application.dto import CandidateDTO, CartDTO, ItemDTO
from stockout.domain.exceptions import ValidationError
from stockout.domain.model.cart import Cart
from stockout.domain.model.catalog import CatalogSnapshot
from stockout.domain.model.commit import CommitAck
from stockout.domain.model.item import Item, ItemId
from stockout.domain.model.navigator import NavInput, SelectionNavigator
from stockout.domain.service.matcher import match


class Focus(Enum):
    QUERY = "QUERY"
    QUANTITY = "QUANTITY"


@dataclass(frozen=True)
class SessionState:
    query: str = ""
    navigator: SelectionNavigator = field(default_factory=SelectionNavigator)
    cart: Cart = field(default_factory=Cart)
    selected: Item | None = None
    focus: Focus = Focus.QUERY


class StockOutSession:

    def __init__(
        self,
        catalog: CatalogRepository,
        submitter: CheckoutSubmitter,
    ) -> None:
        self._catalog = catalog
        self._submitter = submitter
        self.state = SessionState()

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._catalog.snapshot

    # --- Catalog --------------------------------------------------------------

    async def load_catalog(self, query: str | None = None) -> CatalogSnapshot:
        snapshot = await self._catalog.load(query)
        self._rematch()
        return snapshot

    # --- Search & selection ---------------------------------------------------

    def type_query(self, text: str) -> tuple[Item, ...]:
        """Replace the query text and recompute the candidate list."""
        candidates = match(self._catalog.snapshot, text)
        self.state = replace(
            self.state,
            query=text,
            navigator=SelectionNavigator.over(candidates),
            selected=None,
            focus=Focus.QUERY,
        )
        return candidates

    def navigate(self, nav_input: NavInput) -> Item | None:
        navigator, chosen = self.state.navigator.handle(nav_input)
        return self._apply_step(navigator, chosen)

    def press(self, key: str) -> Item | None:
        navigator, chosen = self.state.navigator.press(key)
        return self._apply_step(navigator, chosen)

    def pick(self, position: int) -> Item:
        """Pointer selection of the candidate at 0-based *position*."""
        navigator, chosen = self.state.navigator.pick(position)
        self._apply_step(navigator, chosen)
        return chosen

    # --- Cart -----------------------------------------------------------------

    def add(self, quantity: int, item: Item | None = None) -> Cart:
        """Put *quantity* of *item* (default: the confirmed candidate) in the cart.

        On InvalidQuantity the state is untouched and focus stays on
        quantity entry.
        """
        target = item if item is not None else self.state.selected
        if target is None:
            raise ValidationError("No item selected")

        cart = self.state.cart.add(target, quantity)
        self.state = replace(
            self.state,
            cart=cart,
            query="",
            navigator=SelectionNavigator(),
            selected=None,
            focus=Focus.QUERY,
        )
        return cart

    def remove(self, item_id: ItemId) -> Cart:
        self.state = replace(self.state, cart=self.state.cart.remove(item_id))
        return self.state.cart

    def set_quantity(self, item_id: ItemId, quantity: int) -> Cart:
        self.state = replace(
            self.state, cart=self.state.cart.set_quantity(item_id, quantity)
        )
        return self.state.cart

    def cancel(self) -> None:
        """Abandon the whole stock-out: empty cart, blank query."""
        self.state = SessionState()

    async def checkout(self) -> CommitAck:
        """Commit the cart; on success the cart is emptied.

        Any exception from the submitter leaves the cart exactly as it was.
        """
        ack = await self._submitter.commit(self.state.cart)
        self.state = replace(self.state, cart=Cart())
        self._rematch()
        return ack

    # --- Views ----------------------------------------------------------------

    def candidates(self) -> list[CandidateDTO]:
        navigator = self.state.navigator
        return [
            CandidateDTO(
                position=index + 1,
                item=ItemDTO.from_item(item),
                highlighted=index == navigator.highlight_index,
            )
            for index, item in enumerate(navigator.candidates)
        ]

    def cart_view(self) -> CartDTO:
        return CartDTO.from_cart(self.state.cart)

    # --- Internal helpers -----------------------------------------------------

    def _apply_step(
        self, navigator: SelectionNavigator, chosen: Item | None
    ) -> Item | None:
        if chosen is None:
            self.state = replace(self.state, navigator=navigator)
            return None
        self.state = replace(
            self.state,
            navigator=navigator,
            query=chosen.code,
            selected=chosen,
            focus=Focus.QUANTITY,
        )
        return chosen

    def _rematch(self) -> None:
        """Recompute candidates for the current query after a snapshot swap."""
        if self.state.focus is Focus.QUERY:
            candidates = match(self._catalog.snapshot, self.state.query)
            self.state = replace(
                self.state, navigator=SelectionNavigator.over(candidates)
            )
