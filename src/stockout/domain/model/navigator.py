"""Selection Navigator: keyboard state machine over the candidate list.

States:
    IDLE      no candidates, nothing highlighted
    BROWSING  candidates shown, ``0 <= highlight_index < len(candidates)``

Every input goes through ``TRANSITIONS``; an (state, input) pair that is
not listed there is a no-op.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from stockout.domain.exceptions import ValidationError
from stockout.domain.model.item import Item


class NavigatorState(Enum):
    IDLE = "IDLE"
    BROWSING = "BROWSING"


class NavInput(Enum):
    NEXT = "NEXT"
    PREVIOUS = "PREVIOUS"
    CONFIRM = "CONFIRM"


KEY_BINDINGS: dict[str, NavInput] = {
    "down": NavInput.NEXT,
    "tab": NavInput.NEXT,
    "up": NavInput.PREVIOUS,
    "enter": NavInput.CONFIRM,
}


# A step returns the next navigator and, on confirm, the chosen item.
Step = tuple["SelectionNavigator", "Item | None"]


@dataclass(frozen=True)
class SelectionNavigator:

    candidates: tuple[Item, ...] = ()
    highlight_index: int | None = None

    @staticmethod
    def over(candidates: Sequence[Item]) -> SelectionNavigator:
        """Start over on a fresh candidate list (highlight resets to 0)."""
        if not candidates:
            return SelectionNavigator()
        return SelectionNavigator(tuple(candidates), 0)

    @property
    def state(self) -> NavigatorState:
        if self.candidates:
            return NavigatorState.BROWSING
        return NavigatorState.IDLE

    @property
    def highlighted(self) -> Item | None:
        if self.highlight_index is None:
            return None
        return self.candidates[self.highlight_index]

    # --- Transitions ----------------------------------------------------------

    def handle(self, nav_input: NavInput) -> Step:
        transition = TRANSITIONS.get((self.state, nav_input))
        if transition is None:
            return self, None
        return transition(self)

    def press(self, key: str) -> Step:
        """Translate a key name (``up``, ``down``, ``tab``, ``enter``)."""
        nav_input = KEY_BINDINGS.get(key.lower())
        if nav_input is None:
            return self, None
        return self.handle(nav_input)

    def pick(self, position: int) -> Step:
        """Pointer selection: confirm the entry at *position* directly."""
        if not 0 <= position < len(self.candidates):
            raise ValidationError(f"No candidate at position {position + 1}")
        return SelectionNavigator(), self.candidates[position]

    def _next(self) -> Step:
        index = (self.highlight_index + 1) % len(self.candidates)
        return SelectionNavigator(self.candidates, index), None

    def _previous(self) -> Step:
        size = len(self.candidates)
        index = (self.highlight_index - 1 + size) % size
        return SelectionNavigator(self.candidates, index), None

    def _confirm(self) -> Step:
        return SelectionNavigator(), self.candidates[self.highlight_index]


TRANSITIONS: dict[
    tuple[NavigatorState, NavInput],
    Callable[[SelectionNavigator], Step],
] = {
    (NavigatorState.BROWSING, NavInput.NEXT): SelectionNavigator._next,
    (NavigatorState.BROWSING, NavInput.PREVIOUS): SelectionNavigator._previous,
    (NavigatorState.BROWSING, NavInput.CONFIRM): SelectionNavigator._confirm,
}
