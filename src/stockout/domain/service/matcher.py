"""Domain service: candidate matching.

Turns whatever the operator has typed so far into a short list of
items to choose from.  Runs on every keystroke, so it is a plain
function over the snapshot with no caching.
"""

from __future__ import annotations

from stockout.domain.model.catalog import CatalogSnapshot
from stockout.domain.model.item import Item

MAX_CANDIDATES = 5


def match(
    snapshot: CatalogSnapshot,
    fragment: str,
    limit: int = MAX_CANDIDATES,
) -> tuple[Item, ...]:
    """Return up to *limit* items whose code or name contains *fragment*.

    - Blank fragment -> no candidates.
    - Comparison is case-insensitive and unanchored.
    - Catalog order is kept; there is no relevance ranking.
    """
    if not fragment.strip():
        return ()
    needle = fragment.casefold()

    found: list[Item] = []
    for item in snapshot:
        if item.matches(needle):
            found.append(item)
            if len(found) == limit:
                break
    return tuple(found)
