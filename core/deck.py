from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Record = Dict[str, str]

CATEGORIES: Tuple[str, ...] = ("characters", "items", "locations", "quests")
CATEGORY_LABELS: Dict[str, str] = {
    "characters": "Characters",
    "items": "Items",
    "locations": "Locations",
    "quests": "Quests",
}
MAX_MARKERS = 10


def category_label(category: str) -> str:
    return CATEGORY_LABELS.get(category, category)


def _check_category(category: str) -> None:
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category!r}")


@dataclass
class DrawnCard:
    id: str
    table_index: int
    category: str
    record: Record
    marker_count: int = 0

    @property
    def row_number(self) -> int:
        """1-based row number as shown on the card badge."""
        return self.table_index + 1


@dataclass
class DeckState:
    tables: Dict[str, Tuple[Record, ...]] = field(
        default_factory=lambda: {c: () for c in CATEGORIES}
    )
    sources: Dict[str, Optional[str]] = field(
        default_factory=lambda: {c: None for c in CATEGORIES}
    )
    selected_category: str = CATEGORIES[0]
    # None means "reset, waiting to be repopulated"; [] means exhausted.
    remaining_pool: Optional[List[int]] = None
    history: List[DrawnCard] = field(default_factory=list)
    allow_repeats: bool = False


def new_deck_state(*, allow_repeats: bool = False, category: str = CATEGORIES[0]) -> DeckState:
    _check_category(category)
    state = DeckState(selected_category=category, allow_repeats=bool(allow_repeats))
    ensure_pool_populated(state)
    return state


# ------------------------
# Read-only helpers
# ------------------------
def selected_table(state: DeckState) -> Tuple[Record, ...]:
    return state.tables.get(state.selected_category, ())


def deck_size(state: DeckState) -> int:
    return len(selected_table(state))


def remaining_count(state: DeckState) -> int:
    return len(state.remaining_pool or [])


def table_counts(state: DeckState) -> Dict[str, int]:
    return {c: len(state.tables.get(c, ())) for c in CATEGORIES}


def can_draw(state: DeckState) -> bool:
    if deck_size(state) == 0:
        return False
    return state.allow_repeats or remaining_count(state) > 0


def can_reshuffle(state: DeckState) -> bool:
    return deck_size(state) > 0


def find_card(state: DeckState, card_id: str) -> Optional[DrawnCard]:
    return next((c for c in state.history if c.id == card_id), None)


# ------------------------
# Pool maintenance
# ------------------------
def _reset_pool(state: DeckState) -> None:
    state.remaining_pool = None


def ensure_pool_populated(state: DeckState) -> None:
    """
    Refill a reset pool with every index of the selected table.

    A pool that was emptied by drawing stays empty until the next
    reload, category switch or reshuffle.
    """
    if state.remaining_pool is None and deck_size(state) > 0:
        state.remaining_pool = list(range(deck_size(state)))


# ------------------------
# Operations
# ------------------------
def load_category(
    state: DeckState,
    category: str,
    records: Sequence[Mapping[str, str]],
    source: Optional[str] = None,
) -> None:
    """Replace a category's table and drop every draw made so far."""
    _check_category(category)
    state.tables[category] = tuple(dict(r) for r in records)
    state.sources[category] = source
    _reset_pool(state)
    state.history = []
    ensure_pool_populated(state)
    logger.info("Loaded %d %s rows from %s", len(state.tables[category]), category, source or "<unnamed>")


def select_category(state: DeckState, category: str) -> None:
    _check_category(category)
    state.selected_category = category
    _reset_pool(state)
    ensure_pool_populated(state)


def set_allow_repeats(state: DeckState, allow: bool) -> None:
    state.allow_repeats = bool(allow)
    ensure_pool_populated(state)


def draw(state: DeckState, rng: Optional[random.Random] = None) -> Optional[DrawnCard]:
    """
    Draw one row from the selected table and put it on top of the history.

    Returns None (and changes nothing) when the deck is empty, or when
    repeats are off and the pool is exhausted.
    """
    rng = rng or random
    table = selected_table(state)
    if not table:
        return None

    if state.allow_repeats:
        index = rng.randrange(len(table))
    else:
        pool = state.remaining_pool
        if not pool:
            return None
        pos = rng.randrange(len(pool))
        # swap-remove keeps removal O(1)
        pool[pos], pool[-1] = pool[-1], pool[pos]
        index = pool.pop()

    card = DrawnCard(
        id=uuid.uuid4().hex,
        table_index=index,
        category=state.selected_category,
        record=table[index],
    )
    state.history.insert(0, card)
    logger.debug("Drew %s row %d (%d left)", card.category, index, remaining_count(state))
    return card


def reshuffle(state: DeckState) -> None:
    state.remaining_pool = list(range(deck_size(state)))
    logger.debug("Reshuffled %s: %d cards", state.selected_category, deck_size(state))


def clear_history(state: DeckState) -> None:
    state.history = []
    ensure_pool_populated(state)


def dismiss(state: DeckState, card_id: str) -> None:
    state.history = [c for c in state.history if c.id != card_id]
    ensure_pool_populated(state)


def increment_marker(state: DeckState, card_id: str) -> None:
    card = find_card(state, card_id)
    if card and card.marker_count < MAX_MARKERS:
        card.marker_count += 1


def clear_marker(state: DeckState, card_id: str) -> None:
    card = find_card(state, card_id)
    if card:
        card.marker_count = 0
