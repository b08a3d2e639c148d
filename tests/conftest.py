"""Pytest configuration and shared fixtures for card drawer tests."""
from __future__ import annotations

import random
from typing import Dict, List

import pytest

from core.deck import DeckState, load_category, new_deck_state


def make_records(*names: str) -> List[Dict[str, str]]:
    """Build one-column records: make_records("A", "B") -> [{"name": "A"}, {"name": "B"}]."""
    return [{"name": n} for n in names]


@pytest.fixture
def rng() -> random.Random:
    """Seeded RNG so draws are reproducible."""
    return random.Random(1234)


@pytest.fixture
def empty_state() -> DeckState:
    """Fresh deck with nothing loaded, repeats off, drawing from characters."""
    return new_deck_state()


@pytest.fixture
def abc_state() -> DeckState:
    """Characters table ["A", "B", "C"] loaded and selected, repeats off."""
    state = new_deck_state()
    load_category(state, "characters", make_records("A", "B", "C"), source="characters.csv")
    return state
