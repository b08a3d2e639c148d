from typing import Any, Dict

import streamlit as st

from core import deck
from core.bulk_assign import apply_report, bulk_upload
from core.dice import roll
from core.table_loader import load_table

DECK_STATE_KEY = "card_deck"
LOAD_ERRORS_KEY = "load_errors"
BULK_STATUS_KEY = "bulk_status"
BULK_NONCE_KEY = "bulk_upload_nonce"
LAST_ROLL_KEY = "last_roll"
ALLOW_REPEATS_KEY = "allow_repeats"
CATEGORY_KEY = "draw_category"


def ensure_deck_state(settings: Dict[str, Any]) -> deck.DeckState:
    """Return the session's deck, creating it from settings on first run."""
    state = st.session_state.get(DECK_STATE_KEY)
    if isinstance(state, deck.DeckState):
        return state

    state = deck.new_deck_state(
        allow_repeats=bool(settings.get("allow_repeats", False)),
        category=settings.get("default_category") or deck.CATEGORIES[0],
    )
    st.session_state[DECK_STATE_KEY] = state
    return state


def ensure_ui_defaults(state: deck.DeckState) -> None:
    defaults = {
        LOAD_ERRORS_KEY: {},
        BULK_STATUS_KEY: None,
        BULK_NONCE_KEY: 0,
        LAST_ROLL_KEY: None,
        ALLOW_REPEATS_KEY: state.allow_repeats,
        CATEGORY_KEY: state.selected_category,
    }
    for key, val in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = val


def uploader_key(category: str) -> str:
    return f"upload_{category}"


def bulk_uploader_key() -> str:
    return f"bulk_upload_{st.session_state.get(BULK_NONCE_KEY, 0)}"


def apply_upload(
    state: deck.DeckState,
    errors: Dict[str, str],
    category: str,
    name: str,
    data: bytes,
) -> bool:
    """
    Parse one uploaded file into `category`.

    On failure the category's table and source are kept and the message is
    stored in `errors[category]`; on success any earlier error is cleared.
    """
    result = load_table(name, data)
    if not result.ok:
        errors[category] = f"Failed to parse {result.name}: {result.error}"
        return False

    errors.pop(category, None)
    deck.load_category(state, category, result.records, source=result.name)
    return True


# ------------------------
# Widget callbacks
# ------------------------
def on_category_file(state: deck.DeckState, category: str) -> None:
    uploaded = st.session_state.get(uploader_key(category))
    if uploaded is None:
        # file removed from the widget; keep the loaded table
        return

    errors = st.session_state.setdefault(LOAD_ERRORS_KEY, {})
    apply_upload(state, errors, category, uploaded.name, uploaded.getvalue())


def on_bulk_files(state: deck.DeckState) -> None:
    files = st.session_state.get(bulk_uploader_key()) or []
    if not files:
        return

    with st.spinner("Parsing…"):
        report = bulk_upload([(f.name, f.getvalue()) for f in files])
    apply_report(state, report)

    errors = st.session_state.setdefault(LOAD_ERRORS_KEY, {})
    for category in report.tables:
        errors.pop(category, None)

    st.session_state[BULK_STATUS_KEY] = report.status
    # New key on the next run gives an empty uploader.
    st.session_state[BULK_NONCE_KEY] = st.session_state.get(BULK_NONCE_KEY, 0) + 1


def on_allow_repeats(state: deck.DeckState) -> None:
    deck.set_allow_repeats(state, bool(st.session_state.get(ALLOW_REPEATS_KEY, False)))


def on_category_change(state: deck.DeckState) -> None:
    deck.select_category(state, st.session_state.get(CATEGORY_KEY, deck.CATEGORIES[0]))


def on_roll() -> None:
    st.session_state[LAST_ROLL_KEY] = roll(1, 3)
