from __future__ import annotations

import streamlit as st

from core.deck import CATEGORIES, DeckState, category_label, table_counts
from ui.deck_mode.state import (
    BULK_STATUS_KEY,
    LOAD_ERRORS_KEY,
    bulk_uploader_key,
    on_bulk_files,
    on_category_file,
    uploader_key,
)


def render_category_uploader(state: DeckState, category: str) -> None:
    st.file_uploader(
        f"{category_label(category)} CSV",
        type=["csv"],
        key=uploader_key(category),
        on_change=on_category_file,
        args=(state, category),
    )

    error = (st.session_state.get(LOAD_ERRORS_KEY) or {}).get(category)
    if error:
        st.error(error)
    elif state.sources.get(category):
        st.caption(f"Loaded: **{state.sources[category]}**")


def render_bulk_uploader(state: DeckState) -> None:
    st.file_uploader(
        "Bulk upload CSVs",
        type=["csv"],
        accept_multiple_files=True,
        key=bulk_uploader_key(),
        on_change=on_bulk_files,
        args=(state,),
        help="Files are matched to a category by name (e.g. 'quests.csv'); "
        "the rest fill the free categories in order.",
    )
    status = st.session_state.get(BULK_STATUS_KEY)
    if status:
        st.caption(status)


def render_loaders(state: DeckState) -> None:
    """Per-category uploaders (2 per row), bulk uploader and row counts."""
    for i in range(0, len(CATEGORIES), 2):
        cols = st.columns(2)
        for col, category in zip(cols, CATEGORIES[i:i + 2]):
            with col:
                render_category_uploader(state, category)

    render_bulk_uploader(state)

    counts = table_counts(state)
    st.markdown(
        " ".join(f":gray-badge[{category_label(c)}: {counts[c]}]" for c in CATEGORIES)
    )
