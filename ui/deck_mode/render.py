# ui/deck_mode/render.py
from typing import Any, Dict

import streamlit as st

from core.deck import DeckState
from ui.deck_mode.panels.controls import render_deck_controls
from ui.deck_mode.panels.drawn_cards import render_drawn_cards
from ui.deck_mode.panels.loaders import render_loaders


def render(settings: Dict[str, Any], state: DeckState) -> None:
    st.markdown("### Load your CSVs")
    with st.container(border=True):
        render_loaders(state)
        st.markdown("---")
        render_deck_controls(state)

    st.markdown("### Drawn cards")
    st.caption("Each card shows the row from the category it was drawn from. Use markers to keep track.")
    render_drawn_cards(state, cards_per_row=settings.get("cards_per_row", 4))

    if settings.get("show_tip", True):
        st.caption(
            "Tip: pick the category you want to draw from. Files do not need to "
            "line up across sheets; each draw only uses the chosen CSV."
        )
