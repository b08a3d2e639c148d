import streamlit as st

from core import deck
from ui.deck_mode.state import CATEGORY_KEY, on_category_change


def render_deck_controls(state: deck.DeckState) -> None:
    """Render deck size/remaining badges, the category picker and deck buttons."""

    size = deck.deck_size(state)
    badges = [f":blue-badge[Deck size: {size}]"]
    if not state.allow_repeats:
        badges.append(f":violet-badge[Remaining: {deck.remaining_count(state)}]")
    st.markdown(" ".join(badges))

    left, right = st.columns([1.4, 1], gap="small")
    with left:
        st.radio(
            "Draw from",
            options=list(deck.CATEGORIES),
            format_func=deck.category_label,
            horizontal=True,
            key=CATEGORY_KEY,
            on_change=on_category_change,
            args=(state,),
        )

    with right:
        b1, b2, b3 = st.columns(3)
        with b1:
            st.button(
                "Draw from deck 🃏",
                key="deck_draw",
                type="primary",
                width="stretch",
                disabled=not deck.can_draw(state),
                on_click=deck.draw,
                args=(state,),
            )
        with b2:
            st.button(
                "Reshuffle deck 🔀",
                key="deck_reshuffle",
                width="stretch",
                disabled=not deck.can_reshuffle(state),
                on_click=deck.reshuffle,
                args=(state,),
            )
        with b3:
            st.button(
                "Clear drawn cards 🗑️",
                key="deck_clear",
                width="stretch",
                disabled=not state.history,
                on_click=deck.clear_history,
                args=(state,),
            )
