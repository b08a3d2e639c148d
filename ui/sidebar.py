#ui/sidebar.py
import streamlit as st

from core.deck import DeckState
from ui.deck_mode.state import ALLOW_REPEATS_KEY, LAST_ROLL_KEY, on_allow_repeats, on_roll


def render_sidebar(state: DeckState):
    st.sidebar.header("Settings")

    with st.sidebar.expander("🃏 Deck", expanded=True):
        st.toggle(
            "Allow repeats",
            key=ALLOW_REPEATS_KEY,
            on_change=on_allow_repeats,
            args=(state,),
            help="Draw with replacement. The remaining pool is left as it is.",
        )

    with st.sidebar.expander("🎲 Roll 1–3", expanded=True):
        roll_col, result_col = st.columns([1, 1])
        with roll_col:
            st.button("Roll 1–3", key="roll_1_3", width="stretch", on_click=on_roll)
        with result_col:
            last = st.session_state.get(LAST_ROLL_KEY)
            st.markdown(f"### {last if last is not None else '—'}")
