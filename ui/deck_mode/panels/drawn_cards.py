from __future__ import annotations

import html
from typing import List

import streamlit as st

from core import deck


def _marker_pips_html(count: int) -> str:
    filled = (
        "<span style='display:inline-block; width:12px; height:12px; margin-right:3px; "
        "border-radius:50%; background:#dc2626; border:1px solid #b91c1c; "
        "box-shadow:0 1px 2px rgba(0,0,0,0.4);'></span>"
    )
    empty = (
        "<span style='display:inline-block; width:12px; height:12px; margin-right:3px; "
        "border-radius:50%; border:1px dashed #d4d4d4; opacity:0.4;'></span>"
    )
    count = max(0, min(count, deck.MAX_MARKERS))
    return (
        "<div style='display:flex; flex-wrap:wrap; align-items:center;'>"
        f"{filled * count}{empty * (deck.MAX_MARKERS - count)}"
        "</div>"
    )


def _record_html(card: deck.DrawnCard) -> str:
    rows: List[str] = []
    for k, v in card.record.items():
        rows.append(
            "<div style='margin-bottom:0.4rem;'>"
            "<dt style='font-size:0.7rem; text-transform:uppercase; letter-spacing:0.05em; opacity:0.6;'>"
            f"{html.escape(str(k))}</dt>"
            f"<dd style='margin:0; font-weight:500; overflow-wrap:anywhere;'>{html.escape(str(v))}</dd>"
            "</div>"
        )
    return f"<dl style='margin:0;'>{''.join(rows)}</dl>"


def render_drawn_card(state: deck.DeckState, card: deck.DrawnCard) -> None:
    with st.container(border=True):
        head, add_col, clear_col, dismiss_col = st.columns([2.2, 0.6, 0.6, 0.6], gap="small")
        with head:
            st.markdown(f":gray-badge[Row #{card.row_number}]")
            st.markdown(f"#### {deck.category_label(card.category)}")
        with add_col:
            at_max = card.marker_count >= deck.MAX_MARKERS
            st.button(
                "➕",
                key=f"marker_add_{card.id}",
                help="Max 10 markers" if at_max else "Add red marker",
                disabled=at_max,
                on_click=deck.increment_marker,
                args=(state, card.id),
            )
        with clear_col:
            st.button(
                "🧽",
                key=f"marker_clear_{card.id}",
                help="No markers to clear" if card.marker_count == 0 else "Clear markers",
                disabled=card.marker_count == 0,
                on_click=deck.clear_marker,
                args=(state, card.id),
            )
        with dismiss_col:
            st.button(
                "✖",
                key=f"dismiss_{card.id}",
                help="Dismiss card",
                on_click=deck.dismiss,
                args=(state, card.id),
            )

        st.markdown(_record_html(card), unsafe_allow_html=True)
        st.caption(f"Markers ({card.marker_count}/{deck.MAX_MARKERS})")
        st.markdown(_marker_pips_html(card.marker_count), unsafe_allow_html=True)


def render_drawn_cards(state: deck.DeckState, *, cards_per_row: int = 4) -> None:
    if not state.history:
        with st.container(border=True):
            st.markdown("**No cards drawn yet**")
            st.caption("Load any CSV above, choose a category, then press “Draw from deck”.")
        return

    per_row = max(1, int(cards_per_row))
    cards = list(state.history)
    for i in range(0, len(cards), per_row):
        cols = st.columns(per_row)
        for col, card in zip(cols, cards[i:i + per_row]):
            with col:
                render_drawn_card(state, card)
