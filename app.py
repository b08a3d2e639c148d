# app.py
import streamlit as st

from core.settings_manager import load_settings
from ui.deck_mode.render import render as deck_mode_render
from ui.deck_mode.state import ensure_deck_state, ensure_ui_defaults
from ui.sidebar import render_sidebar

st.set_page_config(
    page_title="Card Drawer",
    layout="wide",
    initial_sidebar_state="auto",
)

st.markdown("""
    <style>
    /* Soft neutral background */
    .stApp {
        background: linear-gradient(135deg, #fafafa 0, #f0f0f0 100%);
        color: #171717;
    }

    /* Drawn cards: rounded with a light drop shadow */
    div[data-testid="stVerticalBlockBorderWrapper"] {
        border-radius: 16px;
        background-color: #fff;
        box-shadow: 0 4px 12px rgba(0, 0, 0, 0.08);
    }

    /* Sidebar: subtle divider */
    section[data-testid="stSidebar"] {
        border-right: 1px solid #e5e5e5 !important;
    }
    </style>
""", unsafe_allow_html=True)

# --- Initialize Settings ---
if "user_settings" not in st.session_state:
    st.session_state.user_settings = load_settings()

settings = st.session_state.user_settings

st.title("Card Drawer")

state = ensure_deck_state(settings)
ensure_ui_defaults(state)

# Sidebar: allow repeats + roll 1-3
render_sidebar(state)

deck_mode_render(settings, state)
