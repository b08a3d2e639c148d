"""Deck Mode UI panels.

Streamlit fragments rendered by ui/deck_mode/render.py. Each panel reads the
session's DeckState and mutates it only through widget callbacks.
"""
