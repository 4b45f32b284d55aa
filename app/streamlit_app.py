"""
Flashcard Trainer - Main App

Streamlit UI for the star-rated vocabulary flashcards.
Run with: streamlit run app/streamlit_app.py
"""

import logging

import streamlit as st

from app.router import PAGES
from app.state import ensure_session_state, init_database
from core import config


# ---- Page Setup ----

st.set_page_config(
    page_title="FlashCards",
    page_icon="🃏",
    layout="centered"
)

logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)


# ---- Main App ----

def main():
    """Main app entry point."""
    init_database()
    trainer = ensure_session_state()
    trainer.refresh_if_changed()

    if config.is_test_mode():
        st.caption("TEST MODE - Using test_flashcards")

    tabs = st.tabs([page.title for page in PAGES])
    for tab, page in zip(tabs, PAGES):
        with tab:
            page.render(trainer)


if __name__ == "__main__":
    main()
