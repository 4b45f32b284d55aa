"""
Session actions for the Streamlit app.

Each handler applies one trainer transition, gives feedback and reruns.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from core.constants import SwipeDirection
from core.trainer import FlashcardTrainer


def _trainer() -> FlashcardTrainer:
    return st.session_state.trainer


def reveal_answer() -> None:
    """
    Show the back of the card; seeing the answer drops the word to 1 star.
    """
    _trainer().flip()
    st.session_state.show_answer = True
    st.rerun()


def process_swipe(direction: SwipeDirection) -> None:
    """
    Grade the current word and move to the next card.
    """
    trainer = _trainer()
    word = trainer.session.current_word if trainer.session else None
    new_stars = trainer.swipe(direction)

    if word is not None and new_stars is not None:
        if direction is SwipeDirection.RIGHT:
            st.toast(f'"{word.source}" → {new_stars} ⭐')
        else:
            st.toast(f'"{word.source}" → 1 ⭐, let\'s practice it again 📚')

    st.session_state.show_answer = False
    st.rerun()


def undo_last() -> None:
    if _trainer().undo() is not None:
        st.toast("Undone")
    st.session_state.show_answer = False
    st.rerun()


def restart_session() -> None:
    if not _trainer().restart():
        st.warning("Nothing to learn yet.")
        return
    st.session_state.show_answer = False
    st.rerun()


def change_package(package: Optional[str]) -> None:
    _trainer().select_package(package)
    st.session_state.show_answer = False
    st.rerun()


def retry_loading() -> None:
    _trainer().retry()
    st.rerun()

