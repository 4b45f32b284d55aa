"""
Study page rendering.
"""

from __future__ import annotations

import streamlit as st

from app.session_controller import (
    change_package,
    process_swipe,
    restart_session,
    retry_loading,
    reveal_answer,
    undo_last,
)
from app.ui import (
    render_flashcard,
    render_package_selector,
    render_progress_bar,
    render_session_complete,
    render_session_counter,
    render_swipe_buttons,
)
from core.trainer import FlashcardTrainer, TrainerStatus


def render_study_page(trainer: FlashcardTrainer) -> None:
    """
    Render the study flow for the trainer's current status.
    """
    render_progress_bar(trainer)
    _render_header(trainer)

    status = trainer.status
    if status is TrainerStatus.ERROR:
        st.error(trainer.error or "Failed to load words.")
        if st.button("Try Again", type="primary"):
            retry_loading()
    elif status is TrainerStatus.LOADING:
        st.info("Loading words...")
    elif status is TrainerStatus.EMPTY:
        st.info("Nothing to learn yet. Add some words to this package first.")
    elif status is TrainerStatus.COMPLETE:
        if render_session_complete():
            restart_session()
    else:
        _render_active_card(trainer)


def _render_header(trainer: FlashcardTrainer) -> None:
    col_title, col_undo, col_eye = st.columns([4, 1, 1])

    with col_title:
        st.title("FlashCards")
        render_session_counter(trainer)

    with col_undo:
        if st.button("↶", help="Undo", disabled=not trainer.can_undo, use_container_width=True):
            undo_last()

    with col_eye:
        label = "🙈" if st.session_state.show_word else "👁"
        if st.button(label, help="Hide / show word", use_container_width=True):
            st.session_state.show_word = not st.session_state.show_word
            st.rerun()

    chosen = render_package_selector(trainer.packages(), trainer.selected_package)
    if chosen != trainer.selected_package:
        change_package(chosen)


def _render_active_card(trainer: FlashcardTrainer) -> None:
    session = trainer.session
    word = session.current_word
    if word is None:
        return

    st.markdown("<br>", unsafe_allow_html=True)
    render_flashcard(word, revealed=st.session_state.show_answer, show_word=st.session_state.show_word)
    st.markdown("<br>", unsafe_allow_html=True)

    if not st.session_state.show_answer:
        if st.button("Flip", use_container_width=True):
            reveal_answer()

    direction = render_swipe_buttons(key_suffix=str(session.index))
    if direction is not None:
        process_swipe(direction)

    upcoming = session.upcoming()[1:]
    if upcoming:
        st.caption("Up next: " + ", ".join(w.source for w in upcoming))
