"""
Session Statistics UI

Renders the progress bar, position counter and completion message.
"""

import streamlit as st

from core.trainer import FlashcardTrainer


def render_progress_bar(trainer: FlashcardTrainer) -> None:
    """Overall mastery progress across the active word set."""
    progress = trainer.progress_percentage()
    col_bar, col_label = st.columns([6, 1])
    with col_bar:
        st.progress(int(round(progress)))
    with col_label:
        st.caption(f"{progress:.0f}%")


def render_session_counter(trainer: FlashcardTrainer) -> None:
    session = trainer.session
    if session is None:
        return
    if session.is_complete:
        st.caption("Round complete!")
    else:
        st.caption(session.position_label)


def render_session_complete() -> bool:
    """
    Render the end-of-round message.

    Returns:
        True if the restart button was clicked
    """
    st.markdown("<div style='text-align: center; font-size: 4em;'>🎉</div>", unsafe_allow_html=True)
    st.success("Congratulations! You finished this round.")
    return st.button("Start New Round", type="primary", use_container_width=True)
