"""
All-words page rendering.
"""

from __future__ import annotations

import streamlit as st

from app.ui import star_badge
from core.analytics import build_word_overview, group_words_by_stars
from core.trainer import FlashcardTrainer


def render_words_page(trainer: FlashcardTrainer) -> None:
    words = trainer.words
    overview = build_word_overview(words)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Words", f"{overview.total_words:,}")
    with col2:
        st.metric("Next Round", f"{overview.next_session_size:,} cards")
    with col3:
        st.metric("Progress", f"{overview.progress_percentage:.0f}%")

    if not words:
        st.info("No words in this package yet.")
        return

    st.markdown("### Words per Star Level")
    st.bar_chart(overview.star_distribution.rename(index=star_badge).to_frame())

    for stars, group in sorted(group_words_by_stars(words).items(), reverse=True):
        if not group:
            continue
        with st.expander(f"{star_badge(stars)} ({len(group)})"):
            for word in group:
                st.markdown(f"**{word.source}**: {word.target}")
