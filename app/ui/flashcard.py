"""
Flashcard UI Component

Renders one word card, front (source text) or back (with translation).
"""

from __future__ import annotations

from html import escape

import streamlit as st

from app.ui.flashcard_style import (
    BACK_STYLE,
    CARD_MIN_HEIGHT,
    CARD_PADDING,
    FRONT_STYLE,
    STAR_COLORS,
)
from core.constants import MAX_STARS
from core.schemas import Word


def star_badge(stars: int) -> str:
    """Filled and empty stars, e.g. ★★☆☆☆; "New" for unrated words."""
    if stars == 0:
        return "New"
    return "★" * stars + "☆" * (MAX_STARS - stars)


def render_flashcard(word: Word, revealed: bool = False, show_word: bool = True) -> None:
    """
    Render a word card.

    Args:
        word: Word with its current rating
        revealed: If True, show the translation under the word
        show_word: If False, hide the source text (listening practice)
    """
    style = BACK_STYLE if revealed else FRONT_STYLE

    main_text = escape(word.source) if show_word else "• • •"
    corner_html = (
        f'<div style="position: absolute; top: 15px; right: 20px; font-size: {style.corner_font_size}; '
        f'color: {STAR_COLORS[word.stars]};">{star_badge(word.stars)}</div>'
        f'<div style="position: absolute; top: 15px; left: 20px; font-size: {style.corner_font_size}; '
        f'color: {style.corner_color}; font-style: italic;">{escape(word.level)}</div>'
    )
    main_html = (
        f'<h1 style="font-size: {style.main_font_size}; color: {style.main_color}; '
        'margin: 0; text-align: center; line-height: 1.4; overflow-wrap: anywhere;">'
        f"{main_text}</h1>"
    )

    subtitle_html = ""
    if revealed:
        subtitle_html = (
            f'<p style="font-size: {style.subtitle_font_size}; color: {style.subtitle_color}; '
            f'margin: 15px 0 0 0; text-align: center;">{escape(word.target)}</p>'
        )

    html = (
        f'<div style="background-color: {style.bg_color}; padding: {CARD_PADDING}; '
        'border-radius: 15px; text-align: center; box-shadow: 0 4px 6px '
        f'rgba(0, 0, 0, 0.1); min-height: {CARD_MIN_HEIGHT}; display: flex; '
        'flex-direction: column; align-items: center; justify-content: center; '
        f'position: relative;">{corner_html}{main_html}{subtitle_html}</div>'
    )

    st.markdown(html, unsafe_allow_html=True)
