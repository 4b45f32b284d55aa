"""
Swipe Button UI

Renders the "don't know" / "know it" verdict buttons.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from core.constants import SwipeDirection


def render_swipe_buttons(key_suffix: str = "") -> Optional[SwipeDirection]:
    """
    Render the two verdict buttons.

    Returns:
        SwipeDirection selected by the learner, or None if no button clicked
    """
    col_left, col_right = st.columns(2)

    with col_left:
        if st.button("← Don't know", use_container_width=True, key=f"swipe_left_{key_suffix}"):
            return SwipeDirection.LEFT

    with col_right:
        if st.button("Know it →", type="primary", use_container_width=True, key=f"swipe_right_{key_suffix}"):
            return SwipeDirection.RIGHT

    return None
