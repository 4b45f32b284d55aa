"""
Package selector UI.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

ALL_WORDS_LABEL = "All Words"


def render_package_selector(packages: list[str], selected: Optional[str]) -> Optional[str]:
    """
    Render the package dropdown.

    Returns:
        The newly chosen package (None for all words) if it changed,
        otherwise the current selection
    """
    options = [ALL_WORDS_LABEL] + packages
    if selected and selected not in packages:
        options.append(selected)
    current = selected or ALL_WORDS_LABEL
    choice = st.selectbox("📦 Package", options, index=options.index(current))
    return None if choice == ALL_WORDS_LABEL else choice
