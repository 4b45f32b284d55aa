"""
Simple page router for Streamlit tabs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from app.pages.study import render_study_page
from app.pages.words import render_words_page
from core.trainer import FlashcardTrainer


@dataclass(frozen=True)
class AppPage:
    title: str
    render: Callable[[FlashcardTrainer], None]


PAGES = [
    AppPage(title="Study", render=render_study_page),
    AppPage(title="All Words", render=render_words_page),
]
