"""
Analytics package exports.
"""

from core.analytics.metrics import (
    group_words_by_stars,
    progress_percentage,
    star_distribution,
    words_frame,
)
from core.analytics.service import build_word_overview
from core.analytics.types import WordOverview

__all__ = [
    "group_words_by_stars",
    "progress_percentage",
    "star_distribution",
    "words_frame",
    "build_word_overview",
    "WordOverview",
]
