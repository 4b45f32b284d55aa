"""
Service layer assembling the word overview.
"""

from __future__ import annotations

from typing import Sequence

from core.analytics.metrics import progress_percentage, star_distribution, words_frame
from core.analytics.types import WordOverview
from core.schemas import Word
from core.session_builder import next_session_size


def build_word_overview(words: Sequence[Word]) -> WordOverview:
    """
    Build all values needed by the words page.
    """
    return WordOverview(
        total_words=len(words),
        next_session_size=next_session_size(words),
        progress_percentage=progress_percentage(words),
        star_distribution=star_distribution(words),
        words=words_frame(words),
    )
