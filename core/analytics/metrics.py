"""
Metric computations for the word overview and progress bar.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from core.constants import MAX_STARS, MIN_STARS
from core.schemas import Word
from core.session_builder import next_session_size

STAR_LEVELS = list(range(MIN_STARS, MAX_STARS + 1))
WORD_COLUMNS = ["id", "source", "target", "level", "stars", "package_name"]


def group_words_by_stars(words: Sequence[Word]) -> dict[int, list[Word]]:
    """
    Bucket words by star level; every level 0-5 is present.
    """
    groups: dict[int, list[Word]] = {stars: [] for stars in STAR_LEVELS}
    for word in words:
        groups[word.stars].append(word)
    return groups


def progress_percentage(words: Sequence[Word]) -> float:
    """
    How close the next session is to its minimum size, as 0-100.

    A word set of n words needs between n draws (all mastered) and 5n draws
    (all at 1 star); progress is where the next session size falls in
    that range.
    """
    if not words:
        return 0.0

    min_size = len(words)
    max_size = len(words) * MAX_STARS
    if max_size == min_size:
        return 0.0

    progress = (max_size - next_session_size(words)) / (max_size - min_size) * 100
    return max(0.0, min(100.0, progress))


def words_frame(words: Sequence[Word]) -> pd.DataFrame:
    """
    Words as a dataframe for tabular display.
    """
    if not words:
        return pd.DataFrame(columns=WORD_COLUMNS)
    return pd.DataFrame([word.model_dump(include=set(WORD_COLUMNS)) for word in words])[WORD_COLUMNS]


def star_distribution(words: Sequence[Word]) -> pd.Series:
    """
    Word count per star level, indexed 0-5 with zeros for empty levels.
    """
    counts = pd.Series([word.stars for word in words], dtype="int64").value_counts()
    return counts.reindex(STAR_LEVELS, fill_value=0).rename("words")
