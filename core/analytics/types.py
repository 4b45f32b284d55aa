"""
Types for the word overview.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class WordOverview:
    """
    Precomputed numbers and series for the words page.
    """
    total_words: int
    next_session_size: int
    progress_percentage: float
    star_distribution: pd.Series
    words: pd.DataFrame
