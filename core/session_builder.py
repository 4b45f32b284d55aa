"""
Session Builder - Weighted Shuffle

Expands a word set into a shuffled multiset of draws:
- New words (0 stars) appear once
- Rated words appear 6 - stars times (1 star -> 5 draws, 5 stars -> 1 draw)

The weighted multiset is shuffled with random.shuffle (Fisher-Yates), so every
permutation is equally likely.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from core.constants import MAX_STARS, MIN_STARS
from core.schemas import Word

logger = logging.getLogger(__name__)


def repeat_count(stars: int) -> int:
    """
    Number of draws a word gets in the next session.

    Args:
        stars: Current rating (0-5)

    Returns:
        1 for unseen words, otherwise 6 - stars
    """
    if stars == MIN_STARS:
        return 1
    return MAX_STARS + 1 - stars


def build_session(words: Sequence[Word], rng: Optional[random.Random] = None) -> list[Word]:
    """
    Build a shuffled session from a word set.

    Args:
        words: Words with their current ratings attached
        rng: Optional random source (for reproducible shuffles)

    Returns:
        List of draws (words may repeat); empty when there is nothing to learn
    """
    session: list[Word] = []
    for word in words:
        session.extend([word] * repeat_count(word.stars))

    (rng or random).shuffle(session)
    return session


def next_session_size(words: Sequence[Word]) -> int:
    """Total draws a fresh session would contain for these ratings."""
    return sum(repeat_count(word.stars) for word in words)


def restore_draws(
    word_ids: Sequence[str],
    current_index: int,
    words: Sequence[Word]
) -> Optional[list[Word]]:
    """
    Rebuild a persisted draw sequence against the current word set.

    Returns None (snapshot rejected) when a referenced word is gone from the
    word set, or when the cursor does not point inside the sequence.
    """
    word_map = {word.id: word for word in words}
    missing = [word_id for word_id in word_ids if word_id not in word_map]
    if missing:
        logger.info("Rejecting session snapshot: %d unknown word ids", len(missing))
        return None

    draws = [word_map[word_id] for word_id in word_ids]
    if not 0 <= current_index < len(draws):
        logger.info(
            "Rejecting session snapshot: index %d outside session of %d draws",
            current_index,
            len(draws),
        )
        return None
    return draws
