"""
Flashcard Constants

Star levels, swipe directions and cache keys in one place.
"""

from enum import Enum


# ---- Star Levels ----

MIN_STARS = 0   # Unseen / new word
MAX_STARS = 5   # Fully mastered
FLIPPED_STARS = 1  # Level assigned when the learner needs to see the answer


# ---- Swipe Directions ----

class SwipeDirection(str, Enum):
    """Learner verdict on the current card."""
    LEFT = "left"    # Didn't know it
    RIGHT = "right"  # Knew it


# ---- Packages ----

ALL_PACKAGES = "all"  # Sentinel for "no package filter"


# ---- Local Cache Keys ----

PROGRESS_CACHE_KEY = "flashcard-progress"  # Legacy device-wide {word_id: stars} map
SESSION_CACHE_KEY = "flashcard-session"    # Resumable session snapshot


# ---- Card Stack ----

VISIBLE_CARDS = 3  # Cards shown stacked on the study page
