"""
Flashcard style presets and constants.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---- Shared Card Layout ----

CARD_PADDING = "35px 24px"
CARD_MIN_HEIGHT = "210px"
FRONT_BG_COLOR = "#f0f2f6"
BACK_BG_COLOR = "#e8f4f8"


# ---- Star Badge Colors (index = star level) ----

STAR_COLORS = ["#9ca3af", "#ef4444", "#f97316", "#eab308", "#84cc16", "#22c55e"]


@dataclass(frozen=True)
class FlashcardStyle:
    """
    Visual style preset for flashcards.
    """
    main_font_size: str = "3em"
    main_color: str = "#1f1f1f"
    subtitle_font_size: str = "1.4em"
    subtitle_color: str = "#444"
    corner_font_size: str = "0.9em"
    corner_color: str = "#666"
    bg_color: str = FRONT_BG_COLOR


FRONT_STYLE = FlashcardStyle()
BACK_STYLE = FlashcardStyle(bg_color=BACK_BG_COLOR)
