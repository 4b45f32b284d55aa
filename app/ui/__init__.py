"""UI Components for the flashcard trainer"""

from app.ui.flashcard import render_flashcard, star_badge
from app.ui.session_stats import (
    render_progress_bar,
    render_session_counter,
    render_session_complete,
)
from app.ui.feedback_buttons import render_swipe_buttons
from app.ui.package_selector import render_package_selector

__all__ = [
    "render_flashcard",
    "star_badge",
    "render_progress_bar",
    "render_session_counter",
    "render_session_complete",
    "render_swipe_buttons",
    "render_package_selector",
]
