"""
Session State Machine

Drives the cursor through a built session:

    ACTIVE(index, draws, history) --swipe on last draw--> COMPLETE
    COMPLETE --undo--> ACTIVE(entry.index)
    any --restart(words)--> ACTIVE(0, fresh draws, empty history)

All transitions are synchronous and in-memory. Persistence happens in
listeners (see core.progress.synchronizer), which only dispatch background
writes and never block a transition.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Optional, Sequence

from core.constants import FLIPPED_STARS, MAX_STARS, VISIBLE_CARDS, SwipeDirection
from core.history import HistoryEntry, HistoryStack
from core.rating_store import RatingStore
from core.schemas import SessionSnapshot, Word
from core.session_builder import build_session, restore_draws

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ACTIVE = "active"
    COMPLETE = "complete"


class SessionEvent(str, Enum):
    """What changed, passed to session listeners."""
    FLIP = "flip"
    SWIPE = "swipe"
    UNDO = "undo"
    RESTART = "restart"


SessionListener = Callable[["LearningSession", SessionEvent], None]


class LearningSession:
    """
    One round through a weighted, shuffled sequence of draws.
    """

    def __init__(
        self,
        draws: Sequence[Word],
        rating_store: RatingStore,
        index: int = 0,
        rng: Optional[random.Random] = None,
        max_history: Optional[int] = None,
    ) -> None:
        if draws and not 0 <= index < len(draws):
            raise ValueError(f"index {index} outside session of {len(draws)} draws")
        self._draws: list[Word] = list(draws)
        self._index = index if draws else 0
        self._complete = False
        self._rating_store = rating_store
        self._rng = rng
        self._listeners: list[SessionListener] = []
        self.history = HistoryStack(max_history)

    # ---- Construction ----

    @classmethod
    def new(
        cls,
        words: Sequence[Word],
        rating_store: RatingStore,
        rng: Optional[random.Random] = None,
        max_history: Optional[int] = None,
    ) -> "LearningSession":
        """Build a fresh session from the word set's effective ratings."""
        draws = build_session(rating_store.attach(words), rng=rng)
        return cls(draws, rating_store, rng=rng, max_history=max_history)

    @classmethod
    def restore(
        cls,
        snapshot: SessionSnapshot,
        words: Sequence[Word],
        rating_store: RatingStore,
        rng: Optional[random.Random] = None,
        max_history: Optional[int] = None,
    ) -> Optional["LearningSession"]:
        """
        Resume a persisted session, or None if the snapshot is no longer valid.

        History always starts empty: undo does not survive a restart.
        """
        draws = restore_draws(snapshot.word_ids, snapshot.current_index, words)
        if draws is None:
            return None
        return cls(draws, rating_store, index=snapshot.current_index, rng=rng, max_history=max_history)

    # ---- Inspection ----

    @property
    def state(self) -> SessionState:
        return SessionState.COMPLETE if self._complete else SessionState.ACTIVE

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def index(self) -> int:
        return self._index

    @property
    def draws(self) -> tuple[Word, ...]:
        return tuple(self._draws)

    def __len__(self) -> int:
        return len(self._draws)

    @property
    def is_empty(self) -> bool:
        return not self._draws

    def _can_act(self) -> bool:
        return not self._complete and self._index < len(self._draws)

    @property
    def current_word(self) -> Optional[Word]:
        """The word under the cursor with its current rating, if any."""
        if not self._can_act():
            return None
        word = self._draws[self._index]
        return word.with_stars(self._rating_store.get_rating(word.id))

    def upcoming(self, count: int = VISIBLE_CARDS) -> list[Word]:
        """The next `count` draws from the cursor (the visible card stack)."""
        if self._complete:
            return []
        return [
            word.with_stars(self._rating_store.get_rating(word.id))
            for word in self._draws[self._index:self._index + count]
        ]

    @property
    def position_label(self) -> str:
        return f"{self._index + 1} / {len(self._draws)}"

    def snapshot(self, selected_package: Optional[str] = None) -> SessionSnapshot:
        return SessionSnapshot(
            word_ids=[word.id for word in self._draws],
            current_index=self._index,
            selected_package=selected_package,
        )

    # ---- Listeners ----

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def _notify(self, event: SessionEvent) -> None:
        for listener in self._listeners:
            listener(self, event)

    # ---- Transitions ----

    def flip(self) -> bool:
        """
        Reveal the answer: drops the current word to 1 star.

        Does not move the cursor. A word already at 1 star is left alone
        and no history entry is recorded.

        Returns:
            True if the rating changed
        """
        if not self._can_act():
            return False

        word_id = self._draws[self._index].id
        stars = self._rating_store.get_rating(word_id)
        if stars == FLIPPED_STARS:
            return False

        self.history.push(HistoryEntry(word_id=word_id, previous_stars=stars, index=self._index))
        self._rating_store.set_rating(word_id, FLIPPED_STARS)
        self._notify(SessionEvent.FLIP)
        return True

    def swipe(self, direction: SwipeDirection | str) -> Optional[int]:
        """
        Grade the current word and advance.

        Right adds a star (capped at 5); left resets to 1 star.
        Swiping the last draw completes the session.

        Returns:
            The new rating, or None if there was nothing to grade
        """
        if not self._can_act():
            return None
        direction = SwipeDirection(direction)

        word_id = self._draws[self._index].id
        stars = self._rating_store.get_rating(word_id)
        self.history.push(HistoryEntry(word_id=word_id, previous_stars=stars, index=self._index))

        if direction is SwipeDirection.RIGHT:
            new_stars = min(stars + 1, MAX_STARS)
        else:
            new_stars = FLIPPED_STARS
        self._rating_store.set_rating(word_id, new_stars)

        if self._index + 1 == len(self._draws):
            self._complete = True
        else:
            self._index += 1

        self._notify(SessionEvent.SWIPE)
        return new_stars

    def undo(self) -> Optional[HistoryEntry]:
        """
        Revert the most recent rating change and move the cursor back to it.

        Re-activates a completed session.

        Returns:
            The reverted entry, or None when there is nothing to undo
        """
        entry = self.history.pop_last()
        if entry is None:
            return None

        self._rating_store.set_rating(entry.word_id, entry.previous_stars)
        self._index = entry.index
        self._complete = False
        self._notify(SessionEvent.UNDO)
        return entry

    def restart(self, words: Sequence[Word]) -> bool:
        """
        Start a new round over the given word set.

        Returns:
            False (and changes nothing) when the word set is empty
        """
        if not words:
            return False

        self._draws = build_session(self._rating_store.attach(words), rng=self._rng)
        self._index = 0
        self._complete = False
        self.history.clear()
        logger.info("Started new session with %d draws from %d words", len(self._draws), len(words))
        self._notify(SessionEvent.RESTART)
        return True
