"""
Flashcard Trainer - top-level facade.

Ties the word supply, rating store, session state machine and progress
synchronizer together and reports a status the UI can render:

- LOADING:  start() not called yet
- READY:    a session is active
- COMPLETE: the current round is finished
- EMPTY:    the word set is empty, nothing to learn
- ERROR:    the word supply failed; call retry()
"""

from __future__ import annotations

import logging
import random
import threading
from enum import Enum
from typing import Optional

from core import config
from core.constants import ALL_PACKAGES, SwipeDirection
from core.errors import PersistenceError, WordSupplyError
from core.history import HistoryEntry
from core.progress.database import RemoteProgressStore
from core.progress.local_cache import SqliteLocalCache
from core.progress.synchronizer import ProgressSynchronizer
from core.progress.write_queue import WriteQueue
from core.rating_store import RatingStore
from core.schemas import Word, normalize_package
from core.session_machine import LearningSession
from core.word_repo import MongoWordSupply, StaticWordSupply, WordSupply, WordWatch
from core.analytics.metrics import progress_percentage

logger = logging.getLogger(__name__)


class TrainerStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    COMPLETE = "complete"
    EMPTY = "empty"
    ERROR = "error"


class FlashcardTrainer:
    """
    One learner's flashcard round over the selected package.
    """

    def __init__(
        self,
        supply: WordSupply,
        rating_store: RatingStore,
        synchronizer: ProgressSynchronizer,
        write_queue: Optional[WriteQueue] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._supply = supply
        self._rating_store = rating_store
        self._synchronizer = synchronizer
        self._write_queue = write_queue
        self._rng = rng
        self._words: list[Word] = []
        self._session: Optional[LearningSession] = None
        self._selected_package: Optional[str] = None
        self._error: Optional[str] = None
        self._started = False
        self._ratings_loaded = False
        self._words_changed = threading.Event()
        self._watch: Optional[WordWatch] = None

    # ---- Inspection ----

    @property
    def status(self) -> TrainerStatus:
        if self._error is not None:
            return TrainerStatus.ERROR
        if not self._started:
            return TrainerStatus.LOADING
        if self._session is None:
            return TrainerStatus.EMPTY
        if self._session.is_complete:
            return TrainerStatus.COMPLETE
        return TrainerStatus.READY

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def session(self) -> Optional[LearningSession]:
        return self._session

    @property
    def selected_package(self) -> Optional[str]:
        return self._selected_package

    @property
    def words(self) -> list[Word]:
        """Active word set with current ratings."""
        return self._rating_store.attach(self._words)

    @property
    def can_undo(self) -> bool:
        return self._session is not None and not self._session.history.is_empty()

    def progress_percentage(self) -> float:
        return progress_percentage(self.words)

    def packages(self) -> list[str]:
        try:
            return self._supply.list_packages()
        except WordSupplyError as e:
            logger.error("Could not list packages: %s", e)
            return []

    # ---- Loading ----

    def _fetch_words(self, package: Optional[str]) -> bool:
        try:
            self._words = self._supply.fetch(package)
        except WordSupplyError as e:
            logger.error("Word supply failed: %s", e)
            self._error = str(e)
            self._words = []
            self._session = None
            return False
        self._error = None
        return True

    def start(self, selected_package: Optional[str] = None) -> TrainerStatus:
        """
        Load ratings and words, then resume or build a session.

        Pending writes are drained before the stored state is read. Ratings
        are loaded from the durable tiers once; later calls (retry) keep the
        in-memory map, which is always at least as fresh.

        Args:
            selected_package: Package to study; None resumes the stored
                package, "all" studies every word
        """
        self._started = True
        if self._write_queue is not None:
            self._write_queue.wait_all()
        if not self._ratings_loaded:
            self._rating_store.load()
            self._ratings_loaded = True
        snapshots = self._synchronizer.load_snapshots()

        if selected_package is None and snapshots:
            package = snapshots[0].selected_package
        else:
            package = normalize_package(selected_package)
        self._selected_package = package

        if not self._fetch_words(package):
            return self.status
        if not self._words:
            logger.info("Nothing to learn in package %r", package)
            self._session = None
            return self.status

        self._session = self._synchronizer.resume_session(
            self._words,
            self._rating_store,
            selected_package=package,
            rng=self._rng,
            snapshots=snapshots,
        )
        return self.status

    def retry(self) -> TrainerStatus:
        """Fetch the words again after a word supply failure."""
        return self.start(self._selected_package or ALL_PACKAGES)

    def select_package(self, selected_package: Optional[str]) -> TrainerStatus:
        """
        Switch package: refetch the word set and start a new round.
        """
        package = normalize_package(selected_package)
        self._started = True
        self._selected_package = package
        self._synchronizer.set_package(package)

        if not self._fetch_words(package):
            return self.status

        if not self._words:
            self._session = None
            self._synchronizer.clear_session()
            return self.status

        if self._session is None:
            self._session = LearningSession.new(self._words, self._rating_store, rng=self._rng)
            self._synchronizer.attach(self._session, package)
            self._synchronizer.save_session(self._session)
        else:
            self._session.restart(self._words)
        return self.status

    def refresh_words(self) -> TrainerStatus:
        """
        Refetch the word set after a catalog change.

        The running round keeps its draws; a new round picks up the changes.
        """
        if not self._fetch_words(self._selected_package):
            return self.status
        if self._session is None and self._words:
            self._session = self._synchronizer.resume_session(
                self._words,
                self._rating_store,
                selected_package=self._selected_package,
                rng=self._rng,
            )
        return self.status

    def watch_words(self) -> bool:
        """
        Follow word catalog changes when the supply supports it.

        Changes are only flagged here; refresh_if_changed() applies them on
        the caller's thread.

        Returns:
            True if a subscription was started
        """
        if self._watch is not None:
            return True
        subscribe = getattr(self._supply, "subscribe", None)
        if subscribe is None:
            return False
        try:
            self._watch = subscribe(self._words_changed.set)
        except WordSupplyError as e:
            logger.warning("Not following word catalog changes: %s", e)
            return False
        return True

    def refresh_if_changed(self) -> TrainerStatus:
        if self._words_changed.is_set():
            self._words_changed.clear()
            return self.refresh_words()
        return self.status

    # ---- Session Actions ----

    def flip(self) -> bool:
        return self._session.flip() if self._session is not None else False

    def swipe(self, direction: SwipeDirection | str) -> Optional[int]:
        return self._session.swipe(direction) if self._session is not None else None

    def undo(self) -> Optional[HistoryEntry]:
        return self._session.undo() if self._session is not None else None

    def restart(self) -> bool:
        """
        Start a new round over the current word set.

        Returns:
            False when there is nothing to learn
        """
        if self._session is None:
            if not self._words:
                return False
            self._session = LearningSession.new(self._words, self._rating_store, rng=self._rng)
            self._synchronizer.attach(self._session, self._selected_package)
            self._synchronizer.save_session(self._session)
            return True
        return self._session.restart(self._words)

    def close(self) -> None:
        """Stop following the catalog and drain background writes."""
        if self._watch is not None:
            self._watch.close()
            self._watch = None
        if self._write_queue is not None:
            self._write_queue.shutdown()


def build_trainer(
    learner_id: Optional[str] = None,
    supply: Optional[WordSupply] = None,
) -> FlashcardTrainer:
    """
    Wire a trainer from the environment.

    Without a learner identity, or when the remote store is not configured
    or unreachable, the trainer runs local-only. WORDS_CSV_PATH replaces the
    MongoDB word supply with a fixed word list.
    """
    learner_id = config.get_learner_id(learner_id)
    write_queue = WriteQueue()
    local_cache = SqliteLocalCache(config.get_local_cache_path())

    remote = None
    if learner_id is not None:
        try:
            remote = RemoteProgressStore.from_env()
        except PersistenceError as e:
            logger.warning("Remote progress store unavailable, running local-only: %s", e)

    if remote is None:
        logger.info("Running in local-only mode")

    if supply is None:
        csv_path = config.get_words_csv_path()
        if csv_path is not None:
            logger.info("Reading words from %s", csv_path)
            supply = StaticWordSupply.from_csv(csv_path)
        else:
            supply = MongoWordSupply(learner_id=learner_id)

    return FlashcardTrainer(
        supply=supply,
        rating_store=RatingStore(local_cache, remote, learner_id, write_queue),
        synchronizer=ProgressSynchronizer(local_cache, remote, learner_id, write_queue),
        write_queue=write_queue,
    )
