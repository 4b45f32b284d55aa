"""
Progress Synchronizer

Reconciles the resumable session across three tiers:
- remote session snapshot (per learner, only with a learner identity)
- local session snapshot (device-wide, SESSION_CACHE_KEY)
- a freshly built session

On start the first valid snapshot wins in that order. Every later mutation
queues a snapshot write to both tiers; completion deletes both snapshots so
a finished round leaves nothing to resume.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from pydantic import ValidationError

from core.constants import SESSION_CACHE_KEY
from core.errors import PersistenceError
from core.progress.database import RemoteProgressStore
from core.progress.local_cache import LocalCache
from core.progress.write_queue import WriteQueue
from core.rating_store import RatingStore
from core.schemas import SessionSnapshot, Word, normalize_package
from core.session_machine import LearningSession, SessionEvent

logger = logging.getLogger(__name__)


class ProgressSynchronizer:
    """
    Keeps persisted session snapshots in step with the live session.
    """

    def __init__(
        self,
        local_cache: LocalCache,
        remote: Optional[RemoteProgressStore] = None,
        learner_id: Optional[str] = None,
        write_queue: Optional[WriteQueue] = None,
    ) -> None:
        self._local_cache = local_cache
        self._remote = remote
        self._learner_id = learner_id
        self._write_queue = write_queue or WriteQueue()
        self._selected_package: Optional[str] = None

    @property
    def remote_enabled(self) -> bool:
        return self._remote is not None and self._learner_id is not None

    @property
    def selected_package(self) -> Optional[str]:
        return self._selected_package

    # ---- Loading ----

    def load_remote_snapshot(self) -> Optional[SessionSnapshot]:
        if not self.remote_enabled:
            return None
        try:
            return self._remote.load_session(self._learner_id)
        except PersistenceError as e:
            logger.warning("Remote session unavailable: %s", e)
            return None

    def load_local_snapshot(self) -> Optional[SessionSnapshot]:
        try:
            raw = self._local_cache.get(SESSION_CACHE_KEY)
        except PersistenceError as e:
            logger.warning("Local session unavailable: %s", e)
            return None
        if not raw:
            return None
        try:
            return SessionSnapshot.model_validate_json(raw)
        except ValidationError:
            logger.info("Ignoring corrupt local session snapshot")
            return None

    def load_snapshots(self) -> list[SessionSnapshot]:
        """Stored snapshots in precedence order: remote first, then local."""
        snapshots = [self.load_remote_snapshot(), self.load_local_snapshot()]
        return [snapshot for snapshot in snapshots if snapshot is not None]

    def resume_session(
        self,
        words: Sequence[Word],
        rating_store: RatingStore,
        selected_package: Optional[str] = None,
        rng: Optional[random.Random] = None,
        snapshots: Optional[list[SessionSnapshot]] = None,
    ) -> LearningSession:
        """
        Resume the first valid stored session, or build a new one.

        A snapshot is skipped when it belongs to a different package or no
        longer matches the word set. The returned session is attached, so
        its later mutations are persisted.
        """
        selected_package = normalize_package(selected_package)
        if snapshots is None:
            snapshots = self.load_snapshots()

        session = None
        for snapshot in snapshots:
            if snapshot.selected_package != selected_package:
                logger.info("Skipping snapshot for package %r", snapshot.selected_package)
                continue
            session = LearningSession.restore(snapshot, words, rating_store, rng=rng)
            if session is not None:
                logger.info("Resumed session at %d of %d draws", session.index + 1, len(session))
                break

        if session is None:
            session = LearningSession.new(words, rating_store, rng=rng)
            logger.info("Built new session with %d draws", len(session))

        self.attach(session, selected_package)
        if not session.is_empty:
            self.save_session(session)
        return session

    # ---- Writing ----

    def attach(self, session: LearningSession, selected_package: Optional[str] = None) -> None:
        """Persist every future mutation of the session."""
        self._selected_package = normalize_package(selected_package)
        session.add_listener(self._on_session_change)

    def set_package(self, selected_package: Optional[str]) -> None:
        self._selected_package = normalize_package(selected_package)

    def _on_session_change(self, session: LearningSession, event: SessionEvent) -> None:
        if session.is_complete:
            self.clear_session()
            return
        if event is SessionEvent.RESTART:
            self.clear_session()
        if not session.is_empty:
            self.save_session(session)

    def save_session(self, session: LearningSession) -> None:
        """Queue snapshot writes to the local cache and, if enabled, the remote store."""
        snapshot = session.snapshot(self._selected_package)
        self._write_queue.submit(
            "save local session",
            self._local_cache.set,
            SESSION_CACHE_KEY,
            snapshot.model_dump_json(),
        )
        if self.remote_enabled:
            self._write_queue.submit(
                f"save remote session for learner {self._learner_id}",
                self._remote.save_session,
                self._learner_id,
                snapshot,
            )

    def clear_session(self) -> None:
        """Queue deletion of both stored snapshots."""
        self._write_queue.submit("clear local session", self._local_cache.delete, SESSION_CACHE_KEY)
        if self.remote_enabled:
            self._write_queue.submit(
                f"delete remote session for learner {self._learner_id}",
                self._remote.delete_session,
                self._learner_id,
            )
