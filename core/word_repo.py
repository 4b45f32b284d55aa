"""
Word supply - MongoDB repository for the learner's word catalog.

Provides functions to fetch words (optionally filtered by package), list the
available packages, and follow catalog changes through a change stream.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Iterable, Optional, Protocol

from pydantic import ValidationError
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from core.errors import WordSupplyError
from core.schemas import Word, normalize_package
from core.word_import import load_word_csv

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_DB_NAME = "flashcards"
DEFAULT_COLLECTION_NAME = "learned_words"
WATCH_POLL_MS = 1000

# Global connection pool (reused across requests)
_client: Optional[MongoClient] = None
_collection: Optional[Collection] = None


class WordSupply(Protocol):
    """Source of the active word set."""

    def fetch(self, package: Optional[str] = None) -> list[Word]: ...

    def list_packages(self) -> list[str]: ...


# ---- Connection Management ----

def get_collection() -> Collection:
    """
    Get the shared MongoDB words collection.

    Raises:
        ValueError: If MONGO_URI is not set
    """
    global _client, _collection

    if _collection is not None:
        return _collection

    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        raise ValueError("MONGO_URI not found in environment variables")

    _client = MongoClient(
        mongo_uri,
        maxPoolSize=10,  # Connection pool size
        minPoolSize=1,   # Keep at least 1 connection alive
        maxIdleTimeMS=60000  # Keep connections alive for 60 seconds
    )
    db = _client[os.getenv("MONGO_DB_NAME", DEFAULT_DB_NAME)]
    _collection = db[os.getenv("WORDS_COLLECTION", DEFAULT_COLLECTION_NAME)]

    return _collection


def _package_query(package: Optional[str]) -> dict:
    """Match a package by id or display name."""
    package = normalize_package(package)
    if package is None:
        return {}
    return {"$or": [{"package_id": package}, {"package_name": package}]}


def _to_words(docs: Iterable[dict]) -> list[Word]:
    words = []
    for doc in docs:
        try:
            words.append(Word.from_document(doc))
        except ValidationError as e:
            logger.warning("Skipping malformed word document %r: %s", doc.get("_id"), e)
    return words


# ---- Mongo Supply ----

class MongoWordSupply:
    """
    Words stored in MongoDB, scoped to one learner when an identity is given.
    """

    def __init__(
        self,
        collection: Optional[Collection] = None,
        learner_id: Optional[str] = None,
    ) -> None:
        self._collection = collection
        self._learner_id = learner_id

    def _get_collection(self) -> Collection:
        if self._collection is None:
            try:
                self._collection = get_collection()
            except ValueError as e:
                raise WordSupplyError(str(e)) from e
        return self._collection

    def _base_query(self) -> dict:
        return {"user_id": self._learner_id} if self._learner_id else {}

    def fetch(self, package: Optional[str] = None) -> list[Word]:
        """
        Fetch the active word set in insertion order.

        Args:
            package: Package id/name, or None / "all" for every word

        Returns:
            List of words (ratings as stored in the catalog)
        """
        query = {**self._base_query(), **_package_query(package)}
        try:
            docs = self._get_collection().find(query).sort("added_at", ASCENDING)
            return _to_words(docs)
        except PyMongoError as e:
            raise WordSupplyError(f"Failed to fetch words: {e}") from e

    def list_packages(self) -> list[str]:
        """Distinct package names, sorted."""
        try:
            names = self._get_collection().distinct("package_name", self._base_query())
        except PyMongoError as e:
            raise WordSupplyError(f"Failed to list packages: {e}") from e
        return sorted(name for name in names if name)

    def subscribe(self, on_change: Callable[[], None]) -> "WordWatch":
        """
        Call on_change() for every change to the words collection.

        Follows a MongoDB change stream (replica set required) on a daemon
        thread until the returned watch is closed or the stream fails.

        Raises:
            WordSupplyError: If the change stream cannot be opened
        """
        try:
            stream = self._get_collection().watch(max_await_time_ms=WATCH_POLL_MS)
        except PyMongoError as e:
            raise WordSupplyError(f"Failed to watch words: {e}") from e
        return WordWatch(stream, on_change)


class WordWatch:
    """
    Running change-stream subscription; close() stops the thread and the cursor.
    """

    def __init__(self, stream, on_change: Callable[[], None]) -> None:
        self._stream = stream
        self._on_change = on_change
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._follow, name="word-catalog-watch", daemon=True)
        self._thread.start()

    def _follow(self) -> None:
        try:
            while not self._stopped.is_set() and self._stream.alive:
                # returns None once max_await_time_ms passes without a change
                change = self._stream.try_next()
                if change is None or self._stopped.is_set():
                    continue
                logger.debug("Word catalog change: %s", change.get("operationType"))
                self._on_change()
        except PyMongoError as e:
            logger.warning("Word catalog subscription ended: %s", e)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def close(self, timeout: Optional[float] = None) -> None:
        self._stopped.set()
        self._thread.join(timeout)
        try:
            self._stream.close()
        except PyMongoError as e:
            logger.warning("Could not close word catalog stream: %s", e)


# ---- In-memory Supply ----

class StaticWordSupply:
    """
    Fixed word list (tests, demos, offline use).
    """

    def __init__(self, words: Iterable[Word]) -> None:
        self._words = list(words)

    def fetch(self, package: Optional[str] = None) -> list[Word]:
        package = normalize_package(package)
        if package is None:
            return list(self._words)
        return [w for w in self._words if package in (w.package_id, w.package_name)]

    def list_packages(self) -> list[str]:
        return sorted({w.package_name for w in self._words if w.package_name})

    @classmethod
    def from_csv(cls, path: Path | str) -> "StaticWordSupply":
        """Words from a semicolon-separated word list file."""
        return cls(load_word_csv(path))
