"""
Local durable cache - device-scoped key/value storage.

Holds the legacy {word_id: stars} progress map and the resumable session
snapshot. Survives restarts when backed by the sqlite file.
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Optional, Protocol

from core.errors import PersistenceError


class LocalCache(Protocol):
    """Minimal key/value capability used by the rating store and synchronizer."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryLocalCache:
    """
    Dict-backed cache (tests and throwaway runs).
    """

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class SqliteLocalCache:
    """
    sqlite3-backed cache stored in a single file.

    A fresh connection is opened per call, so the cache can be used from
    the background write worker as well as the caller's thread.
    """

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path, timeout=5.0)

    def _init_db(self) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_cache (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """)
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv_cache WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not read {key!r} from local cache: {e}") from e
        return None if row is None else str(row[0])

    def set(self, key: str, value: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO kv_cache (key, value) VALUES (?, ?)
                        ON CONFLICT(key) DO UPDATE SET value = excluded.value
                        """,
                        (key, value),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not write {key!r} to local cache: {e}") from e

    def delete(self, key: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute("DELETE FROM kv_cache WHERE key = ?", (key,))
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not delete {key!r} from local cache: {e}") from e
