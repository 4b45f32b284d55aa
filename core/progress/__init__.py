"""
Progress persistence - remote store, local cache and background writes.
"""

from core.progress.database import (
    RemoteProgressStore,
    get_database_url,
    init_db,
    reset_db,
)
from core.progress.local_cache import LocalCache, MemoryLocalCache, SqliteLocalCache
from core.progress.write_queue import WriteQueue

__all__ = [
    "RemoteProgressStore",
    "get_database_url",
    "init_db",
    "reset_db",
    "LocalCache",
    "MemoryLocalCache",
    "SqliteLocalCache",
    "WriteQueue",
]
