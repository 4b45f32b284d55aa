"""
Undo history for rating changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HistoryEntry:
    """
    Snapshot taken right before a rating mutation.
    """
    word_id: str
    previous_stars: int
    index: int


class HistoryStack:
    """
    LIFO of history entries, living only as long as its session.

    Unbounded by default; pass max_entries to drop the oldest entries once
    the bound is reached.
    """

    def __init__(self, max_entries: Optional[int] = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._entries: list[HistoryEntry] = []
        self._max_entries = max_entries

    def push(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)
        if self._max_entries is not None and len(self._entries) > self._max_entries:
            del self._entries[0]

    def pop_last(self) -> Optional[HistoryEntry]:
        """Remove and return the most recent entry, or None when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
