"""
Fire-and-forget write queue for persistence I/O.

Writes are dispatched to a single background worker so that state transitions
never wait on the network or the disk. One worker means writes execute in
dispatch order, so a later write for the same key always lands last.

Delivery is best-effort and at-most-once: a failed write is logged and
dropped, and the next successful write supersedes it.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, List, Optional

from core.errors import PersistenceError

logger = logging.getLogger(__name__)


class WriteQueue:
    """
    Background queue for persistence writes.

    Usage:
        queue = WriteQueue()
        queue.submit("save session", cache.set, key, payload)
        ...
        queue.shutdown()  # drains pending writes

    Call disable() to run writes synchronously (tests, scripts).
    """

    def __init__(self) -> None:
        self._executor: Optional[ThreadPoolExecutor] = None
        self._futures: List[Future] = []
        self._enabled = True

    def submit(self, description: str, fn: Callable[..., Any], *args: Any) -> Optional[Future]:
        """
        Queue a write without waiting for it.

        Args:
            description: Human-readable label used in failure logs
            fn: Callable performing the write
            *args: Arguments for fn

        Returns:
            Future if queued, None when running synchronously
        """
        if not self._enabled:
            _run_write(description, fn, *args)
            return None

        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="flashcard-writes")
        future = self._executor.submit(_run_write, description, fn, *args)
        self._futures = [f for f in self._futures if not f.done()]
        self._futures.append(future)
        return future

    def wait_all(self, timeout: Optional[float] = None) -> int:
        """
        Wait for all queued writes to finish.

        Returns:
            Number of writes that completed successfully.
        """
        completed = 0
        for future in self._futures:
            if future.result(timeout=timeout):
                completed += 1
        self._futures.clear()
        return completed

    def pending(self) -> int:
        return sum(1 for f in self._futures if not f.done())

    def shutdown(self) -> None:
        """Drain pending writes and stop the worker."""
        self.wait_all()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def disable(self) -> None:
        """Run subsequent writes synchronously."""
        self._enabled = False

    def __enter__(self) -> "WriteQueue":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()


def _run_write(description: str, fn: Callable[..., Any], *args: Any) -> bool:
    """Execute one write, logging and swallowing failures."""
    try:
        fn(*args)
    except PersistenceError as e:
        logger.warning("Write failed (%s): %s", description, e)
        return False
    except Exception:
        logger.exception("Unexpected error during write (%s)", description)
        return False
    return True
