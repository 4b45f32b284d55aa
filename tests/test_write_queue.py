import logging
import threading

from core.errors import PersistenceError
from core.progress.write_queue import WriteQueue


def test_writes_run_in_dispatch_order() -> None:
    gate = threading.Event()
    seen = []

    with WriteQueue() as queue:
        queue.submit("blocked", gate.wait, 5)
        for i in range(5):
            queue.submit(f"write {i}", seen.append, i)
        assert queue.pending() >= 1
        gate.set()
        assert queue.wait_all(timeout=5) == 6

    assert seen == [0, 1, 2, 3, 4]


def test_submit_does_not_block_caller() -> None:
    gate = threading.Event()
    queue = WriteQueue()
    try:
        future = queue.submit("slow write", gate.wait, 5)
        assert future is not None
        assert not future.done()
    finally:
        gate.set()
        queue.shutdown()


def test_failed_write_is_logged_and_swallowed(caplog) -> None:
    def broken(*args):
        raise PersistenceError("disk full")

    seen = []
    queue = WriteQueue()
    with caplog.at_level(logging.WARNING, logger="core.progress.write_queue"):
        queue.submit("save progress", broken)
        queue.submit("save session", seen.append, "ok")
        completed = queue.wait_all(timeout=5)
    queue.shutdown()

    assert seen == ["ok"]
    assert completed <= 1
    assert "Write failed (save progress): disk full" in caplog.text


def test_unexpected_error_is_swallowed(caplog) -> None:
    queue = WriteQueue()
    queue.disable()

    with caplog.at_level(logging.ERROR, logger="core.progress.write_queue"):
        result = queue.submit("bad write", lambda: 1 / 0)

    assert result is None
    assert "Unexpected error during write (bad write)" in caplog.text


def test_disabled_queue_runs_synchronously() -> None:
    seen = []
    queue = WriteQueue()
    queue.disable()

    assert queue.submit("write", seen.append, "x") is None
    assert seen == ["x"]
    assert queue.pending() == 0
