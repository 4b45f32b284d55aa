import json
import threading

import pytest

from core.constants import PROGRESS_CACHE_KEY, SESSION_CACHE_KEY
from core.errors import WordSupplyError
from core.progress.local_cache import MemoryLocalCache
from core.progress.synchronizer import ProgressSynchronizer
from core.progress.write_queue import WriteQueue
from core.rating_store import RatingStore
from core.schemas import SessionSnapshot
from core.session_builder import repeat_count
from core.trainer import FlashcardTrainer, TrainerStatus, build_trainer
from core.word_repo import StaticWordSupply


class FlakySupply(StaticWordSupply):
    """Fails the first `failures` fetches, then serves the words."""

    def __init__(self, words, failures: int = 1) -> None:
        super().__init__(words)
        self.failures = failures

    def fetch(self, package=None):
        if self.failures:
            self.failures -= 1
            raise WordSupplyError("catalog unreachable")
        return super().fetch(package)


class ClosingWatch:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class GatedCache(MemoryLocalCache):
    """Local cache whose writes block until the gate opens."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = threading.Event()

    def set(self, key: str, value: str) -> None:
        self.gate.wait(5)
        super().set(key, value)


@pytest.fixture
def words(make_word):
    return [
        make_word("a", package="Fruit"),
        make_word("b", package="Fruit"),
        make_word("c", package="Animals"),
    ]


@pytest.fixture
def make_trainer(local_cache, rating_store, write_queue, rng):
    def _make(supply):
        synchronizer = ProgressSynchronizer(local_cache, write_queue=write_queue)
        return FlashcardTrainer(supply, rating_store, synchronizer, write_queue, rng)

    return _make


def test_status_loading_before_start(make_trainer, words) -> None:
    assert make_trainer(StaticWordSupply(words)).status is TrainerStatus.LOADING


def test_start_builds_ready_session(make_trainer, words) -> None:
    trainer = make_trainer(StaticWordSupply(words))

    assert trainer.start() is TrainerStatus.READY
    assert len(trainer.session) == 3
    assert trainer.selected_package is None


def test_empty_word_set_reports_empty(make_trainer) -> None:
    trainer = make_trainer(StaticWordSupply([]))

    assert trainer.start() is TrainerStatus.EMPTY
    assert trainer.session is None
    assert trainer.flip() is False
    assert trainer.swipe("right") is None
    assert trainer.restart() is False


def test_supply_failure_then_retry(make_trainer, words) -> None:
    trainer = make_trainer(FlakySupply(words))

    assert trainer.start() is TrainerStatus.ERROR
    assert trainer.error == "catalog unreachable"
    assert trainer.session is None

    assert trainer.retry() is TrainerStatus.READY
    assert trainer.error is None


def test_ratings_loaded_from_local_cache(make_trainer, local_cache, words) -> None:
    local_cache.set(PROGRESS_CACHE_KEY, json.dumps({"a": 5, "b": 1}))
    trainer = make_trainer(StaticWordSupply(words))

    trainer.start()

    assert {w.id: w.stars for w in trainer.words} == {"a": 5, "b": 1, "c": 0}
    # a: 1 draw, b: 5 draws, c: 1 draw
    assert len(trainer.session) == 7


def test_resumes_stored_package(make_trainer, local_cache, words) -> None:
    local_cache.set(
        SESSION_CACHE_KEY,
        SessionSnapshot(word_ids=["b", "a"], current_index=1, selected_package="Fruit").model_dump_json(),
    )
    trainer = make_trainer(StaticWordSupply(words))

    trainer.start()

    assert trainer.selected_package == "Fruit"
    assert trainer.session.index == 1
    assert trainer.session.current_word.id == "a"


def test_select_package_starts_new_round(make_trainer, local_cache, rating_store, words) -> None:
    trainer = make_trainer(StaticWordSupply(words))
    trainer.start()
    trainer.swipe("right")

    assert trainer.select_package("Animals") is TrainerStatus.READY

    draws = [w.id for w in trainer.session.draws]
    assert set(draws) == {"c"}
    assert len(draws) == repeat_count(rating_store.get_rating("c"))
    assert trainer.session.index == 0
    assert not trainer.can_undo
    stored = json.loads(local_cache.get(SESSION_CACHE_KEY))
    assert stored["selected_package"] == "Animals"


def test_select_unknown_package_is_empty(make_trainer, local_cache, words) -> None:
    trainer = make_trainer(StaticWordSupply(words))
    trainer.start()

    assert trainer.select_package("Colors") is TrainerStatus.EMPTY
    assert local_cache.get(SESSION_CACHE_KEY) is None

    assert trainer.select_package("all") is TrainerStatus.READY
    assert len(trainer.session) == 3


def test_complete_then_restart(make_trainer, words) -> None:
    trainer = make_trainer(StaticWordSupply(words))
    trainer.start()
    for _ in range(3):
        trainer.swipe("right")

    assert trainer.status is TrainerStatus.COMPLETE
    # every word went 0 -> 1 star, the slowest possible next round
    assert trainer.progress_percentage() == 0.0

    assert trainer.restart() is True
    assert trainer.status is TrainerStatus.READY
    # every word now at 1 star -> 5 draws each
    assert len(trainer.session) == 15


def test_undo_through_trainer(make_trainer, rating_store, words) -> None:
    trainer = make_trainer(StaticWordSupply(words))
    trainer.start()
    word_id = trainer.session.current_word.id

    trainer.swipe("left")
    assert trainer.can_undo
    entry = trainer.undo()

    assert entry.word_id == word_id
    assert rating_store.get_rating(word_id) == 0
    assert not trainer.can_undo


def test_packages_swallow_supply_errors(make_trainer, words) -> None:
    class BrokenSupply(StaticWordSupply):
        def list_packages(self):
            raise WordSupplyError("down")

    assert make_trainer(StaticWordSupply(words)).packages() == ["Animals", "Fruit"]
    assert make_trainer(BrokenSupply(words)).packages() == []


def test_refresh_words_starts_session_once_words_arrive(make_trainer, make_word) -> None:
    supply = StaticWordSupply([])
    trainer = make_trainer(supply)
    assert trainer.start() is TrainerStatus.EMPTY

    supply._words.append(make_word("new"))

    assert trainer.refresh_words() is TrainerStatus.READY
    assert trainer.session.current_word.id == "new"


def test_build_trainer_without_identity_is_local_only(monkeypatch, tmp_path, words) -> None:
    monkeypatch.delenv("LEARNER_ID", raising=False)
    monkeypatch.setenv("LOCAL_CACHE_PATH", str(tmp_path / "cache.sqlite"))

    trainer = build_trainer(supply=StaticWordSupply(words))
    try:
        assert trainer.start() is TrainerStatus.READY
        trainer.swipe("right")
    finally:
        trainer.close()

    assert (tmp_path / "cache.sqlite").exists()


def test_catalog_changes_refresh_on_next_check(make_trainer, make_word) -> None:
    class WatchedSupply(StaticWordSupply):
        def subscribe(self, on_change):
            self.on_change = on_change
            self.watch = ClosingWatch()
            return self.watch

    supply = WatchedSupply([])
    trainer = make_trainer(supply)
    trainer.start()

    assert trainer.watch_words() is True
    supply._words.append(make_word("fresh"))
    assert trainer.refresh_if_changed() is TrainerStatus.EMPTY

    supply.on_change()

    assert trainer.refresh_if_changed() is TrainerStatus.READY
    assert trainer.session.current_word.id == "fresh"

    trainer.close()
    assert supply.watch.closed


def test_watch_words_without_subscription_support(make_trainer, words) -> None:
    assert make_trainer(StaticWordSupply(words)).watch_words() is False


def test_retry_keeps_ratings_still_being_written(words, rng) -> None:
    cache = GatedCache()
    queue = WriteQueue()
    supply = FlakySupply(words, failures=0)
    store = RatingStore(cache, write_queue=queue)
    trainer = FlashcardTrainer(supply, store, ProgressSynchronizer(cache, write_queue=queue), queue, rng)
    try:
        trainer.start()
        word_id = trainer.session.current_word.id
        trainer.swipe("right")

        supply.failures = 1
        assert trainer.select_package("all") is TrainerStatus.ERROR

        threading.Timer(0.05, cache.gate.set).start()
        assert trainer.retry() is TrainerStatus.READY
        assert store.get_rating(word_id) == 1

        store.set_rating("other", 3)
        queue.wait_all(timeout=5)
        assert json.loads(cache.get(PROGRESS_CACHE_KEY)) == {word_id: 1, "other": 3}
    finally:
        cache.gate.set()
        trainer.close()
