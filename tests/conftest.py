from __future__ import annotations

import random
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from core.progress.database import RemoteProgressStore, init_db
from core.progress.local_cache import MemoryLocalCache
from core.progress.write_queue import WriteQueue
from core.rating_store import RatingStore
from core.schemas import Word


@pytest.fixture
def make_word() -> Callable[..., Word]:
    def _make(word_id: str, stars: int = 0, package: Optional[str] = None) -> Word:
        return Word(
            id=word_id,
            source=f"{word_id}-en",
            target=f"{word_id}-tr",
            stars=stars,
            package_name=package,
        )

    return _make


@pytest.fixture
def write_queue() -> WriteQueue:
    queue = WriteQueue()
    queue.disable()
    return queue


@pytest.fixture
def local_cache() -> MemoryLocalCache:
    return MemoryLocalCache()


@pytest.fixture
def rating_store(local_cache: MemoryLocalCache, write_queue: WriteQueue) -> RatingStore:
    return RatingStore(local_cache, write_queue=write_queue)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def remote_store(engine) -> RemoteProgressStore:
    return RemoteProgressStore.from_engine(engine)
