import threading

import pytest
from pymongo import ASCENDING

from core.errors import WordSupplyError
from core.word_repo import MongoWordSupply, StaticWordSupply
from tests.fakes import FakeCollection


def _doc(word_id, added_at, package=None, user_id="u1", **extra):
    doc = {
        "_id": word_id,
        "english": f"{word_id}-en",
        "turkish": f"{word_id}-tr",
        "added_at": added_at,
        "user_id": user_id,
        "package_name": package,
    }
    doc.update(extra)
    return doc


@pytest.fixture
def collection():
    return FakeCollection([
        _doc("w2", 2, "Fruit"),
        _doc("w1", 1, "Animals", star_rating=4, frequency_group="2k"),
        _doc("w3", 3, "Fruit", user_id="u2"),
    ])


def test_fetch_returns_words_in_insertion_order(collection) -> None:
    supply = MongoWordSupply(collection)

    words = supply.fetch()

    assert [w.id for w in words] == ["w1", "w2", "w3"]
    assert words[0].source == "w1-en"
    assert words[0].target == "w1-tr"
    assert words[0].level == "2k"
    assert words[0].stars == 4
    assert collection.sorts == [("added_at", ASCENDING)]


def test_fetch_scoped_to_learner_and_package(collection) -> None:
    supply = MongoWordSupply(collection, learner_id="u1")

    words = supply.fetch("Fruit")

    assert [w.id for w in words] == ["w2"]
    assert collection.queries[-1] == {
        "user_id": "u1",
        "$or": [{"package_id": "Fruit"}, {"package_name": "Fruit"}],
    }


def test_all_sentinel_means_no_package_filter(collection) -> None:
    supply = MongoWordSupply(collection)
    supply.fetch("all")
    assert collection.queries[-1] == {}


def test_malformed_documents_are_skipped(collection) -> None:
    collection.docs.append({"english": "orphan", "added_at": 4})
    supply = MongoWordSupply(collection)

    assert [w.id for w in supply.fetch()] == ["w1", "w2", "w3"]


def test_fetch_failure_raises_word_supply_error() -> None:
    supply = MongoWordSupply(FakeCollection(fail=True))
    with pytest.raises(WordSupplyError):
        supply.fetch()
    with pytest.raises(WordSupplyError):
        supply.list_packages()


def test_missing_mongo_uri_raises_word_supply_error(monkeypatch) -> None:
    monkeypatch.delenv("MONGO_URI", raising=False)
    monkeypatch.setattr("core.word_repo._collection", None)
    with pytest.raises(WordSupplyError):
        MongoWordSupply().fetch()


def test_list_packages_sorted_and_scoped(collection) -> None:
    assert MongoWordSupply(collection).list_packages() == ["Animals", "Fruit"]
    assert MongoWordSupply(collection, learner_id="u2").list_packages() == ["Fruit"]


def test_subscribe_calls_back_per_change() -> None:
    collection = FakeCollection(changes=[{"operationType": "insert"}, {"operationType": "update"}])
    calls = []
    done = threading.Event()

    def on_change():
        calls.append(1)
        if len(calls) == 2:
            done.set()

    watch = MongoWordSupply(collection).subscribe(on_change)
    try:
        assert done.wait(timeout=5)
        assert watch.is_alive()
    finally:
        watch.close(timeout=5)

    assert len(calls) == 2


def test_closed_watch_stops_thread_and_stream() -> None:
    collection = FakeCollection()
    watch = MongoWordSupply(collection).subscribe(lambda: None)

    watch.close(timeout=5)

    assert not watch.is_alive()
    assert collection.stream.closed


def test_subscribe_failure_raises_word_supply_error() -> None:
    with pytest.raises(WordSupplyError):
        MongoWordSupply(FakeCollection(fail=True)).subscribe(lambda: None)


def test_static_supply_filters_by_package(make_word) -> None:
    supply = StaticWordSupply([
        make_word("a", package="Fruit"),
        make_word("b", package="Animals"),
        make_word("c"),
    ])

    assert [w.id for w in supply.fetch()] == ["a", "b", "c"]
    assert [w.id for w in supply.fetch("Fruit")] == ["a"]
    assert supply.list_packages() == ["Animals", "Fruit"]
