"""Tests for the favorites store, recent searches and key-value storage."""

import asyncio
import json

import pytest

from conftest import PARIS, PARIS_TX
from weatherlens.core.favorites_store import FAVORITES_KEY, FavoritesStore
from weatherlens.core.recent_searches import RECENT_SEARCHES_KEY, RecentSearches
from weatherlens.core.storage import InMemoryKeyValueStore, JsonFileKeyValueStore
from weatherlens.models.location import LocationCandidate


def paris():
    """A freshly decoded Paris, with its own surrogate id."""
    return LocationCandidate.model_validate(PARIS)


def test_toggle_adds_and_removes(storage):
    """Toggling twice leaves no trace of the location."""
    store = FavoritesStore(storage)

    assert asyncio.run(store.toggle(paris())) is True
    assert store.is_favorite(paris())
    assert asyncio.run(store.toggle(paris())) is False

    assert not store.is_favorite(paris())
    assert store.list() == []
    assert json.loads(storage.get(FAVORITES_KEY)) == []


def test_favorites_match_across_decodes(storage):
    """Separately resolved copies of a place are the same favorite."""
    store = FavoritesStore(storage)
    asyncio.run(store.toggle(paris()))
    asyncio.run(store.toggle(paris()))
    asyncio.run(store.toggle(paris()))
    assert len(store.list()) == 1


def test_favorites_survive_reload(storage):
    """Persisting then reloading yields an equal set of favorites."""
    store = FavoritesStore(storage)
    texas = LocationCandidate.model_validate(PARIS_TX)
    asyncio.run(store.toggle(paris()))
    asyncio.run(store.toggle(texas))

    reloaded = FavoritesStore(storage)

    assert set(reloaded.list()) == set(store.list())
    assert reloaded.is_favorite(paris())
    assert [f.country for f in reloaded.list()] == ["FR", "US"]
    assert reloaded.list()[0].local_names["ja"] == "パリ"


def test_persisted_favorites_have_no_ids(storage):
    """Only the structural fields are written."""
    store = FavoritesStore(storage)
    asyncio.run(store.toggle(paris()))
    saved = json.loads(storage.get(FAVORITES_KEY))
    assert saved[0]["name"] == "Paris"
    assert "id" not in saved[0]


def test_remove(storage):
    """Test explicit removal, including of unknown locations."""
    store = FavoritesStore(storage)
    texas = LocationCandidate.model_validate(PARIS_TX)
    asyncio.run(store.toggle(paris()))

    asyncio.run(store.remove(texas))
    assert len(store.list()) == 1

    asyncio.run(store.remove(paris()))
    assert store.list() == []
    assert json.loads(storage.get(FAVORITES_KEY)) == []


def test_concurrent_toggles_do_not_drop_updates(storage):
    """Mutations are serialized."""
    store = FavoritesStore(storage)
    places = [
        LocationCandidate(name=f"Town {i}", lat=i, lon=i, country="NO")
        for i in range(10)
    ]

    async def run():
        await asyncio.gather(*(store.toggle(place) for place in places))

    asyncio.run(run())
    assert len(store.list()) == 10
    assert len(json.loads(storage.get(FAVORITES_KEY))) == 10


def test_corrupt_favorites_start_empty():
    """Unreadable saved data is discarded."""
    storage = InMemoryKeyValueStore({FAVORITES_KEY: "not json"})
    assert FavoritesStore(storage).list() == []


def test_duplicate_saved_favorites_are_collapsed():
    """Duplicates from older saves load as a single favorite."""
    storage = InMemoryKeyValueStore({FAVORITES_KEY: json.dumps([PARIS, PARIS])})
    assert len(FavoritesStore(storage).list()) == 1


def test_recent_searches_front_insert_and_cap(storage):
    """History is most-recent-first and capped at five."""
    recent = RecentSearches(storage)
    for city in ["Oslo", "Rome", "Lima", "Nice", "Bern", "Kyiv"]:
        recent.record(city)

    assert recent.items == ["Kyiv", "Bern", "Nice", "Lima", "Rome"]
    assert json.loads(storage.get(RECENT_SEARCHES_KEY)) == recent.items


def test_recent_searches_duplicate_moves_to_front(storage):
    """Re-recording a query moves it without growing the list."""
    recent = RecentSearches(storage)
    for city in ["Oslo", "Rome", "Lima"]:
        recent.record(city)
    recent.record("Oslo")

    assert recent.items == ["Oslo", "Lima", "Rome"]


def test_recent_searches_dedup_is_exact(storage):
    """Dedup compares exact text."""
    recent = RecentSearches(storage)
    recent.record("paris")
    recent.record("Paris")
    assert recent.items == ["Paris", "paris"]


@pytest.mark.parametrize("limit", [1, 3, 5])
def test_recent_searches_never_exceed_limit(storage, limit):
    """Test the history bound."""
    recent = RecentSearches(storage, limit=limit)
    for i in range(limit * 3):
        recent.record("City " + "x" * i)
        assert len(recent.items) <= limit
        assert len(set(recent.items)) == len(recent.items)


def test_recent_searches_zero_limit_keeps_nothing(storage):
    """An explicit limit of zero is honoured, not replaced by the default."""
    recent = RecentSearches(storage, limit=0)
    recent.record("Oslo")
    assert recent.limit == 0
    assert recent.items == []


def test_recent_searches_remove_and_clear(storage):
    """Test removing one entry and clearing everything."""
    recent = RecentSearches(storage)
    recent.record("Oslo")
    recent.record("Rome")
    recent.remove("Oslo")
    assert recent.items == ["Rome"]

    recent.clear()
    assert RecentSearches(storage).items == []


def test_json_file_store_round_trip(tmp_path):
    """Values written by one store instance are read by another."""
    path = tmp_path / "state" / "weatherlens.json"
    first = JsonFileKeyValueStore(path)
    first.set(FAVORITES_KEY, "[]")
    first.set(RECENT_SEARCHES_KEY, '["Oslo"]')

    second = JsonFileKeyValueStore(path)
    assert second.get(FAVORITES_KEY) == "[]"
    assert RecentSearches(second).items == ["Oslo"]
    assert second.get("missing") is None


def test_json_file_store_ignores_corrupt_file(tmp_path):
    """A damaged state file reads as empty."""
    path = tmp_path / "weatherlens.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonFileKeyValueStore(path)
    assert store.get(FAVORITES_KEY) is None

    store.set(FAVORITES_KEY, "[]")
    assert store.get(FAVORITES_KEY) == "[]"
