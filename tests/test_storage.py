"""Tests for the key-value backends, favorites and the last-location cache."""

import asyncio
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from pocketweather.errors import MalformedPersistedDataError, StorageWriteError
from pocketweather.models import Coordinate
from pocketweather.storage import (
    FAVORITES_KEY,
    LAST_LOCATION_KEY,
    FavoritesStore,
    JsonFileStore,
    KeyValueStore,
    LastLocationCache,
    MemoryStore,
)

from conftest import MADRID


class FailingStore(MemoryStore):
    """Store whose writes always fail."""

    async def set(self, key: str, value: str) -> None:
        raise OSError("read-only file system")


# ── key-value backends ──────────────────────────────────────────────────────


def test_backends_satisfy_protocol(tmp_path: Path) -> None:
    assert isinstance(MemoryStore(), KeyValueStore)
    assert isinstance(JsonFileStore(tmp_path / "s.json"), KeyValueStore)


def test_json_file_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "store.json"
    store = JsonFileStore(path)

    async def scenario() -> tuple[str | None, str | None]:
        assert await store.get("missing") is None
        await store.set("a", "1")
        await store.set("b", '["x"]')
        return await store.get("a"), await store.get("b")

    assert asyncio.run(scenario()) == ("1", '["x"]')
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1", "b": '["x"]'}
    assert not list(path.parent.glob(".store-*"))


def test_json_file_store_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path)

    with pytest.raises(MalformedPersistedDataError):
        asyncio.run(store.get("favorites"))

    # writing replaces the unreadable document
    asyncio.run(store.set("favorites", "[]"))
    assert asyncio.run(store.get("favorites")) == "[]"


def test_json_file_store_write_failure(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "store.json")
    with patch("pocketweather.storage.kv.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(StorageWriteError) as excinfo:
            asyncio.run(store.set("favorites", "[]"))

    assert excinfo.value.key == "favorites"
    assert not list(tmp_path.glob(".store-*"))


def test_json_file_store_concurrent_writes_keep_every_key(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "store.json")

    async def scenario() -> list[int]:
        lost = []
        for i in range(50):
            await asyncio.gather(
                store.set(FAVORITES_KEY, json.dumps([f"city-{i}"])),
                store.set(LAST_LOCATION_KEY, json.dumps({"round": i})),
            )
            favorites = await store.get(FAVORITES_KEY)
            location = await store.get(LAST_LOCATION_KEY)
            if favorites != json.dumps([f"city-{i}"]) or location != json.dumps({"round": i}):
                lost.append(i)
        return lost

    assert asyncio.run(scenario()) == []


# ── favorites ───────────────────────────────────────────────────────────────


def test_load_absent_favorites_is_empty() -> None:
    favorites = FavoritesStore(MemoryStore())
    assert asyncio.run(favorites.load()) == []


@pytest.mark.parametrize("raw", ["{oops", '{"Madrid": true}', "42"])
def test_load_corrupt_favorites_is_empty(raw: str) -> None:
    favorites = FavoritesStore(MemoryStore({FAVORITES_KEY: raw}))
    assert asyncio.run(favorites.load()) == []


def test_load_corrupt_file_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("garbage", encoding="utf-8")
    assert asyncio.run(FavoritesStore(JsonFileStore(path)).load()) == []


def test_load_drops_duplicates() -> None:
    store = MemoryStore({FAVORITES_KEY: '["Madrid", "Paris", "Madrid", 3]'})
    assert asyncio.run(FavoritesStore(store).load()) == ["Madrid", "Paris"]


def test_toggle_adds_then_removes() -> None:
    store = MemoryStore({FAVORITES_KEY: '["Madrid", "Paris"]'})
    favorites = FavoritesStore(store)

    async def scenario() -> None:
        await favorites.load()
        assert not favorites.is_favorite("Lisboa")

        assert await favorites.toggle("Lisboa") == ["Madrid", "Paris", "Lisboa"]
        assert favorites.is_favorite("Lisboa")
        assert json.loads(store.data[FAVORITES_KEY]) == ["Madrid", "Paris", "Lisboa"]

        assert await favorites.toggle("Lisboa") == ["Madrid", "Paris"]
        assert not favorites.is_favorite("Lisboa")

    asyncio.run(scenario())
    assert json.loads(store.data[FAVORITES_KEY]) == ["Madrid", "Paris"]


def test_toggle_twice_restores_order_of_remaining() -> None:
    store = MemoryStore({FAVORITES_KEY: '["Madrid", "Paris", "Roma"]'})
    favorites = FavoritesStore(store)

    async def scenario() -> list[str]:
        await favorites.load()
        await favorites.toggle("Paris")
        return await favorites.toggle("Paris")

    # Paris goes to the end; the remaining items keep their order
    assert asyncio.run(scenario()) == ["Madrid", "Roma", "Paris"]


def test_remove_persists() -> None:
    store = MemoryStore({FAVORITES_KEY: '["Madrid", "Paris"]'})
    favorites = FavoritesStore(store)

    async def scenario() -> list[str]:
        await favorites.load()
        return await favorites.remove("Paris")

    assert asyncio.run(scenario()) == ["Madrid"]
    assert json.loads(store.data[FAVORITES_KEY]) == ["Madrid"]


def test_add_is_duplicate_free() -> None:
    store = MemoryStore()
    favorites = FavoritesStore(store)

    async def scenario() -> list[str]:
        await favorites.add("Madrid")
        return await favorites.add("Madrid")

    assert asyncio.run(scenario()) == ["Madrid"]


def test_failed_write_keeps_memory_state() -> None:
    favorites = FavoritesStore(FailingStore())

    with pytest.raises(StorageWriteError):
        asyncio.run(favorites.toggle("Madrid"))

    assert favorites.favorites == ["Madrid"]
    assert favorites.is_favorite("Madrid")


def test_favorites_persist_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "store.json"

    asyncio.run(FavoritesStore(JsonFileStore(path)).add("Madrid"))

    assert asyncio.run(FavoritesStore(JsonFileStore(path)).load()) == ["Madrid"]


# ── last location ───────────────────────────────────────────────────────────


def test_last_location_round_trip() -> None:
    store = MemoryStore()
    cache = LastLocationCache(store)

    async def scenario() -> Coordinate | None:
        assert await cache.load() is None
        await cache.save(Coordinate(latitude=1.0, longitude=2.0))
        await cache.save(MADRID)
        return await cache.load()

    assert asyncio.run(scenario()) == MADRID
    assert json.loads(store.data[LAST_LOCATION_KEY]) == {
        "latitude": 40.4168,
        "longitude": -3.7038,
    }


@pytest.mark.parametrize("raw", ["nope", '{"latitude": 1}', '{"latitude": 200, "longitude": 0}'])
def test_last_location_malformed_is_none(raw: str) -> None:
    cache = LastLocationCache(MemoryStore({LAST_LOCATION_KEY: raw}))
    assert asyncio.run(cache.load()) is None


def test_last_location_write_failure() -> None:
    cache = LastLocationCache(FailingStore())
    with pytest.raises(StorageWriteError):
        asyncio.run(cache.save(MADRID))
