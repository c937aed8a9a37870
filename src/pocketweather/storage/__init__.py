"""Local persistence: key-value backends and the adapters built on them."""

from pocketweather.storage.favorites import FavoritesStore
from pocketweather.storage.kv import (
    FAVORITES_KEY,
    LAST_LOCATION_KEY,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
)
from pocketweather.storage.last_location import LastLocationCache

__all__ = [
    "FAVORITES_KEY",
    "LAST_LOCATION_KEY",
    "FavoritesStore",
    "JsonFileStore",
    "KeyValueStore",
    "LastLocationCache",
    "MemoryStore",
]
