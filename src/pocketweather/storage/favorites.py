"""Favorite cities persisted in the key-value store."""

from __future__ import annotations

import json
import logging
from typing import Final

from pocketweather.errors import MalformedPersistedDataError, StorageWriteError
from pocketweather.storage.kv import FAVORITES_KEY, KeyValueStore

logger: Final = logging.getLogger(__name__)


class FavoritesStore:
    """Ordered, duplicate-free list of favorite city names.

    The in-memory list is authoritative for the running session. Every
    mutation updates it first and then writes the whole list back; a
    failed write is logged and raised as StorageWriteError while the
    in-memory list keeps the new contents.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._favorites: list[str] = []

    @property
    def favorites(self) -> list[str]:
        """Copy of the current list, in insertion order."""
        return list(self._favorites)

    async def load(self) -> list[str]:
        """Read the persisted list into memory.

        Absent or undecodable data yields an empty list.
        """
        try:
            raw = await self.store.get(FAVORITES_KEY)
        except MalformedPersistedDataError as exc:
            logger.warning("Ignoring unreadable favorites: %s", exc.message)
            raw = None

        self._favorites = self._decode(raw)
        return self.favorites

    def is_favorite(self, city: str) -> bool:
        return city in self._favorites

    async def toggle(self, city: str) -> list[str]:
        """Remove ``city`` if present, otherwise append it; then persist."""
        if city in self._favorites:
            self._favorites = [fav for fav in self._favorites if fav != city]
        else:
            self._favorites = [*self._favorites, city]
        await self._save()
        return self.favorites

    async def add(self, city: str) -> list[str]:
        if city not in self._favorites:
            self._favorites = [*self._favorites, city]
            await self._save()
        return self.favorites

    async def remove(self, city: str) -> list[str]:
        self._favorites = [fav for fav in self._favorites if fav != city]
        await self._save()
        return self.favorites

    # Private helper methods
    async def _save(self) -> None:
        try:
            await self.store.set(FAVORITES_KEY, json.dumps(self._favorites, ensure_ascii=False))
        except StorageWriteError:
            raise
        except Exception as exc:
            logger.error("Could not persist favorites: %s", exc)
            raise StorageWriteError(FAVORITES_KEY, exc) from exc

    @staticmethod
    def _decode(raw: str | None) -> list[str]:
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored favorites are not valid JSON; starting empty")
            return []
        if not isinstance(data, list):
            logger.warning("Stored favorites are not a list; starting empty")
            return []

        favorites: list[str] = []
        for item in data:
            if isinstance(item, str) and item not in favorites:
                favorites.append(item)
        return favorites
