"""Single-slot cache of the most recently fetched coordinate."""

from __future__ import annotations

import logging
from typing import Final

from pydantic import ValidationError

from pocketweather.errors import MalformedPersistedDataError, StorageWriteError
from pocketweather.models import Coordinate
from pocketweather.storage.kv import LAST_LOCATION_KEY, KeyValueStore

logger: Final = logging.getLogger(__name__)


class LastLocationCache:
    """Persist the last resolved coordinate for the map screen."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def save(self, coordinate: Coordinate) -> None:
        """Overwrite the stored coordinate (last write wins)."""
        try:
            await self.store.set(LAST_LOCATION_KEY, coordinate.model_dump_json())
        except StorageWriteError:
            raise
        except Exception as exc:
            logger.error("Could not persist last location: %s", exc)
            raise StorageWriteError(LAST_LOCATION_KEY, exc) from exc

    async def load(self) -> Coordinate | None:
        """Return the stored coordinate, or None if absent or unreadable."""
        try:
            raw = await self.store.get(LAST_LOCATION_KEY)
        except MalformedPersistedDataError as exc:
            logger.warning("Ignoring unreadable store: %s", exc.message)
            return None
        if raw is None:
            return None

        try:
            return Coordinate.model_validate_json(raw)
        except ValidationError:
            logger.warning("Stored last location is malformed; ignoring it")
            return None
