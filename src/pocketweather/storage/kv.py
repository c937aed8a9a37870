"""Key-value persistence backends.

Values are strings (callers store JSON); keys are plain strings. Both
backends expose coroutines so the pipeline awaits storage the same way it
awaits the network.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from pocketweather.errors import MalformedPersistedDataError, StorageWriteError

logger: Final = logging.getLogger(__name__)

FAVORITES_KEY: Final = "favorites"
LAST_LOCATION_KEY: Final = "lastLocation"


@runtime_checkable
class KeyValueStore(Protocol):
    """Persistent mapping from string keys to string values."""

    async def get(self, key: str) -> str | None:
        """Return the stored value or None if the key was never written."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...


class MemoryStore:
    """Dict-backed store for tests and previews."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    Every write rewrites the whole file through a temporary file and
    ``os.replace`` so a reader never sees a half-written document. Writes
    are serialised per store so concurrent keys never overwrite each other.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: File holding the JSON object; created on first write
        """
        self.path = path
        self._write_lock = threading.Lock()

    async def get(self, key: str) -> str | None:
        """Read one key.

        Raises:
            MalformedPersistedDataError: If the file exists but is not a JSON object
        """
        data = await asyncio.to_thread(self._read)
        value = data.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise MalformedPersistedDataError(key)
        return value

    async def set(self, key: str, value: str) -> None:
        """Write one key.

        Raises:
            StorageWriteError: If the file cannot be written
        """
        try:
            await asyncio.to_thread(self._write_key, key, value)
        except OSError as exc:
            logger.error("Could not write %s to %s: %s", key, self.path, exc)
            raise StorageWriteError(key, exc) from exc

    # Private helper methods
    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise MalformedPersistedDataError(str(self.path), exc) from exc
        if not isinstance(data, dict):
            raise MalformedPersistedDataError(str(self.path))
        return data

    def _write_key(self, key: str, value: str) -> None:
        with self._write_lock:
            self._replace_key(key, value)

    def _replace_key(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except MalformedPersistedDataError as exc:
            logger.warning("Replacing unreadable store %s: %s", self.path, exc.message)
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
