"""Settings store backed by a single JSON file.

The file holds one JSON object mapping setting keys to values. Loads fill
in defaults for missing keys without touching the disk; saves replace the
file atomically so a crash never leaves a half-written store.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from convsync.errors import StoreLoadError, StoreWriteError
from convsync.utils.file import backup_file, write_atomic

logger: Final = logging.getLogger(__name__)


class JsonFileStore:
    """Key-value settings persisted as a JSON object.

    Use ``JsonFileStore.load`` rather than the constructor; it matches the
    StoreLoader signature expected by SettingsStoreAccessor.
    """

    def __init__(self, path: Path, data: Mapping[str, Any] | None = None) -> None:
        self.path = path
        self._data: dict[str, Any] = dict(data or {})

    @classmethod
    async def load(cls, path: Path, defaults: Mapping[str, Any]) -> JsonFileStore:
        """Open the store at path, seeding every missing key from defaults.

        Args:
            path: Location of the store file
            defaults: Default value for every recognized key

        Returns:
            A ready JsonFileStore

        Raises:
            StoreLoadError: If the file exists but cannot be read or parsed.
                A file that is not valid JSON is moved aside first, so the
                next load starts from defaults.
        """
        stored = await asyncio.to_thread(cls._read, path)
        data = dict(defaults)
        data.update(stored)
        seeded = sorted(set(defaults) - set(stored))
        if seeded:
            logger.debug("Seeded defaults for %s in %s", ", ".join(seeded), path)
        return cls(path, data)

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}

        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise StoreLoadError(path, "Unable to read settings store", exc) from exc

        try:
            # UnicodeDecodeError is a ValueError too
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, dict):
                raise ValueError("store root is not an object")
        except ValueError as exc:
            try:
                backup_file(path)
            except OSError as bak_exc:
                logger.warning("Could not back up corrupt store %s: %s", path, bak_exc)
            raise StoreLoadError(path, "Corrupt settings store", exc) from exc

        return data

    async def get(self, key: str) -> Any | None:
        return self._data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    async def save(self) -> None:
        """Write the current contents to disk.

        Raises:
            StoreWriteError: If the file or its directory cannot be written
        """
        text = json.dumps(self._data, indent=2, sort_keys=True)
        try:
            await asyncio.to_thread(write_atomic, self.path, text)
        except OSError as exc:
            raise StoreWriteError(self.path, "Unable to save settings store", exc) from exc
        logger.debug("Saved settings store %s", self.path)
