"""Lazily opened, process-wide handle to the settings store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from convsync.constants import SETTINGS_DEFAULTS
from convsync.store.json_store import JsonFileStore
from convsync.store.protocols import SettingsStore, StoreLoader

logger: Final = logging.getLogger(__name__)


class SettingsStoreAccessor:
    """Hands out one shared SettingsStore, opened on first use.

    The first ``get_store`` call starts the loader and keeps the pending
    task itself, not just its result. Callers that arrive while the load is
    still running await that same task, so the loader runs exactly once no
    matter how many first-time callers race. A failed load is kept as well:
    every caller sees the same error and nothing retries here.

    The accessor belongs to one event loop; build it inside the loop that
    uses it.
    """

    def __init__(
        self,
        path: Path,
        loader: StoreLoader = JsonFileStore.load,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the accessor.

        Args:
            path: Location of the store file
            loader: Opens the store; defaults to JsonFileStore.load
            defaults: Seed values for missing keys (default: SETTINGS_DEFAULTS)
        """
        self.path = path
        self._loader = loader
        self._defaults = dict(SETTINGS_DEFAULTS if defaults is None else defaults)
        self._pending: asyncio.Future[SettingsStore] | None = None

    @property
    def started(self) -> bool:
        """Whether the store load has been started."""
        return self._pending is not None

    async def get_store(self) -> SettingsStore:
        """Return the shared store, opening it on the first call.

        Raises:
            Exception: Whatever the loader raised, for this and every later call
        """
        if self._pending is None:
            logger.debug("Opening settings store %s", self.path)
            self._pending = asyncio.ensure_future(self._loader(self.path, self._defaults))
        # One impatient caller must not cancel the load the others share
        return await asyncio.shield(self._pending)
