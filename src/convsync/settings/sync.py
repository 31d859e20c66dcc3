"""Keep persisted settings and the live execution engine in agreement.

Two copies of the concurrency limit exist: the engine's value decides what
runs right now, the store's value decides what runs after a restart. The
rules are:

- On startup the stored value wins and is pushed into the engine. If the
  store cannot be read, the engine's own value is used and nothing is
  written back.
- On a user edit the engine is updated first, then the store. A failed
  engine update leaves the store alone; a failed store write leaves the
  engine ahead of the store and is reported to the caller.

Reads never raise on store problems. Writes always do.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Final

from convsync.constants import (
    AUTO_UPDATE_CHECK_KEY,
    DEFAULT_AUTO_UPDATE_CHECK,
    MAX_CONCURRENCY_KEY,
)
from convsync.engine.protocols import ExecutionEngine
from convsync.errors import SettingNotSavedError
from convsync.settings.accessor import SettingsStoreAccessor
from convsync.validation import is_positive_int, validate_flag, validate_max_concurrency

logger: Final = logging.getLogger(__name__)


class SettingsSynchronizer:
    """Load, validate and persist the user-adjustable settings.

    Examples:
        sync = SettingsSynchronizer(SettingsStoreAccessor(path), TaskPool())
        limit = await sync.load_initial_max_concurrency()
        await sync.persist_max_concurrency(4)
    """

    def __init__(self, accessor: SettingsStoreAccessor, engine: ExecutionEngine) -> None:
        self.accessor = accessor
        self.engine = engine
        self._write_lock = asyncio.Lock()
        self._unsaved: dict[str, Any] = {}

    # ---- concurrency limit ----
    async def load_initial_max_concurrency(self) -> int:
        """Reconcile the stored limit with the engine at startup.

        Returns:
            The stored limit after pushing it into the engine, or the
            engine's current limit when the store is unusable

        Raises:
            Exception: Only if the engine's own limit cannot be read
        """
        try:
            store = await self.accessor.get_store()
            stored = await store.get(MAX_CONCURRENCY_KEY)

            if is_positive_int(stored):
                await self.engine.set_limit(stored)
                logger.info("Restored max concurrency %d from settings", stored)
                return stored

            logger.warning("Ignoring stored max concurrency %r", stored)
        except Exception as exc:
            logger.error("Failed to hydrate stored max concurrency: %s", exc)

        return await self.engine.get_current_limit()

    async def persist_max_concurrency(self, value: int) -> None:
        """Apply a new limit to the engine, then make it durable.

        Args:
            value: New positive limit

        Raises:
            InvalidSettingValueError: Before any side effect, for a bad value
            EngineError: If the engine rejects the limit; store untouched
            SettingNotSavedError: If the store write fails; engine already updated
        """
        validate_max_concurrency(value)

        # Engine and store must see overlapping edits in the same order
        async with self._write_lock:
            await self.engine.set_limit(value)
            await self._write(MAX_CONCURRENCY_KEY, value)

    # ---- auto update check ----
    async def load_auto_update_check(self) -> bool:
        """Return the stored flag, or the default if it can't be read."""
        try:
            store = await self.accessor.get_store()
            stored = await store.get(AUTO_UPDATE_CHECK_KEY)

            if isinstance(stored, bool):
                return stored
        except Exception as exc:
            logger.error("Failed to load auto update check setting: %s", exc)

        return DEFAULT_AUTO_UPDATE_CHECK

    async def persist_auto_update_check(self, value: bool) -> None:
        """Store the flag and flush it.

        Raises:
            InvalidSettingValueError: If value is not a bool
            SettingNotSavedError: If the store write fails
        """
        validate_flag(value)
        async with self._write_lock:
            await self._write(AUTO_UPDATE_CHECK_KEY, value)

    # ---- inconsistency window ----
    @property
    def has_unsaved_changes(self) -> bool:
        """Whether an accepted value is still missing from the store."""
        return bool(self._unsaved)

    @property
    def unsaved(self) -> dict[str, Any]:
        return dict(self._unsaved)

    async def retry_unsaved(self) -> bool:
        """Try again to persist values whose earlier write failed.

        Returns:
            True once nothing is left unsaved
        """
        async with self._write_lock:
            if not self._unsaved:
                return True
            # Any write flushes every unsaved value along with its own
            key, value = next(iter(self._unsaved.items()))
            try:
                await self._write(key, value)
            except SettingNotSavedError as exc:
                logger.warning("Retry of unsaved settings failed: %s", exc.original_error)
                return False
        return True

    async def _write(self, key: str, value: Any) -> None:
        pending = {**self._unsaved, key: value}
        try:
            store = await self.accessor.get_store()
            for pending_key, pending_value in pending.items():
                await store.set(pending_key, pending_value)
            await store.save()
        except Exception as exc:
            self._unsaved[key] = value
            logger.error("Failed to persist %s=%r: %s", key, value, exc)
            raise SettingNotSavedError(key, value, exc) from exc

        self._unsaved.clear()
        logger.info("Persisted %s", ", ".join(f"{k}={v!r}" for k, v in pending.items()))
