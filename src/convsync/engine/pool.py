"""In-process bounded task pool with a resizable concurrency ceiling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Final, TypeVar

from convsync.constants import DEFAULT_MAX_CONCURRENCY
from convsync.errors import EngineUnavailableError
from convsync.validation import validate_max_concurrency

logger: Final = logging.getLogger(__name__)

T = TypeVar("T")


class TaskPool:
    """Run coroutine jobs with at most ``limit`` of them in flight.

    The limit can change while jobs are running. Raising it wakes queued
    jobs immediately; lowering it never interrupts running jobs, it only
    holds new ones back until the number in flight drops below the new
    ceiling.

    The pool implements the ExecutionEngine protocol, so the settings
    synchronizer can read and overwrite its live limit.

    Examples:
        pool = TaskPool(limit=2)
        result = await pool.run(convert_file, src, dst)
        await pool.set_limit(4)
    """

    def __init__(self, limit: int = DEFAULT_MAX_CONCURRENCY) -> None:
        self._limit = validate_max_concurrency(limit)
        self._active = 0
        self._closed = False
        self._condition = asyncio.Condition()

    @property
    def active(self) -> int:
        """Number of jobs currently holding a slot."""
        return self._active

    @property
    def closed(self) -> bool:
        return self._closed

    async def get_current_limit(self) -> int:
        """Return the enforced limit.

        Raises:
            EngineUnavailableError: If the pool has been closed
        """
        self._ensure_open()
        return self._limit

    async def set_limit(self, value: int) -> None:
        """Change the enforced limit.

        Args:
            value: New positive limit

        Raises:
            InvalidSettingValueError: If value is not a positive integer
            EngineUnavailableError: If the pool has been closed
        """
        validate_max_concurrency(value)
        self._ensure_open()
        async with self._condition:
            previous, self._limit = self._limit, value
            self._condition.notify_all()
        if previous != value:
            logger.info("Task pool limit changed: %d -> %d", previous, value)

    async def run(self, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        """Wait for a free slot, then await ``func(*args)``.

        Args:
            func: Coroutine function to run
            *args: Positional arguments passed to func

        Returns:
            Whatever the coroutine returns

        Raises:
            EngineUnavailableError: If the pool is closed before a slot frees up
        """
        async with self._condition:
            await self._condition.wait_for(
                lambda: self._closed or self._active < self._limit
            )
            self._ensure_open()
            self._active += 1
            logger.debug("Job started (%d/%d in flight)", self._active, self._limit)

        try:
            return await func(*args)
        finally:
            async with self._condition:
                self._active -= 1
                self._condition.notify_all()

    async def close(self) -> None:
        """Refuse further work and release every queued waiter."""
        async with self._condition:
            self._closed = True
            self._condition.notify_all()
        logger.debug("Task pool closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise EngineUnavailableError("Task pool is closed")
