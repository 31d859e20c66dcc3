"""Tests for the in-process task pool."""

from __future__ import annotations

import asyncio

import pytest

from convsync.engine.pool import TaskPool
from convsync.engine.protocols import ExecutionEngine
from convsync.errors import EngineUnavailableError, InvalidSettingValueError


class _Probe:
    """Track how many jobs run at the same time."""

    def __init__(self) -> None:
        self.running = 0
        self.peak = 0

    async def job(self, delay: float) -> float:
        self.running += 1
        self.peak = max(self.peak, self.running)
        await asyncio.sleep(delay)
        self.running -= 1
        return delay


def test_pool_is_an_execution_engine() -> None:
    assert isinstance(TaskPool(), ExecutionEngine)


def test_pool_never_exceeds_limit() -> None:
    probe = _Probe()

    async def scenario() -> list[float]:
        pool = TaskPool(limit=2)
        return await asyncio.gather(*(pool.run(probe.job, 0.01) for _ in range(6)))

    results = asyncio.run(scenario())

    assert results == [0.01] * 6
    assert probe.peak == 2


def test_raising_limit_admits_waiting_jobs() -> None:
    probe = _Probe()

    async def scenario() -> None:
        pool = TaskPool(limit=1)
        jobs = [asyncio.ensure_future(pool.run(probe.job, 0.05)) for _ in range(3)]
        await asyncio.sleep(0.01)
        assert pool.active == 1
        await pool.set_limit(3)
        await asyncio.sleep(0.01)
        assert pool.active == 3
        await asyncio.gather(*jobs)

    asyncio.run(scenario())

    assert probe.peak == 3


def test_lowering_limit_keeps_running_jobs() -> None:
    async def scenario() -> tuple[int, int]:
        pool = TaskPool(limit=3)
        jobs = [asyncio.ensure_future(pool.run(asyncio.sleep, 0.05)) for _ in range(3)]
        await asyncio.sleep(0.01)
        await pool.set_limit(1)
        during = pool.active
        await asyncio.gather(*jobs)
        return during, await pool.get_current_limit()

    during, limit = asyncio.run(scenario())

    assert during == 3
    assert limit == 1


@pytest.mark.parametrize("value", [0, -2, 1.5, True])
def test_invalid_limit_rejected(value: object) -> None:
    pool = TaskPool(limit=2)

    with pytest.raises(InvalidSettingValueError):
        asyncio.run(pool.set_limit(value))  # type: ignore[arg-type]

    assert asyncio.run(pool.get_current_limit()) == 2


def test_closed_pool_is_unavailable() -> None:
    async def scenario() -> None:
        pool = TaskPool(limit=1)
        await pool.close()
        with pytest.raises(EngineUnavailableError):
            await pool.get_current_limit()
        with pytest.raises(EngineUnavailableError):
            await pool.set_limit(2)
        with pytest.raises(EngineUnavailableError):
            await pool.run(asyncio.sleep, 0)

    asyncio.run(scenario())


def test_close_releases_queued_jobs() -> None:
    async def scenario() -> list[object]:
        pool = TaskPool(limit=1)
        running = asyncio.ensure_future(pool.run(asyncio.sleep, 0.05))
        queued = asyncio.ensure_future(pool.run(asyncio.sleep, 0))
        await asyncio.sleep(0.01)
        await pool.close()
        return await asyncio.gather(running, queued, return_exceptions=True)

    running, queued = asyncio.run(scenario())

    assert running is None
    assert isinstance(queued, EngineUnavailableError)
