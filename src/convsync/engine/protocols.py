# src/convsync/engine/protocols.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from convsync.constants import DEFAULT_MAX_CONCURRENCY
from convsync.errors import EngineUnavailableError


@runtime_checkable
class ExecutionEngine(Protocol):
    """Protocol for the subsystem that runs background tasks.

    The settings layer only needs to read and overwrite the live
    concurrency ceiling. Both calls may fail, for instance when the engine
    has not been started yet; failures are raised as exceptions.
    """

    async def get_current_limit(self) -> int:
        """Return the concurrency limit currently enforced."""
        ...

    async def set_limit(self, value: int) -> None:
        """Replace the enforced concurrency limit.

        Args:
            value: New positive limit
        """
        ...


class MockEngine:
    """Mock implementation of ExecutionEngine for testing."""

    def __init__(self, limit: int = DEFAULT_MAX_CONCURRENCY):
        self.limit = limit
        self.set_calls: list[int] = []
        self.get_calls = 0

    async def get_current_limit(self) -> int:
        self.get_calls += 1
        return self.limit

    async def set_limit(self, value: int) -> None:
        """Record the call and apply the value."""
        self.set_calls.append(value)
        self.limit = value

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.set_calls = []
        self.get_calls = 0


class ErrorSimulatingEngine(MockEngine):
    """Engine mock that can simulate an unavailable engine."""

    def __init__(
        self,
        limit: int = DEFAULT_MAX_CONCURRENCY,
        fail_on_methods: list[str] | None = None,
    ):
        """Initialize with optional methods that should fail.

        Args:
            limit: Initial live limit
            fail_on_methods: List of method names that should raise exceptions
        """
        super().__init__(limit)
        self.fail_on_methods = fail_on_methods or []

    async def get_current_limit(self) -> int:
        if "get_current_limit" in self.fail_on_methods:
            raise EngineUnavailableError("Simulated engine failure in get_current_limit")
        return await super().get_current_limit()

    async def set_limit(self, value: int) -> None:
        if "set_limit" in self.fail_on_methods:
            raise EngineUnavailableError("Simulated engine failure in set_limit")
        await super().set_limit(value)
