# src/convsync/store/protocols.py
from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from convsync.errors import StoreLoadError, StoreWriteError


@runtime_checkable
class SettingsStore(Protocol):
    """Protocol defining the interface for a persisted settings store.

    ``set`` only changes the in-memory view; nothing is durable until
    ``save`` returns.
    """

    async def get(self, key: str) -> Any | None:
        """Return the value stored under key, or None when absent."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Stage a value for key."""
        ...

    async def save(self) -> None:
        """Flush staged values to durable storage."""
        ...


# Opens (or creates) the store at a path, seeding missing keys from defaults
StoreLoader = Callable[[Path, Mapping[str, Any]], Awaitable[SettingsStore]]


class MemoryStore:
    """In-memory SettingsStore for testing.

    Tracks what was staged and how often it was flushed. ``saved`` holds
    the snapshot taken by the last ``save`` call.
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        self.data: dict[str, Any] = dict(data or {})
        self.saved: dict[str, Any] = dict(self.data)
        self.set_calls: list[tuple[str, Any]] = []
        self.save_calls = 0

    @classmethod
    def loader(cls, data: Mapping[str, Any] | None = None) -> StoreLoader:
        """Build a StoreLoader returning a MemoryStore seeded with defaults."""

        async def load(path: Path, defaults: Mapping[str, Any]) -> MemoryStore:
            return cls({**defaults, **(data or {})})

        return load

    async def get(self, key: str) -> Any | None:
        return self.data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self.set_calls.append((key, value))
        self.data[key] = value

    async def save(self) -> None:
        self.save_calls += 1
        self.saved = dict(self.data)

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.set_calls = []
        self.save_calls = 0


class ErrorSimulatingStore(MemoryStore):
    """Store mock that can simulate I/O failures."""

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        fail_on_methods: list[str] | None = None,
    ):
        """Initialize with optional methods that should fail.

        Args:
            data: Initial contents
            fail_on_methods: List of method names that should raise exceptions
        """
        super().__init__(data)
        self.fail_on_methods = fail_on_methods or []

    async def get(self, key: str) -> Any | None:
        if "get" in self.fail_on_methods:
            raise StoreLoadError(Path("memory"), "Simulated store read failure")
        return await super().get(key)

    async def set(self, key: str, value: Any) -> None:
        if "set" in self.fail_on_methods:
            raise StoreWriteError(Path("memory"), "Simulated store write failure")
        await super().set(key, value)

    async def save(self) -> None:
        if "save" in self.fail_on_methods:
            raise StoreWriteError(Path("memory"), "Simulated store save failure")
        await super().save()
