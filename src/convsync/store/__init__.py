"""Durable key-value store holding the user's settings."""

from convsync.store.json_store import JsonFileStore
from convsync.store.protocols import (
    ErrorSimulatingStore,
    MemoryStore,
    SettingsStore,
    StoreLoader,
)

__all__ = [
    "ErrorSimulatingStore",
    "JsonFileStore",
    "MemoryStore",
    "SettingsStore",
    "StoreLoader",
]
