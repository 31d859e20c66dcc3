"""Exception classes for settings synchronization.

This module defines the hierarchy of errors raised while validating,
applying and persisting settings. Read paths recover from these locally;
write paths let them reach the caller.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class SettingsError(Exception):
    """Base class for every error raised by convsync."""


class InvalidSettingValueError(SettingsError, ValueError):
    """Raised when a setting value fails validation.

    Validation happens before any side effect, so neither the engine nor
    the store has been touched when this is raised.
    """

    def __init__(self, key: str, value: Any, reason: str) -> None:
        """Initialize the exception.

        Args:
            key: Setting key that was being written
            value: The rejected value
            reason: Human-readable description of the constraint
        """
        super().__init__(f"Invalid value for {key}: {value!r} ({reason})")
        self.key = key
        self.value = value
        self.reason = reason


class EngineError(SettingsError):
    """Raised when the execution engine cannot read or apply a limit."""


class EngineUnavailableError(EngineError):
    """Raised when the execution engine is closed or not yet running."""


class StoreError(SettingsError):
    """Error while loading or flushing the persisted settings store."""

    def __init__(
        self, path: Path, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with store details.

        Args:
            path: Location of the store file
            message: Description of the failure
            original_error: The underlying exception, when there is one
        """
        super().__init__(f"{message}: {path}")
        self.path = path
        self.message = message
        self.original_error = original_error


class StoreLoadError(StoreError):
    """Raised when the store file cannot be read or parsed."""

    pass


class StoreWriteError(StoreError):
    """Raised when the store cannot be flushed to disk."""

    pass


class SettingNotSavedError(SettingsError):
    """Raised when a setting was accepted but could not be made durable.

    For the concurrency limit the engine already runs with the new value
    when this is raised; only the persisted copy is stale.
    """

    def __init__(
        self, key: str, value: Any, original_error: Optional[Exception] = None
    ) -> None:
        super().__init__(f"Setting {key}={value!r} was not saved")
        self.key = key
        self.value = value
        self.original_error = original_error


class UpdateCheckError(SettingsError):
    """Raised when the update endpoint cannot be queried or parsed."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error
