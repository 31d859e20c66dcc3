"""Settings synchronization.

This package provides:
- SettingsStoreAccessor: lazily opened, shared handle to the settings store
- SettingsSynchronizer: startup hydration and validated writes
"""

from convsync.settings.accessor import SettingsStoreAccessor
from convsync.settings.sync import SettingsSynchronizer

__all__ = ["SettingsStoreAccessor", "SettingsSynchronizer"]
