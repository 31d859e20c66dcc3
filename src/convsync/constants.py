from __future__ import annotations

from types import MappingProxyType
from typing import Any, Final, Mapping

# Settings store file, relative to the application data directory
SETTINGS_STORE_FILENAME: Final = "app-settings.dat"

# Recognized setting keys
MAX_CONCURRENCY_KEY: Final = "maxConcurrency"
AUTO_UPDATE_CHECK_KEY: Final = "autoUpdateCheck"

# Defaults seeded into a freshly created store
DEFAULT_MAX_CONCURRENCY: Final = 2
DEFAULT_AUTO_UPDATE_CHECK: Final = True

SETTINGS_DEFAULTS: Final[Mapping[str, Any]] = MappingProxyType(
    {
        MAX_CONCURRENCY_KEY: DEFAULT_MAX_CONCURRENCY,
        AUTO_UPDATE_CHECK_KEY: DEFAULT_AUTO_UPDATE_CHECK,
    }
)

# Environment variable pointing at an explicit config file
CONFIG_ENV_VAR: Final = "CONVSYNC_CONFIG"
