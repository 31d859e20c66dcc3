"""Application configuration loaded from YAML."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from convsync import __version__
from convsync.constants import CONFIG_ENV_VAR, DEFAULT_MAX_CONCURRENCY, SETTINGS_STORE_FILENAME

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


def _default_data_dir() -> Path:
    return Path("~/.local/share/convsync").expanduser()


class AppConfig(BaseModel):
    """Deployment configuration for the application.

    These are operator-level settings read once at startup. User-adjustable
    settings (max concurrency, auto update check) live in the settings
    store instead and are managed by SettingsSynchronizer.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("convsync.yaml"),
        Path("~/.config/convsync/config.yaml").expanduser(),
        Path("/etc/convsync/config.yaml"),
    ]

    # Storage
    data_dir: Path = Field(
        default_factory=_default_data_dir, description="Directory holding the settings store"
    )
    store_filename: str = Field(
        SETTINGS_STORE_FILENAME, min_length=1, description="Settings store file name"
    )

    # Execution engine
    engine_limit: int = Field(
        DEFAULT_MAX_CONCURRENCY,
        gt=0,
        description="Concurrency limit the task pool boots with, before hydration",
    )

    # Update checks
    update_url: str | None = Field(
        None, description="Endpoint returning {'version': ..., 'url': ...}; null disables checks"
    )
    update_timeout: float = Field(5.0, gt=0, description="Update request timeout (seconds)")
    current_version: str = Field(__version__, description="Version compared against updates")

    debug: bool = False

    # ---- validators ----
    @field_validator("data_dir")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("update_url")
    @classmethod
    def empty_url_is_none(cls, v: str | None) -> str | None:
        # "${UPDATE_URL}" interpolates to "" when the variable is unset
        return v or None

    @property
    def store_path(self) -> Path:
        """Full path of the settings store file."""
        return self.data_dir / self.store_filename

    @classmethod
    def load(cls, path: Path | None = None) -> AppConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated AppConfig; built-in defaults when no file is found

        Raises:
            FileNotFoundError: If the file named by CONVSYNC_CONFIG is missing
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            # Check environment variable first
            env_path = os.environ.get(CONFIG_ENV_VAR)
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    return cls()

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except Exception as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
