from pathlib import Path

import pytest

from convsync.config import AppConfig


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "app-settings.dat"


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(data_dir=tmp_path)
