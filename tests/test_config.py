from pathlib import Path

import pytest

from convsync.config import AppConfig
from convsync.constants import CONFIG_ENV_VAR


def test_defaults_when_no_config_found(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(AppConfig, "DEFAULT_CONFIG_PATHS", [tmp_path / "missing.yaml"])

    cfg = AppConfig.load()

    assert cfg.engine_limit == 2
    assert cfg.store_path.name == "app-settings.dat"
    assert cfg.update_url is None


def test_load_with_env_interpolation(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CONVSYNC_TEST_URL", "https://example.com/version.json")
    path = tmp_path / "convsync.yaml"
    path.write_text(
        f"data_dir: {tmp_path}\nengine_limit: 4\nupdate_url: \"${{CONVSYNC_TEST_URL}}\"\n"
    )

    cfg = AppConfig.load(path)

    assert cfg.engine_limit == 4
    assert cfg.update_url == "https://example.com/version.json"
    assert cfg.store_path == tmp_path / "app-settings.dat"


def test_unset_variable_disables_updates(tmp_path: Path) -> None:
    path = tmp_path / "convsync.yaml"
    path.write_text('update_url: "${CONVSYNC_SURELY_UNSET_VARIABLE}"\n')

    assert AppConfig.load(path).update_url is None


def test_env_var_pointing_nowhere(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.yaml"))

    with pytest.raises(FileNotFoundError):
        AppConfig.load()


def test_env_var_is_used(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text("engine_limit: 7\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert AppConfig.load().engine_limit == 7


@pytest.mark.parametrize("body", ["engine_limit: 0\n", "update_timeout: -1\n", "store_filename: ''\n"])
def test_invalid_config_raises(tmp_path: Path, body: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(body)

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        AppConfig.load(path)


def test_unparsable_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("engine_limit: [unclosed\n")

    with pytest.raises(RuntimeError, match="Unable to read config YAML"):
        AppConfig.load(path)


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert AppConfig.load(path).engine_limit == 2
