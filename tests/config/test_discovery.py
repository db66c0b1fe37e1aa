"""Tests for config discovery and loading."""

from pathlib import Path

import pytest

from archmodel.config.discovery import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    ConfigError,
    find_config,
    load_config,
)
from archmodel.config.models import ArchConfig


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[workspace]\nfile = "model.json"\n')
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom.toml"
        custom.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(custom))
        assert find_config(tmp_path / "elsewhere") == custom

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert load_config(cwd=child) == ArchConfig()

    def test_sparse_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text('[deployment]\ndefault_environment = "Live"\n[derive]\non_save = true\n')
        config = load_config(path)
        assert config.deployment.default_environment == "Live"
        assert config.derive.on_save is True
        assert config.workspace.file == "workspace.json"

    def test_invalid_toml_raises_config_error(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[workspace\nfile = 1\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_indent_override(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[workspace]\nindent = 4\n")
        assert load_config(path).workspace.indent == 4
