"""Tests for ArchSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from archmodel.config.settings import ArchSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ArchSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.json_output is False
        assert settings.workspace.file == "workspace.json"
        assert settings.workspace.indent == 2
        assert settings.deployment.default_environment == "Default"
        assert settings.derive.on_save is False
        assert settings.discovery.strategies == []
        assert settings.resolved_workspace_path == tmp_path / "workspace.json"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ArchSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "archmodel.toml").write_text(
            '[workspace]\nfile = "bank.json"\n[deployment]\ndefault_environment = "Live"\n'
        )
        settings = ArchSettings.from_cli(project_root=tmp_path)
        assert settings.workspace.file == "bank.json"
        assert settings.deployment.default_environment == "Live"
        assert settings.resolved_workspace_path == tmp_path / "bank.json"

    def test_project_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "archmodel.toml").write_text("")
        child = tmp_path / "src"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = ArchSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()
        assert settings.config_path == tmp_path.resolve() / "archmodel.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "my.toml"
        custom.parent.mkdir()
        custom.write_text("[derive]\non_save = true\n")
        settings = ArchSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.derive.on_save is True
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "archmodel.toml").write_text("[workspace\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ArchSettings.from_cli(project_root=tmp_path)


class TestOverrides:
    def test_env_var_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "archmodel.toml").write_text("[workspace]\nindent = 4\n")
        monkeypatch.setenv("ARCHMODEL_WORKSPACE__INDENT", "0")
        settings = ArchSettings.from_cli(project_root=tmp_path)
        assert settings.workspace.indent == 0

    def test_workspace_flag(self, tmp_path: Path) -> None:
        settings = ArchSettings.from_cli(project_root=tmp_path, workspace_path="other.json")
        assert settings.resolved_workspace_path == Path("other.json")

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = ArchSettings.from_cli(project_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_workspace_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ARCHMODEL_WORKSPACE_PATH", str(tmp_path / "env.json"))
        settings = ArchSettings.from_cli(project_root=tmp_path)
        assert settings.resolved_workspace_path == tmp_path / "env.json"

    def test_workspace_flag_beats_env_var(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ARCHMODEL_WORKSPACE_PATH", "env.json")
        settings = ArchSettings.from_cli(project_root=tmp_path, workspace_path="flag.json")
        assert settings.resolved_workspace_path == Path("flag.json")
