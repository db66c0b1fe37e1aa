"""Runtime settings assembled from every configuration layer.

Highest wins:

1. keyword arguments (the CLI's global flags)
2. ``ARCHMODEL_*`` environment variables, ``__`` between section and key
   (``ARCHMODEL_DERIVE__ON_SAVE=true``)
3. ``archmodel.toml``
4. defaults from :mod:`archmodel.config.models`
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from archmodel.config.discovery import find_config, read_toml
from archmodel.config.models import (
    DeploymentConfig,
    DeriveConfig,
    DiscoveryConfig,
    WorkspaceConfig,
)

# pydantic-settings builds sources inside the constructor, so the TOML
# path chosen by from_cli() is handed over per thread.
_pending = threading.local()


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Top-level tables of an ``archmodel.toml`` as a settings source."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables: dict[str, Any] = read_toml(path) if path and path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


class ArchSettings(BaseSettings):
    """Everything a command needs to know about its environment.

    Attributes:
        project_root: Directory of the config file in use, else the CWD.
            A relative ``[workspace] file`` is resolved against it.
        config_path: The ``archmodel.toml`` that was read, if any.
        workspace_path: ``--workspace`` or ``ARCHMODEL_WORKSPACE_PATH``;
            overrides ``[workspace] file`` entirely.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="ARCHMODEL_",
        env_nested_delimiter="__",
    )

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    workspace_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    deployment: DeploymentConfig = Field(default_factory=DeploymentConfig)
    derive: DeriveConfig = Field(default_factory=DeriveConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)

    @property
    def resolved_workspace_path(self) -> Path:
        return self.workspace_path or self.project_root / self.workspace.file

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_pending, "toml_path", None))
        return init_settings, env_settings, toml

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        workspace_path: str | Path | None = None,
        **flags: Any,
    ) -> ArchSettings:
        """Build settings for one CLI run.

        An explicit *config_path* that does not exist means "no config
        file"; without one, ``archmodel.toml`` is searched for upward
        from *project_root* (or the CWD).
        """
        if config_path:
            toml_path: Path | None = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()
        if workspace_path:
            # Only when given: an explicit None would mask the env var.
            flags["workspace_path"] = Path(workspace_path)

        _pending.toml_path = toml_path
        try:
            return cls(project_root=project_root, config_path=toml_path, **flags)
        finally:
            _pending.toml_path = None
