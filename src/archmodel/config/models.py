"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, archmodel.toml only contains
overrides. A fresh project needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from archmodel.domain.types import DEFAULT_DEPLOYMENT_ENVIRONMENT


class WorkspaceConfig(BaseModel):
    """[workspace] section."""

    model_config = {"frozen": True}

    file: str = "workspace.json"
    indent: int = 2


class DeploymentConfig(BaseModel):
    """[deployment] section."""

    model_config = {"frozen": True}

    default_environment: str = DEFAULT_DEPLOYMENT_ENVIRONMENT


class DeriveConfig(BaseModel):
    """[derive] section."""

    model_config = {"frozen": True}

    on_save: bool = False


class DiscoveryConfig(BaseModel):
    """[discovery] section."""

    model_config = {"frozen": True}

    strategies: list[str] = Field(default_factory=list)


class ArchConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    deployment: DeploymentConfig = Field(default_factory=DeploymentConfig)
    derive: DeriveConfig = Field(default_factory=DeriveConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
