"""Locating and reading ``archmodel.toml``.

Lookup order: ``ARCHMODEL_CONFIG`` if set, otherwise the nearest
``archmodel.toml`` in the start directory or any of its parents.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

from archmodel.config.models import ArchConfig

CONFIG_FILENAME = "archmodel.toml"
CONFIG_ENV_VAR = "ARCHMODEL_CONFIG"


class ConfigError(click.ClickException):
    """archmodel.toml exists but cannot be parsed."""


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any.

    An ``ARCHMODEL_CONFIG`` that names a missing file disables the search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> ArchConfig:
    """Validate the sections of a config file; defaults if there is none."""
    path = path or find_config(cwd)
    if path is None:
        return ArchConfig()
    return ArchConfig.model_validate(read_toml(path))
