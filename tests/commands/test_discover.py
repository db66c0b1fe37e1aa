"""Tests for the discover command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from archmodel.cli import cli


def _json(cli_runner: CliRunner, *args: str) -> dict[str, Any]:
    result = cli_runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    path = tmp_path / "components.json"
    path.write_text(
        json.dumps(
            {
                "components": [
                    {
                        "name": "AccountsController",
                        "type": "bank.AccountsController",
                        "uses": [{"name": "AccountsRepository", "description": "Reads from"}],
                    },
                    {"name": "AccountsRepository", "type": "bank.AccountsRepository"},
                ]
            }
        )
    )
    return path


@pytest.mark.usefixtures("_isolated_workspace")
class TestDiscoverCommand:
    def test_discovers_components(self, cli_runner: CliRunner, manifest: Path) -> None:
        _json(cli_runner, "add", "system", "Internet Banking")
        _json(cli_runner, "add", "container", "1", "API")
        out = _json(cli_runner, "discover", "2", "--manifest", str(manifest))
        assert out["data"]["count"] == 2
        assert out["data"]["relationships_added"] == 1
        listed = _json(cli_runner, "list", "--kind", "component")
        assert {i["name"] for i in listed["data"]["items"]} == {
            "AccountsController",
            "AccountsRepository",
        }

    def test_no_strategies(self, cli_runner: CliRunner) -> None:
        _json(cli_runner, "add", "system", "Internet Banking")
        _json(cli_runner, "add", "container", "1", "API")
        result = cli_runner.invoke(cli, ["--json", "discover", "2"])
        assert result.exit_code == 1
        assert "NO_STRATEGIES" in result.output

    def test_missing_manifest_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["discover", "2", "--manifest", "nope.json"])
        assert result.exit_code == 2
