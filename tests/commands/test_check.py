"""Tests for the check command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from archmodel.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestCheckCommand:
    def test_clean_workspace(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["add", "person", "Customer"])
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 0

    def test_invalid_workspace_file(self, cli_runner: CliRunner) -> None:
        Path("workspace.json").write_text("{not json")
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 1
        assert "INVALID_WORKSPACE" in result.output

    def test_unresolved_reference(self, cli_runner: CliRunner) -> None:
        Path("workspace.json").write_text(
            json.dumps(
                {
                    "people": [
                        {
                            "id": "1",
                            "name": "Customer",
                            "relationships": [
                                {"id": "2", "sourceId": "1", "destinationId": "77"}
                            ],
                        }
                    ]
                }
            )
        )
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 1
        assert "UNRESOLVED_REFERENCE" in result.output
