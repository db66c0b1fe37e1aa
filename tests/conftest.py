"""Shared pytest fixtures and test helpers for archmodel tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from archmodel.domain.elements import Component, Container, Person, SoftwareSystem
from archmodel.domain.model import Model
from archmodel.infrastructure.workspace import Workspace
from archmodel.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep ARCHMODEL_* variables from the host out of every test."""
    monkeypatch.delenv("ARCHMODEL_CONFIG", raising=False)
    monkeypatch.delenv("ARCHMODEL_WORKSPACE_PATH", raising=False)
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def model() -> Model:
    """An empty in-memory model."""
    return Model()


@pytest.fixture
def workspace_path(tmp_path: Path) -> Path:
    return tmp_path / "workspace.json"


@pytest.fixture
def workspace(workspace_path: Path) -> Workspace:
    """A workspace whose file does not exist yet."""
    return Workspace(workspace_path)


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI uses an isolated workspace.json.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared model builders
# ---------------------------------------------------------------------------


class Banking:
    """Handles onto the elements built by :func:`build_banking_model`."""

    customer: Person
    banking: SoftwareSystem
    mainframe: SoftwareSystem
    web: Container
    api: Container
    database: Container
    signin: Component
    accounts: Component
    security: Component


def build_banking_model(model: Model) -> Banking:
    """Populate *model* with a small two-system banking example.

    IDs are deterministic: customer=1, banking=2, mainframe=3, web=4,
    api=5, database=6, signin=7, accounts=8, security=9.
    """
    b = Banking()
    b.customer = model.add_person("Customer", "A bank customer")
    b.banking = model.add_software_system("Internet Banking", "Online banking")
    b.mainframe = model.add_software_system("Mainframe", "Core banking")
    b.web = b.banking.add_container("Web Application", "Serves the SPA", "Java")
    b.api = b.banking.add_container("API Application", "JSON API", "Java")
    b.database = b.banking.add_container("Database", "Stores users", "Oracle")
    b.signin = b.api.add_component("Sign In Controller", "Signs users in", "Spring MVC")
    b.accounts = b.api.add_component("Accounts Controller", "Lists accounts", "Spring MVC")
    b.security = b.api.add_component("Security Component", "Checks passwords", "Spring Bean")
    return b


@pytest.fixture
def banking(model: Model) -> Banking:
    return build_banking_model(model)


def ok_data(result: Any) -> dict[str, Any]:
    """Assert a ServiceResult succeeded and return its data."""
    assert result.ok, result.error
    return result.data
