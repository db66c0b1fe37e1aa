"""Command: create a new workspace file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archmodel.commands._base import ArchCommand
from archmodel.services.model import ModelService

if TYPE_CHECKING:
    from archmodel.commands._context import AppContext


@click.command(
    "init",
    cls=ArchCommand,
    examples="""\
  archmodel init
  archmodel init --enterprise "Big Bank plc"
  archmodel -w models/bank.json init --force""",
)
@click.option("--enterprise", default=None, help="Name of the enterprise being modelled.")
@click.option("--force", is_flag=True, help="Overwrite an existing workspace file.")
@click.pass_obj
def init_cmd(app: AppContext, enterprise: str | None, force: bool) -> None:
    """Create an empty model in the workspace file."""
    app.emit(ModelService(app.workspace).init_workspace(enterprise=enterprise, force=force))
