"""Command: materialize implicit relationships."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archmodel.commands._base import ArchCommand
from archmodel.services.derive import DeriveService

if TYPE_CHECKING:
    from archmodel.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archmodel derive
  archmodel derive --dry-run
  archmodel --json derive""",
)
@click.option("--dry-run", is_flag=True, help="Report what would be added without saving.")
@click.pass_obj
def derive(app: AppContext, dry_run: bool) -> None:
    """Propagate relationships up the containment hierarchy."""
    app.emit(DeriveService(app.workspace).derive(dry_run=dry_run))
