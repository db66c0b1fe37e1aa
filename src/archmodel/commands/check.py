"""Command: model integrity checking."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archmodel.commands._base import ArchCommand

if TYPE_CHECKING:
    from archmodel.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archmodel check
  archmodel --json check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Check the workspace for structural problems."""
    from archmodel.services.check import CheckService

    app.emit(CheckService(app.workspace).check())
