"""Commands: inspect elements."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archmodel.commands._base import ArchCommand
from archmodel.domain.types import ElementKind
from archmodel.services.model import ModelService

if TYPE_CHECKING:
    from archmodel.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archmodel show 2
  archmodel --json show 3""",
)
@click.argument("element_id")
@click.pass_obj
def show(app: AppContext, element_id: str) -> None:
    """Show one element with its children and relationships."""
    app.emit(ModelService(app.workspace).show(element_id))


@click.command(
    "list",
    cls=ArchCommand,
    examples="""\
  archmodel list
  archmodel list --kind container
  archmodel -q list --kind person""",
)
@click.option(
    "--kind",
    type=click.Choice([str(k) for k in ElementKind]),
    default=None,
    help="Only list elements of this kind.",
)
@click.pass_obj
def list_cmd(app: AppContext, kind: str | None) -> None:
    """List elements in hydration order."""
    app.emit(ModelService(app.workspace).list_elements(kind=kind))
