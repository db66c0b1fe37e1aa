"""Commands: create and edit relationships."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archmodel.commands._base import ArchCommand
from archmodel.domain.types import InteractionStyle
from archmodel.services.model import ModelService

if TYPE_CHECKING:
    from archmodel.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archmodel relate 1 2 "Uses"
  archmodel relate 4 6 "Reads from and writes to" -t JDBC
  archmodel relate 4 8 "Sends e-mail using" --async""",
)
@click.argument("source_id")
@click.argument("destination_id")
@click.argument("description")
@click.option("-t", "--technology", default=None, help="Protocol or technology used.")
@click.option("--async", "asynchronous", is_flag=True, help="Asynchronous interaction.")
@click.pass_obj
def relate(
    app: AppContext,
    source_id: str,
    destination_id: str,
    description: str,
    technology: str | None,
    asynchronous: bool,
) -> None:
    """Add a relationship from SOURCE_ID to DESTINATION_ID."""
    style = InteractionStyle.ASYNCHRONOUS if asynchronous else InteractionStyle.SYNCHRONOUS
    app.emit(
        ModelService(app.workspace).add_relationship(
            source_id, destination_id, description, technology, interaction_style=style
        )
    )


@click.command(
    "modify-relationship",
    cls=ArchCommand,
    examples="""\
  archmodel modify-relationship 9 "Makes API calls to" -t JSON/HTTPS""",
)
@click.argument("relationship_id")
@click.argument("description")
@click.option("-t", "--technology", default=None, help="Protocol or technology used.")
@click.pass_obj
def modify_relationship(
    app: AppContext, relationship_id: str, description: str, technology: str | None
) -> None:
    """Change a relationship's description and technology."""
    app.emit(
        ModelService(app.workspace).modify_relationship(relationship_id, description, technology)
    )
