"""Command group: graph queries over relationships."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archmodel.commands._base import ArchGroup
from archmodel.services.graph import GraphService

if TYPE_CHECKING:
    from archmodel.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  archmodel graph summary
  archmodel graph dependencies 4 --depth 2
  archmodel graph dependencies 6 --direction in
  archmodel graph path 1 6"""


@click.group(cls=ArchGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Query the relationship graph."""


@graph.command(
    examples="""\
  archmodel graph summary
  archmodel --json graph summary"""
)
@click.pass_obj
def summary(app: AppContext) -> None:
    """Count elements, relationships and environments."""
    app.emit(GraphService(app.workspace).summary())


@graph.command(
    examples="""\
  archmodel graph dependencies 4
  archmodel graph dependencies 4 --depth 3 --direction both"""
)
@click.argument("element_id")
@click.option(
    "--direction",
    type=click.Choice(["out", "in", "both"]),
    default="out",
    help="Follow relationships outward, inward or both.",
)
@click.option("--depth", default=1, type=int, help="Maximum hops (1-10).")
@click.pass_obj
def dependencies(app: AppContext, element_id: str, direction: str, depth: int) -> None:
    """List elements reachable through relationships."""
    app.emit(
        GraphService(app.workspace).dependencies(element_id, direction=direction, depth=depth)
    )


@graph.command(
    examples="""\
  archmodel graph path 1 6
  archmodel --json graph path 1 6"""
)
@click.argument("source_id")
@click.argument("target_id")
@click.pass_obj
def path(app: AppContext, source_id: str, target_id: str) -> None:
    """Find the shortest relationship chain between two elements."""
    app.emit(GraphService(app.workspace).path(source_id, target_id))
