"""Command: populate a container from discovery strategies."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from archmodel.commands._base import ArchCommand
from archmodel.services.discovery import DiscoveryService

if TYPE_CHECKING:
    from archmodel.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archmodel discover 3 --manifest components.json
  archmodel discover 3 --manifest a.json --manifest b.json --namespace bank.api
  archmodel discover 3 --installed""",
)
@click.argument("container_id")
@click.option(
    "-m",
    "--manifest",
    "manifests",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Component manifest (JSON, repeatable; run in the order given).",
)
@click.option("--namespace", default="", help="Namespace the strategies search under.")
@click.option("--installed", is_flag=True, help="Also run strategies installed as plugins.")
@click.pass_obj
def discover(
    app: AppContext,
    container_id: str,
    manifests: tuple[Path, ...],
    namespace: str,
    installed: bool,
) -> None:
    """Find components of a container and the dependencies between them."""
    app.emit(
        DiscoveryService(app.workspace).discover(
            container_id,
            manifests=list(manifests),
            namespace=namespace,
            use_entry_points=installed,
            enabled=list(app.settings.discovery.strategies) or None,
        )
    )
