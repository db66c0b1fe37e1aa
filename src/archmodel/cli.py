"""archmodel root command.

Global flags are collected into :class:`ArchSettings` (together with
``archmodel.toml`` and ``ARCHMODEL_*`` variables) and handed to every
subcommand as an :class:`AppContext`.
"""

from __future__ import annotations

import click

from archmodel import __version__
from archmodel.commands import register_commands
from archmodel.commands._base import ArchGroup
from archmodel.commands._context import AppContext
from archmodel.config.settings import ArchSettings

_ROOT_EXAMPLES = """\
  archmodel init --enterprise "Big Bank plc"
  archmodel add system "Internet Banking"
  archmodel -w models/bank.json --json list
  archmodel -v derive"""


@click.group(
    "archmodel",
    cls=ArchGroup,
    examples=_ROOT_EXAMPLES,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="archmodel")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only IDs.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and span timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this archmodel.toml instead of searching upward.",
)
@click.option(
    "-w",
    "--workspace",
    "workspace_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Model file to read and write (default: [workspace] file).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, workspace_path: str | None, **flags: bool) -> None:
    """Build and query software architecture models stored as JSON."""
    settings = ArchSettings.from_cli(
        config_path=config_path, workspace_path=workspace_path, **flags
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
