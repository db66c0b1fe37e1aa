"""Subcommand modules for archmodel.

Provides register_commands() which uses deferred imports to keep
``archmodel --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from archmodel.commands.add import add
    from archmodel.commands.graph import graph

    cli.add_command(add)
    cli.add_command(graph)

    # --- Standalone commands ---
    from archmodel.commands.check import check
    from archmodel.commands.derive import derive
    from archmodel.commands.discover import discover
    from archmodel.commands.init_cmd import init_cmd
    from archmodel.commands.relate import modify_relationship, relate
    from archmodel.commands.show import list_cmd, show

    cli.add_command(init_cmd)
    cli.add_command(relate)
    cli.add_command(modify_relationship)
    cli.add_command(derive)
    cli.add_command(show)
    cli.add_command(list_cmd)
    cli.add_command(check)
    cli.add_command(discover)
