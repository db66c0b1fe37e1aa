"""Click base classes that carry usage examples.

``ArchCommand`` and ``ArchGroup`` take an ``examples=`` string. Commands
that have one grow an eager ``--examples`` flag that prints the examples
and exits, and their ``--help`` ends with a pointer to it.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(ctx.command.examples)  # type: ignore[attr-defined]
    ctx.exit(0)


class _ExamplesMixin:
    """Adds the ``--examples`` flag at parse time when examples exist."""

    examples: str | None

    def _init_examples(self, examples: str | None, kwargs: dict[str, Any]) -> None:
        self.examples = examples
        if examples and not kwargs.get("epilog"):
            kwargs["epilog"] = "Run with --examples for usage examples."

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params: list[click.Parameter] = [*super().get_params(ctx)]  # type: ignore[misc]
        if self.examples:
            params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples and exit.",
                )
            )
        return params


class ArchCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        self._init_examples(examples, kwargs)
        super().__init__(*args, **kwargs)


class ArchGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands default to :class:`ArchCommand`."""

    command_class = ArchCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        self._init_examples(examples, kwargs)
        super().__init__(*args, **kwargs)
