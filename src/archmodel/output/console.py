"""Rich console setup for human-readable output.

Renderers print into a Console backed by a StringIO so ``format_result``
can return plain text; the caller decides which stream it goes to.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from archmodel.domain.types import ElementKind

_KIND_STYLES: dict[ElementKind, str] = {
    ElementKind.PERSON: "green",
    ElementKind.SOFTWARE_SYSTEM: "blue",
    ElementKind.CONTAINER: "cyan",
    ElementKind.COMPONENT: "magenta",
    ElementKind.DEPLOYMENT_NODE: "yellow",
    ElementKind.CONTAINER_INSTANCE: "yellow",
}

ARCH_THEME = Theme(
    {
        "arch.ok": "bold green",
        "arch.error": "bold red",
        "arch.warning": "bold yellow",
        "arch.op": "bold cyan",
        "arch.key": "dim",
        "arch.id": "bold blue",
        "arch.path": "dim",
        "arch.name": "bold",
        **{f"arch.kind.{kind}": style for kind, style in _KIND_STYLES.items()},
    }
)


def create_console(*, no_color: bool = False, width: int = 120) -> Console:
    """A themed Console writing into memory.

    Tests pass ``no_color=True`` and a fixed *width* for stable text.
    """
    return Console(
        file=StringIO(),
        theme=ARCH_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
    )


def get_output(console: Console) -> str:
    """Everything printed to a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()


def style_for_kind(kind: str) -> str:
    """Theme style for an element kind, or ``""`` for anything else."""
    style = f"arch.kind.{kind}"
    return style if style in ARCH_THEME.styles else ""
