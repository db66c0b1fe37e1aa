"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from archmodel.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from archmodel.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items") or result.data.get("steps")
    if items and isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))

    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        val = item.get("id")
        if val is not None:
            return str(val)
        if "source_id" in item and "destination_id" in item:
            return f"{item['source_id']}->{item['destination_id']}"
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="arch.ok")
    op = Text(f"  {result.op}", style="arch.op")
    if "created" in result.data and not result.created:
        op.append("  (unchanged)", style="arch.warning")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="arch.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="arch.id")
    elif key == "path":
        v = Text(str(value), style="arch.path")
    elif key == "name":
        v = Text(str(value), style="arch.name")
    elif key == "kind":
        v = Text(str(value), style=style_for_kind(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _element_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table for a list of element summaries."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="arch.id", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Name", style="arch.name")
    if verbose:
        table.add_column("Path", style="arch.path")

    for item in items:
        kind = str(item.get("kind", ""))
        row: list[Any] = [
            str(item.get("id", "")),
            Text(kind, style=style_for_kind(kind)),
            str(item.get("name", "")),
        ]
        if verbose:
            row.append(str(item.get("path", "")))
        table.add_row(*row)
    return table


def _relationship_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table for a list of relationship summaries."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    if any("id" in item for item in items):
        table.add_column("ID", style="arch.id", no_wrap=True)
    table.add_column("Source")
    table.add_column("Destination")
    table.add_column("Description")
    table.add_column("Technology")
    if verbose:
        table.add_column("Linked", style="dim")

    for item in items:
        row: list[str] = []
        if "id" in item:
            row.append(str(item["id"]))
        row.extend(
            [
                f"{item.get('source', '')} ({item.get('source_id', '')})",
                f"{item.get('destination', '')} ({item.get('destination_id', '')})",
                str(item.get("description") or ""),
                str(item.get("technology") or ""),
            ]
        )
        if verbose:
            row.append(str(item.get("linked_relationship_id", "")))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="arch.error")
    op = Text(f"  {result.op}", style="arch.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_element_mutation(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render add_* results for elements."""
    _status_line(console, result)
    d = result.data
    for key in ("id", "kind", "name", "path", "technology", "environment", "container_id"):
        if key in d:
            _field(console, key, d[key])
    _field(console, "created", d.get("created", False))

    replicated = d.get("replicated", [])
    if replicated:
        _field(console, "replicated", len(replicated))
        if verbose:
            console.print(_relationship_table(replicated, verbose=True))
    derived = d.get("derived", [])
    if derived:
        _field(console, "derived", ", ".join(derived))
    if verbose:
        _render_meta(console, result)


def _render_relationship_mutation(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render add_relationship and modify_relationship results."""
    _status_line(console, result)
    d = result.data
    for key in ("id", "source_id", "destination_id", "description", "technology"):
        if d.get(key) is not None:
            _field(console, key, d[key])
    if "created" in d:
        _field(console, "created", d["created"])
    derived = d.get("derived", [])
    if derived:
        _field(console, "derived", ", ".join(derived))
    if verbose:
        _render_meta(console, result)


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "path", d.get("path", ""))
    if d.get("enterprise"):
        _field(console, "enterprise", d["enterprise"])


# ── Query renderers ───────────────────────────────────────────────────


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single element as a panel with children and relationships."""
    d = result.data
    lines: list[str] = []
    for key in ("kind", "path", "technology", "environment", "location", "type", "source_path"):
        val = d.get(key)
        if val not in (None, ""):
            lines.append(f"{key}: {val}")
    if d.get("container_id"):
        lines.append(f"container: {d['container_id']} (#{d.get('instance_number', '?')})")
    if d.get("instances"):
        lines.append(f"instances: {', '.join(d['instances'])}")
    if d.get("description"):
        lines.append(f"\n{d['description']}")

    title = f"{d.get('id', '?')} — {d.get('name', '')}"
    console.print(
        Panel(
            "\n".join(lines),
            title=title,
            border_style=style_for_kind(str(d.get("kind", ""))) or "dim",
            expand=False,
        )
    )

    children = d.get("children", [])
    if children:
        console.print(f"\n{len(children)} children")
        console.print(_element_table(children, verbose=verbose))
    relationships = d.get("relationships", [])
    if relationships:
        console.print(f"\n{len(relationships)} relationships")
        console.print(_relationship_table(relationships, verbose=verbose))


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    console.print(_element_table(items, verbose=verbose))
    console.print(f"\n{result.data.get('count', len(items))} elements")


def _render_derive(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    if d.get("dry_run"):
        console.print("  [arch.warning]DRY RUN[/arch.warning]")
    _field(console, "count", d.get("count", 0))
    items = d.get("items", [])
    if items:
        console.print(_relationship_table(items, verbose=verbose))
    if verbose:
        _render_meta(console, result)


def _render_summary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    if d.get("enterprise"):
        _field(console, "enterprise", d["enterprise"])
    for key in ("elements", "relationships", "replicated_relationships", "high_water_id"):
        _field(console, key, d.get(key, 0))
    environments = d.get("environments", [])
    if environments:
        _field(console, "environments", ", ".join(environments))

    kinds = d.get("kinds", {})
    if kinds:
        console.print()
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Kind")
        table.add_column("Count", justify="right")
        for kind, count in kinds.items():
            table.add_row(Text(kind, style=style_for_kind(kind)), str(count))
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_dependencies(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    items = d.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="arch.id", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Name", style="arch.name")
    table.add_column("Depth", justify="right")
    for item in items:
        kind = str(item.get("kind", ""))
        table.add_row(
            str(item.get("id", "")),
            Text(kind, style=style_for_kind(kind)),
            str(item.get("name", "")),
            str(item.get("depth", "")),
        )
    console.print(table)
    console.print(f"\n{d.get('count', len(items))} elements ({d.get('direction', 'out')})")


def _render_path(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "length", d.get("length", 0))
    for step in d.get("steps", []):
        console.print(f"  [arch.id]{step.get('id', '')}[/arch.id]  {step.get('name', '')}")
        for via in step.get("via", []):
            console.print(f"    ↓ {via.get('description', '')} [dim]({via.get('relationship_id', '')})[/dim]")


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    issues = d.get("issues", [])
    _field(console, "issues", d.get("count", len(issues)))
    if issues:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Category")
        table.add_column("Message")
        for issue in issues:
            table.add_row(str(issue.get("category", "")), str(issue.get("message", "")))
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_discover(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "container_id", d.get("container_id", ""))
    _field(console, "count", d.get("count", 0))
    _field(console, "relationships_added", d.get("relationships_added", 0))
    items = d.get("items", [])
    if items:
        console.print(_element_table(items, verbose=verbose))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Mutations
    "init_workspace": _render_init,
    "add_person": _render_element_mutation,
    "add_software_system": _render_element_mutation,
    "add_container": _render_element_mutation,
    "add_component": _render_element_mutation,
    "add_deployment_node": _render_element_mutation,
    "add_container_instance": _render_element_mutation,
    "add_relationship": _render_relationship_mutation,
    "modify_relationship": _render_relationship_mutation,
    "derive": _render_derive,
    "discover": _render_discover,
    # Queries
    "show": _render_show,
    "list_elements": _render_list,
    # Graph
    "summary": _render_summary,
    "dependencies": _render_dependencies,
    "path": _render_path,
    # Integrity
    "check": _render_check,
}
