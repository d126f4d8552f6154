"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and styled
key/value lines) or machines (--json).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from sitebake.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from sitebake.services.result import ServiceResult


def _render_value(value: Any, style: str | None = None) -> str:
    if value is None:
        return "[bake.missing]unset[/]"
    if isinstance(value, (dict, list)):
        text = escape(_json.dumps(value, separators=(",", ":")))
    else:
        text = escape(str(value))
    return f"[{style}]{text}[/]" if style else text


def _render_items(console: Console, items: list[dict[str, Any]]) -> None:
    """Render a list of homogeneous records as a table."""
    table = Table(show_header=True, header_style="bake.key", box=None, pad_edge=False)
    columns = list(items[0])
    for column in columns:
        table.add_column(column)
    for item in items:
        table.add_row(
            *(_render_value(item.get(column), "bake.doctype" if column == "name" else None) for column in columns)
        )
    console.print(table)


def _render_data(console: Console, data: dict[str, Any], *, value_style: str | None = None) -> None:
    """Print payload entries; *value_style* applies to top-level scalar values."""
    for key, value in data.items():
        if key == "items" and isinstance(value, list) and value:
            _render_items(console, value)
        elif isinstance(value, dict) and key in ("values", "options", "names"):
            console.print(f"  [bake.key]{key}:[/]")
            for sub_key, sub_value in value.items():
                console.print(f"    [bake.key]{escape(sub_key)}[/] = {_render_value(sub_value)}")
        else:
            console.print(f"  [bake.key]{key}:[/] {_render_value(value, value_style)}")


def format_result(result: ServiceResult, *, json_output: bool = False, no_color: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        no_color: Strip ANSI styling from human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=no_color)
    if result.ok:
        console.print(f"[bake.ok]OK:[/] [bake.op]{result.op}[/]")
        if result.data:
            _render_data(console, result.data, value_style="bake.path" if result.op == "paths" else None)
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(f"[bake.error]ERROR:[/] [bake.op]{result.op}[/] - {escape(message)}")
    return get_output(console).rstrip("\n")
