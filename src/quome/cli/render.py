"""Rendering helpers for CLI output.

Values from the API are escaped before they reach Rich markup. Pass a
:class:`rich.text.Text` cell when a table cell needs styling.
"""

from __future__ import annotations
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any
from pydantic import BaseModel
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def _cell(value: str | Text) -> str | Text:
    return value if isinstance(value, Text) else escape(value)


def render_table(
    console: Console,
    *,
    title: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[str | Text]],
) -> None:
    """Render a simple table using :mod:`rich`."""
    table = Table(title=escape(title), show_lines=False)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(_cell(value) for value in row))
    console.print(table)


def render_kv_section(
    console: Console,
    *,
    title: str,
    pairs: Sequence[tuple[str, str]],
) -> None:
    """Render key/value pairs in a bordered panel."""
    lines = [f"[bold]{escape(key)}[/]: {escape(value)}" for key, value in pairs]
    panel = Panel("\n".join(lines), title=escape(title), expand=False)
    console.print(panel)


def render_json(console: Console, payload: BaseModel | Sequence[BaseModel]) -> None:
    """Print a model, or a list of models, as indented JSON."""
    data: Any
    if isinstance(payload, BaseModel):
        data = payload.model_dump(mode="json")
    else:
        data = [item.model_dump(mode="json") for item in payload]
    console.print(JSON.from_data(data, indent=2))


def render_success(console: Console, message: str) -> None:
    """Print a green success line; ``message`` is plain text."""
    console.print(f"[bold green]Success![/] {escape(message)}")


def format_timestamp(value: datetime | None) -> str:
    """Return ``value`` as ``YYYY-MM-DD HH:MM`` or an empty string."""
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d %H:%M")


__all__ = [
    "format_timestamp",
    "render_json",
    "render_kv_section",
    "render_success",
    "render_table",
]
