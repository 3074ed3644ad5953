"""Rich table rendering for presentation rows.

Takes the flat rows built by :mod:`easypost_cli.core.presentation` and
prints them.  Column headers come from the row keys; ``None`` renders
as an empty cell.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from easypost_cli.cli.console import console, escape
from easypost_cli.exceptions import EnvironmentError


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for row rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def _cell(value: object) -> str:
    if value is None:
        return ""
    return escape(str(value))


def render_rows(
    rows: Sequence[Mapping[str, object]],
    *,
    title: str | None = None,
    indexed: bool = True,
) -> None:
    """Print *rows* as one table; an ``#`` column shows selection indexes."""
    if not rows:
        return
    table_class = _import_rich_table()
    table = table_class(
        title=title,
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    if indexed:
        table.add_column("#", justify="right", style="dim")
    for column in rows[0]:
        table.add_column(column)

    for index, row in enumerate(rows):
        cells = [_cell(value) for value in row.values()]
        if indexed:
            cells.insert(0, str(index))
        table.add_row(*cells)

    console.print(table)


def render_record(row: Mapping[str, object], *, title: str | None = None) -> None:
    """Print a single row as a two-column field/value table."""
    table_class = _import_rich_table()
    table = table_class(
        title=title,
        show_header=False,
        border_style="dim",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in row.items():
        table.add_row(key, _cell(value))
    console.print(table)
