"""Console rendering of library, table and query listings."""

import sys
from typing import Any, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

DATA_DICTIONARY_URL = "https://wrds-www.wharton.upenn.edu/data-dictionary/"


def _console(stream=None) -> Console:
    return Console(file=stream or sys.stdout, highlight=False)


def _cell(value: Any) -> str:
    return "" if value is None else escape(str(value))


def render_libraries(mapping: Sequence[Tuple[str, Optional[str]]], stream=None) -> None:
    """Print SAS libraries next to their Postgres schemas."""
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("SAS Library", style="bold")
    table.add_column("Postgres Schema")
    table.add_column("URL", overflow="fold")
    for library, schema in mapping:
        url = f"{DATA_DICTIONARY_URL}{schema}/" if schema is not None else ""
        table.add_row(_cell(library), _cell(schema), url)
    _console(stream).print(table)


def render_tables(tables: Sequence[str], urls: Sequence[Optional[str]], stream=None) -> None:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Table", style="bold")
    table.add_column("URL", overflow="fold")
    for name, url in zip(tables, urls):
        table.add_row(_cell(name), _cell(url))
    _console(stream).print(table)


def render_result(result, stream=None) -> None:
    """Print any column-oriented result as a table."""
    console = _console(stream)
    if not result:
        console.print("No columns returned.")
        return
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    for column in result.keys():
        table.add_column(_cell(column))
    for row in zip(*result.values()):
        table.add_row(*(_cell(value) for value in row))
    console.print(table)


def render_description(library: str, table: str, description, row_estimate: int, stream=None) -> None:
    console = _console(stream)
    console.print(f"Table: {library}.{table} (~{row_estimate} rows)", markup=False)
    render_result(description, stream=console.file)
