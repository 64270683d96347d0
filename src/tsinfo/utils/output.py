"""Rich console output helpers."""

import logging
from enum import Enum

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from tsinfo.core.views import Priority, StatusWarning

console = Console()
err_console = Console(stderr=True)

PRIORITY_STYLES = {
    Priority.ERROR: ("red", "ERROR"),
    Priority.WARN: ("yellow", "WARN"),
    Priority.SYSTEM: ("blue", "INFO"),
}


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def info(msg: str) -> None:
    """Print an info message."""
    console.print(f"[blue]INFO:[/blue] {escape(msg)}")


def error(msg: str) -> None:
    """Print an error message."""
    console.print(f"[red]ERROR:[/red] {escape(msg)}")


def warning(item: StatusWarning) -> None:
    """Print a status warning styled by its priority."""
    color, label = PRIORITY_STYLES[item.priority]
    console.print(f"[{color}]{label}:[/{color}] {escape(item.message)}")


def section(title: str) -> None:
    """Print a section header."""
    console.print(f"\n[bold]=== {escape(title)} ===[/bold]")


def create_table(title: str, columns: list[str]) -> Table:
    """Create a table with the given columns."""
    table = Table(title=title)
    for col in columns:
        table.add_column(col)
    return table


def key_value_table(rows: list[tuple[str, str]]) -> Table:
    """Create a two-column label/value table without headers."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    for label, value in rows:
        table.add_row(escape(label), escape(value))
    return table


def print_table(table: Table) -> None:
    """Print a table."""
    console.print(table)


def _json_default(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def print_json(data: object) -> None:
    """Print data as highlighted JSON."""
    console.print_json(data=data, default=_json_default)
