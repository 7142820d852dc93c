"""Helper functions for CLI output formatting with Rich integration."""

from collections.abc import Iterable, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class Colors:
    """Color palette for CLI output."""

    SUCCESS = "bold green"
    ERROR = "bold red"
    WARNING = "bold yellow"
    INFO = "bold blue"
    HEADER = "bold cyan"
    MUTED = "dim"


def _console(stderr: bool = False) -> Console:
    return Console(stderr=stderr, highlight=False)


def print_success_message(message: str) -> None:
    _console().print(f"[{Colors.SUCCESS}]✓[/{Colors.SUCCESS}] {escape(message)}")


def print_error_message(message: str) -> None:
    """Print an error message to stderr."""
    _console(stderr=True).print(f"[{Colors.ERROR}]✗[/{Colors.ERROR}] {escape(message)}")


def print_warning_message(message: str) -> None:
    _console().print(f"[{Colors.WARNING}]![/{Colors.WARNING}] {escape(message)}")


def print_info_message(message: str) -> None:
    _console().print(f"[{Colors.INFO}]i[/{Colors.INFO}] {escape(message)}")


def print_list_item(item: str, indent: int = 1) -> None:
    _console().print(f"{' ' * (indent * 2)}• {escape(item)}")


def print_table(
    title: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[object]],
) -> None:
    """Print rows in a Rich table with a header style."""
    table = Table(title=title, header_style=Colors.HEADER)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(escape(str(value)) for value in row))
    _console().print(table)
