"""Shared utility functions for simpledi.

Provides Rich-based console output (the tool's only logging channel),
comma-separated argument parsing and path display helpers.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------


def parse_name_list(value: str | None) -> list[str]:
    """Split a comma-separated list, trimming whitespace and dropping empties.

    Examples::

        parse_name_list("user, post,,")  -> ["user", "post"]
        parse_name_list(None)            -> []
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def display_path(path: str | Path, root: str | Path | None = None) -> str:
    """Return *path* relative to *root* when possible, for console output."""
    p = Path(path)
    if root is not None:
        try:
            return p.relative_to(Path(root)).as_posix()
        except ValueError:
            pass
    return p.as_posix()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_info(message: str) -> None:
    """Print a plain informational line."""
    console.print(escape(message))


def print_created(path: str | Path, root: str | Path | None = None) -> None:
    """Print a dimmed ``Created:`` line for a written file."""
    console.print(f"[dim]Created:[/dim] {escape(display_path(path, root))}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")
