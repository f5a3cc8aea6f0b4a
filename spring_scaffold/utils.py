"""Shared utility functions for spring-scaffold.

Provides name-casing helpers used to derive template context values and the
Rich-based console output used by the CLI for progress and summaries.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def to_pascal(name: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Only the first letter of each segment is changed, so inner capitals
    survive.  Every run of separators is dropped, even before a digit or
    another separator, so the result is always a valid Java identifier
    (``a-1b`` -> ``A1b``, not ``A-1b``).

    Examples::

        to_pascal("smoke-test-project") -> "SmokeTestProject"
        to_pascal("order_service") -> "OrderService"
        to_pascal("api2-gateway") -> "Api2Gateway"
    """
    parts = re.split(r"[-_]+", name.strip())
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def package_to_path(package_name: str) -> str:
    """Convert a dotted Java package into a relative path fragment.

    ``"com.acme.orders"`` -> ``"com/acme/orders"``
    """
    return package_name.replace(".", "/")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Labels and values are printed literally, never as Rich markup.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_panel(body: str, title: str, style: str = "cyan") -> None:
    """Print *body* inside a bordered panel."""
    console.print(Panel(body, title=title, border_style=style, expand=False))


def print_success(message: str) -> None:
    """Print a green success message.  *message* is plain text, not markup."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def create_progress() -> Progress:
    """Create a Rich spinner for the generation run.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
