"""Rich console output for the storagekit command line."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from storagekit.types import Diagnostic


class ConsoleOutput:
    """Formats command results for the terminal."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None) -> None:
        """Initialize output.

        Args:
            console: Console for regular output. Defaults to stdout.
            err_console: Console for diagnostics. Defaults to stderr.
        """
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def show_success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.err_console.print(f"[red]✗[/red] {message}")

    def show_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Diagnostic sink printing each failure as it happens."""
        self.err_console.print(
            f"[dim]warning: {escape(str(diagnostic))}[/dim]",
            highlight=False,
        )

    def write_content(self, data: bytes) -> None:
        """Write file content verbatim, without markup or wrapping."""
        self.console.out(data.decode("utf-8", errors="replace"), end="", highlight=False)

    def show_paths(self, paths: list[Path], title: str) -> None:
        """Display a list of paths.

        Args:
            paths: Paths to display, in the order given.
            title: Heading naming what was listed.
        """
        if not paths:
            self.console.print(f"[yellow]No {title.lower()} found[/yellow]")
            return

        self.console.print(f"[bold]{title}[/bold] ({len(paths)})")
        for path in paths:
            self.console.print(f"  {path}", highlight=False, markup=False)

    def show_details(self, path: Path, details: dict[str, Any]) -> None:
        """Display a key/value table describing a path.

        Args:
            path: Path described.
            details: Field names mapped to values.
        """
        table = Table(title=str(path))
        table.add_column("Property", style="cyan")
        table.add_column("Value")

        for key, value in details.items():
            table.add_row(key, _format_value(value))

        self.console.print(table)


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).isoformat()
    return str(value)
