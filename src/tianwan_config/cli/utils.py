"""CLI utilities for Tianwan Config.

Console output helpers shared by the CLI commands.
"""

import sys

from rich.console import Console
from rich.table import Table

from ..services.generator import GenerationSummary

# Global console instances
console = Console()
err_console = Console(stderr=True)


def print_error(message: str, exit_code: int = 1) -> None:
    """
    Print error message and exit.

    Args:
        message: Error message
        exit_code: Exit code (default: 1)
    """
    err_console.print(f"[bold red]Error:[/bold red] {message}")
    sys.exit(exit_code)


def print_warning(message: str) -> None:
    err_console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_success(message: str) -> None:
    console.print(f"[bold green]Success:[/bold green] {message}")


def create_summary_table(summary: GenerationSummary) -> Table:
    """
    Create a table describing a generation run.

    Args:
        summary: Counts reported by the generator

    Returns:
        Configured Table instance
    """
    table = Table(title="Generation Summary")
    table.add_column("Item", style="cyan", no_wrap=True)
    table.add_column("Count", style="green", justify="right")

    table.add_row("Cameras", str(summary.cameras))
    table.add_row("Inference servers", str(summary.servers))
    table.add_row("Bindings", str(summary.bindings))
    table.add_row("Skipped inventory rows", str(len(summary.skipped_rows)))
    table.add_row("Excluded devices", str(len(summary.excluded_devices)))
    table.add_row("Unbound capabilities", str(len(summary.skipped_bindings)))
    return table
