# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/cli/utils.py

"""
CLI error reporting helpers.

Both helpers print a red failure marker and end the command with exit
status 1 via typer.Exit.
"""

import typer
from rich.console import Console
from rich.markup import escape


def handle_config_error(console: Console, error_message: str) -> None:
    """Handle configuration errors with consistent formatting."""
    console.print(f"[red]✗[/red] Configuration error: {escape(error_message)}")
    raise typer.Exit(1)


def handle_operation_error(console: Console, operation: str, error: Exception) -> None:
    """Handle operation errors with consistent formatting."""
    console.print(f"[red]✗[/red] Error {operation}: {escape(str(error))}")
    raise typer.Exit(1)
