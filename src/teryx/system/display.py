# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/system/display.py

# Standard library imports
from typing import Optional

# Third-party imports
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel


def display_command(console: Console, command_line: str, cwd: Optional[str] = None) -> None:
    """Echo an external command before it runs."""
    location = f" [dim](in {escape(cwd)})[/dim]" if cwd else ""
    console.print(f"[bold cyan]▶[/bold cyan] Executing: {escape(command_line)}{location}")


def display_info(console: Console, message: str, quiet: bool = False) -> None:
    if not quiet:
        console.print(f"[blue]ℹ[/blue] {escape(message)}")


def display_warning(console: Console, message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def display_success(console: Console, message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def display_remediation(console: Console, remote_user: str, command: str) -> None:
    """Show the post-transfer permission fix the user has to run on the server.

    The command itself is printed outside the panel, unwrapped and without
    markup, so it can be copied as-is.
    """
    body = (
        "To allow the web server to write to the repository, its ownership and\n"
        "permissions must be updated on the server. Run a command like the one below.\n"
        f"You may need to replace '{escape(remote_user)}' with your server's actual "
        "web user/group (e.g. 'apache', 'nginx')."
    )
    console.print(Panel(
        body,
        title="[bold yellow]Post-transfer steps required on the server[/bold yellow]",
        border_style="yellow",
        expand=False
    ))
    console.print()
    console.print(command, markup=False, highlight=False, soft_wrap=True)
    console.print()
