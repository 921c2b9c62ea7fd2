# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/cli/main.py

"""
CLI dispatcher routing each command to its handler through
workflow_command_pattern.
"""

# Standard library imports
from importlib.metadata import version, PackageNotFoundError
from typing import Optional, Any

# Third-party imports
import typer
from rich.console import Console

# Local teryx imports
from teryx.cli.patterns import workflow_command_pattern
from teryx.cli.utils import handle_operation_error
from teryx.cli.commands import actions as action_commands

app = typer.Typer(
    help="""teryx - Fossil SCM workflow helper

[bold blue]Setup:[/bold blue] init, clone
[bold green]Deploy:[/bold green] transfer
""",
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        try:
            pkg_version = version("teryx")
        except PackageNotFoundError as e:
            handle_operation_error(console, "retrieving version", e)
        console.print(f"teryx version {pkg_version}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
) -> None:
    """teryx - simplify Fossil SCM init, clone and transfer workflows."""
    pass


@app.command()
def init(
    name: str = typer.Argument(..., help="Repository name (.fossil is appended if missing)"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Password for the admin user (required)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Admin username (defaults to current user)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress informational output")
) -> Any:
    """[bold blue]Setup[/bold blue]: Create a new Fossil repository, open a checkout and set the admin password."""
    decorated_handler = workflow_command_pattern("initializing repository")(
        lambda console, config, runner, verbose, quiet: action_commands.init(
            console, config, runner,
            verbose=verbose, quiet=quiet,
            name=name, password=password, user=user
        )
    )
    return decorated_handler(verbose=verbose, quiet=quiet)


@app.command()
def clone(
    url: str = typer.Argument(..., help="Remote repository URL (a trailing /home is ignored)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress informational output")
) -> Any:
    """[bold blue]Setup[/bold blue]: Clone a remote repo into ~/fossils/<host>/<path> and open it."""
    decorated_handler = workflow_command_pattern("cloning repository")(
        lambda console, config, runner, verbose, quiet: action_commands.clone(
            console, config, runner,
            verbose=verbose, quiet=quiet,
            url=url
        )
    )
    return decorated_handler(verbose=verbose, quiet=quiet)


@app.command()
def transfer(
    file: str = typer.Argument(..., help="Repository file to transfer"),
    destination: Optional[str] = typer.Option(
        None, "--destination", "-d", help="Remote destination in user@host:path format (required)"
    ),
    remote_user: Optional[str] = typer.Option(
        None, "--remote-user", "-r", help="User/group for the web server on the remote host [default: www-data]"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress informational output")
) -> Any:
    """[bold green]Deploy[/bold green]: Copy a repository to a server with scp (sftp fallback)."""
    decorated_handler = workflow_command_pattern("transferring repository")(
        lambda console, config, runner, verbose, quiet: action_commands.transfer(
            console, config, runner,
            verbose=verbose, quiet=quiet,
            file=file, destination=destination, remote_user=remote_user
        )
    )
    return decorated_handler(verbose=verbose, quiet=quiet)


# =============================================================================
# ENTRY POINT
# =============================================================================

def cli_main() -> None:  # pragma: no cover - entry point
    """Entry point for the teryx CLI application."""
    app()


if __name__ == "__main__":  # pragma: no cover
    cli_main()
