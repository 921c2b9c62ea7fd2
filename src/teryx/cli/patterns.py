# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/cli/patterns.py

"""
Decorator pattern shared by all teryx commands.

workflow_command_pattern wraps a command handler with the common setup:
- verbose/quiet validation
- user config loading
- logging setup
- console and process runner creation
- mapping any TeryxError to a failure message and exit status 1
"""

import functools
from typing import Any, Callable

import typer
from loguru import logger
from rich.console import Console

from teryx.cli.utils import handle_config_error, handle_operation_error
from teryx.config.manager import load_merged_user_config
from teryx.system.exceptions import ConfigError, TeryxError
from teryx.system.execution import CommandExecutor
from teryx.system.logging_setup import setup_logging


def _validate_mutually_exclusive_flags(verbose: bool, quiet: bool) -> None:
    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet are mutually exclusive")


def workflow_command_pattern(operation: str) -> Callable:
    """Build a decorator for a workflow command handler.

    The decorated handler is called as
    handler(console, config, runner, verbose=..., quiet=...).

    Args:
        operation: Short description used in failure messages
            ("Error <operation>: <detail>")
    """
    def decorator(handler: Callable) -> Callable:
        @functools.wraps(handler)
        def wrapper(verbose: bool = False, quiet: bool = False) -> Any:
            _validate_mutually_exclusive_flags(verbose, quiet)
            console = Console()

            try:
                config = load_merged_user_config()
            except ConfigError as e:
                setup_logging(verbose=verbose)
                handle_config_error(console, str(e))

            setup_logging(config, verbose=verbose)
            runner = CommandExecutor(console)

            try:
                return handler(console, config, runner, verbose=verbose, quiet=quiet)
            except TeryxError as e:
                logger.debug(f"{operation} failed: {type(e).__name__}: {e}")
                handle_operation_error(console, operation, e)

        return wrapper
    return decorator
