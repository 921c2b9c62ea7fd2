# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/cli/commands/actions.py

"""
Action command handlers.

Handles: init, clone, transfer
"""

from typing import Any

from rich.console import Console

from teryx.config.manager import UserConfig
from teryx.core.lifecycle import init_repository, clone_repository, transfer_repository
from teryx.core.models import InitOptions, CloneOptions, TransferOptions
from teryx.core.protocols import ProcessRunner


def init(
    console: Console,
    config: UserConfig,
    runner: ProcessRunner,
    verbose: bool = False,
    quiet: bool = False,
    **operation_params
) -> dict[str, Any]:
    """Initialize a new Fossil repository with an admin user.

    Args:
        console: Rich console for output
        config: User configuration
        runner: Process runner for external commands
        verbose: Show detailed output
        quiet: Suppress informational output
        **operation_params: Operation-specific parameters:
            - name: Repository name
            - password: Admin password (required)
            - user: Admin user name (default: current system user)

    Returns:
        Init result for programmatic use
    """
    options = InitOptions(
        name=operation_params.get('name', ''),
        password=operation_params.get('password'),
        user=operation_params.get('user')
    )
    result = init_repository(options, runner, console, config=config, quiet=quiet)
    return {'operation': 'init', **result.summary()}


def clone(
    console: Console,
    config: UserConfig,
    runner: ProcessRunner,
    verbose: bool = False,
    quiet: bool = False,
    **operation_params
) -> dict[str, Any]:
    """Clone a remote repository into the structured local layout.

    Args:
        **operation_params: Operation-specific parameters:
            - url: Remote repository URL
    """
    options = CloneOptions(url=operation_params.get('url', ''))
    result = clone_repository(options, runner, console, config=config, quiet=quiet)
    return {'operation': 'clone', **result.summary()}


def transfer(
    console: Console,
    config: UserConfig,
    runner: ProcessRunner,
    verbose: bool = False,
    quiet: bool = False,
    **operation_params
) -> dict[str, Any]:
    """Transfer a repository file to a server.

    Args:
        **operation_params: Operation-specific parameters:
            - file: Local repository file
            - destination: user@host:path (required)
            - remote_user: Web server user/group (default: from config)
    """
    options = TransferOptions(
        file=operation_params.get('file', ''),
        destination=operation_params.get('destination'),
        remote_user=operation_params.get('remote_user') or config.remote_user
    )
    result = transfer_repository(options, runner, console, config=config, quiet=quiet)
    return {'operation': 'transfer', **result.summary()}
