# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/core/protocols.py

"""
Shared protocols for teryx workflows.

Workflows depend on this interface rather than on CommandExecutor so that
tests can substitute a recording runner.
"""

from pathlib import Path
from typing import Protocol, Union

from teryx.system.execution import CommandResult


class ProcessRunner(Protocol):
    """Minimal interface for running external programs."""

    def run_interactive(
        self,
        working_dir: Union[str, Path, None],
        program: str,
        *args: str
    ) -> CommandResult:
        """Run a program attached to the terminal, optionally in working_dir.

        Raises:
            ExternalCommandError: On non-zero exit or failure to start
        """
        ...

    def run_capturing(self, program: str, *args: str) -> CommandResult:
        """Run a program and return its trimmed stdout in the result.

        Raises:
            ExternalCommandError: On non-zero exit or failure to start
        """
        ...

    def run_with_input(self, input_text: str, program: str, *args: str) -> CommandResult:
        """Run a program with input_text piped to its stdin.

        Raises:
            ExternalCommandError: On non-zero exit or failure to start
        """
        ...
