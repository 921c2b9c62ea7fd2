# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/system/execution.py

"""
Process runner for the external programs teryx drives (fossil, scp, sftp).

Three modes are available:
- run_interactive: the child inherits the terminal, so password prompts and
  live progress reach the user
- run_capturing: stdout is captured and trimmed for programmatic use
- run_with_input: a fixed text is piped to stdin while output stays on the terminal

All modes block until the child exits and raise ExternalCommandError on a
non-zero exit or when the program cannot be started.
"""

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from loguru import logger
from rich.console import Console

from teryx.system.display import display_command
from teryx.system.exceptions import ExternalCommandError


@dataclass
class CommandResult:
    """Result of an external command execution."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


REDACTED_PLACEHOLDER = "********"


def redact_command(cmd: list[str]) -> list[str]:
    """Copy of cmd with the password of a `fossil user password NAME PASSWORD` call masked.

    Used for everything that can outlive the terminal: log records and
    exception messages.
    """
    redacted = list(cmd)
    for i in range(1, len(redacted) - 3):
        if redacted[i:i + 2] == ["user", "password"]:
            redacted[i + 3] = REDACTED_PLACEHOLDER
    return redacted


class CommandExecutor:
    """Runs external commands, echoing each one to the console before it starts."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def run_interactive(
        self,
        working_dir: Union[str, Path, None],
        program: str,
        *args: str
    ) -> CommandResult:
        """Run a command attached to the caller's terminal.

        Args:
            working_dir: Directory to run the child in; empty or None keeps the
                current directory. The parent's directory is never changed.
            program: Executable name
            *args: Arguments passed to the executable

        Returns:
            CommandResult with empty stdout/stderr (output went to the terminal)

        Raises:
            ExternalCommandError: If the command fails or cannot be started
        """
        cmd = [program, *args]
        cwd = str(working_dir) if working_dir else None
        display_command(self.console, shlex.join(cmd), cwd=cwd)
        logger.debug(f"Running interactive command: {redact_command(cmd)} (cwd={cwd})")

        try:
            result = subprocess.run(cmd, cwd=cwd, check=False)
        except OSError as e:
            raise _launch_error(cmd, e) from e

        if result.returncode != 0:
            raise _exit_error(cmd, result.returncode)
        return CommandResult(returncode=result.returncode)

    def run_capturing(self, program: str, *args: str) -> CommandResult:
        """Run a command and capture its stdout.

        The captured stdout has leading and trailing whitespace removed.
        """
        cmd = [program, *args]
        display_command(self.console, shlex.join(cmd))
        logger.debug(f"Running captured command: {redact_command(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise _launch_error(cmd, e) from e

        if result.returncode != 0:
            raise _exit_error(cmd, result.returncode, result.stderr)
        return CommandResult(
            returncode=result.returncode,
            stdout=result.stdout.strip(),
            stderr=result.stderr
        )

    def run_with_input(self, input_text: str, program: str, *args: str) -> CommandResult:
        """Run a command with input_text piped to its stdin.

        stdout and stderr stay attached to the terminal.
        """
        cmd = [program, *args]
        display_command(self.console, f"echo {shlex.quote(input_text)} | {shlex.join(cmd)}")
        logger.debug(f"Running command with piped input: {redact_command(cmd)}")

        try:
            result = subprocess.run(cmd, input=input_text, text=True, check=False)
        except OSError as e:
            raise _launch_error(cmd, e) from e

        if result.returncode != 0:
            raise _exit_error(cmd, result.returncode)
        return CommandResult(returncode=result.returncode)


def _launch_error(cmd: list[str], error: OSError) -> ExternalCommandError:
    cmd = redact_command(cmd)
    logger.error(f"Could not start {cmd[0]}: {error}")
    return ExternalCommandError(
        f"command failed: {shlex.join(cmd)}: {error}",
        command=cmd
    )


def _exit_error(cmd: list[str], returncode: int, stderr: str = "") -> ExternalCommandError:
    cmd = redact_command(cmd)
    detail = stderr.strip() if stderr and stderr.strip() else f"exit status {returncode}"
    logger.error(f"Command {cmd[0]} exited with {returncode}")
    return ExternalCommandError(
        f"command failed: {shlex.join(cmd)}: {detail}",
        command=cmd,
        returncode=returncode
    )
