# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/conftest.py

"""
Shared test fixtures for the teryx test suite.

RecordingRunner stands in for CommandExecutor: it records every external
call instead of running it and can be told which calls should fail.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pytest
from loguru import logger
from rich.console import Console

from teryx.system.exceptions import ExternalCommandError
from teryx.system.execution import CommandResult


@dataclass
class RecordedCall:
    mode: str  # "interactive", "capturing" or "input"
    command: list[str]
    working_dir: Optional[Path] = None
    input_text: Optional[str] = None

    @property
    def program(self) -> str:
        return self.command[0]


class RecordingRunner:
    """ProcessRunner test double.

    Args:
        fail_on: Calls to fail. Each entry matches either the program name
            ("scp") or the program plus first argument ("fossil open").
        captured_output: stdout returned by run_capturing
    """

    def __init__(self, fail_on: tuple[str, ...] = (), captured_output: str = "alice"):
        self.fail_on = set(fail_on)
        self.captured_output = captured_output
        self.calls: list[RecordedCall] = []

    def _record(self, call: RecordedCall) -> None:
        self.calls.append(call)
        keys = {call.command[0], " ".join(call.command[:2])}
        if keys & self.fail_on:
            raise ExternalCommandError(
                f"command failed: {' '.join(call.command)}: exit status 1",
                command=call.command,
                returncode=1
            )

    def run_interactive(self, working_dir, program, *args):
        wd = Path(working_dir) if working_dir else None
        self._record(RecordedCall("interactive", [program, *args], working_dir=wd))
        return CommandResult(returncode=0)

    def run_capturing(self, program, *args):
        self._record(RecordedCall("capturing", [program, *args]))
        return CommandResult(returncode=0, stdout=self.captured_output)

    def run_with_input(self, input_text, program, *args):
        self._record(RecordedCall("input", [program, *args], input_text=input_text))
        return CommandResult(returncode=0)

    @property
    def commands(self) -> list[list[str]]:
        return [call.command for call in self.calls]

    def programs(self) -> list[str]:
        return [call.program for call in self.calls]


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def make_runner():
    """Factory for runners with failing calls: make_runner(fail_on=("scp",))."""
    return RecordingRunner


@pytest.fixture
def console():
    """Console writing to an in-memory buffer, wide enough to avoid wrapping."""
    return Console(file=io.StringIO(), width=300, color_system=None)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep tests away from the real home directory and user config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("LOGNAME", "alice")
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("TERYX_CONFIG_HOME", raising=False)
    monkeypatch.setattr(
        "teryx.config.manager._get_user_config_search_paths",
        lambda: (
            home / ".config" / "teryx" / "teryx.yml",
            tmp_path / "override" / "teryx.yml",
        )
    )
    yield home
    logger.remove()
