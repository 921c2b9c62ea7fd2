# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/core/models.py

"""Options and results for the init, clone and transfer workflows."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional

from teryx.config.manager import DEFAULT_REMOTE_USER


@dataclass(frozen=True)
class InitOptions:
    name: str
    password: Optional[str] = None
    user: Optional[str] = None  # defaults to the invoking system user


@dataclass(frozen=True)
class CloneOptions:
    url: str


@dataclass(frozen=True)
class TransferOptions:
    file: str
    destination: Optional[str] = None
    remote_user: str = DEFAULT_REMOTE_USER


@dataclass
class InitResult:
    repo_file: Path
    checkout_dir: Path
    user: str

    def summary(self) -> dict[str, Any]:
        return {
            'repo_file': str(self.repo_file),
            'checkout_dir': str(self.checkout_dir),
            'user': self.user
        }


@dataclass
class CloneResult:
    auth_url: str
    target_dir: Path
    repo_file: Path
    checkout_dir: Path

    def summary(self) -> dict[str, Any]:
        return {
            'auth_url': self.auth_url,
            'target_dir': str(self.target_dir),
            'repo_file': str(self.repo_file),
            'checkout_dir': str(self.checkout_dir)
        }


@dataclass
class TransferResult:
    file: str
    destination: str
    mechanism: Literal["scp", "sftp"]
    remediation_command: str

    @property
    def used_fallback(self) -> bool:
        return self.mechanism == "sftp"

    def summary(self) -> dict[str, Any]:
        return {
            'file': self.file,
            'destination': self.destination,
            'mechanism': self.mechanism,
            'remediation_command': self.remediation_command
        }
