# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/system/host_utils.py

"""Identity of the invoking system user."""

import getpass
from dataclasses import dataclass
from pathlib import Path

from teryx.system.exceptions import TeryxError


@dataclass(frozen=True)
class LocalIdentity:
    """System user name and home directory of the invoking user."""
    username: str
    home: Path


def current_identity() -> LocalIdentity:
    """Resolve the invoking user's name and home directory.

    Raises:
        TeryxError: If either cannot be determined from the environment
    """
    try:
        username = getpass.getuser()
        home = Path.home()
    except (KeyError, OSError, RuntimeError) as e:
        raise TeryxError(f"Could not determine current user: {e}") from e

    if not username:
        raise TeryxError("Could not determine current user: empty user name")
    return LocalIdentity(username=username, home=home)
