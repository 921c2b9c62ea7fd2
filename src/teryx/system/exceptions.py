# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/system/exceptions.py

"""
Teryx-specific exception classes.

Every workflow failure is one of these. Workflows raise them and never exit
the process; the CLI layer maps any TeryxError to a non-zero exit status.
"""


class TeryxError(Exception):
    """Base exception for all teryx errors."""
    pass


class ConfigError(TeryxError):
    """Raised when the user config file cannot be loaded or validated."""
    pass


class ValidationError(TeryxError):
    """Raised for bad user input: missing options, malformed URLs or destinations."""
    pass


class ExternalCommandError(TeryxError):
    """An external program exited non-zero or could not be started."""

    def __init__(self, message: str, command: list[str] | None = None, returncode: int | None = None):
        self.command = command or []
        self.returncode = returncode
        super().__init__(message)


class FilesystemError(TeryxError):
    """Local filesystem operation failed (directory creation)."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
