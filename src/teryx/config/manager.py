# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/config/manager.py

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Final

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from teryx.system.exceptions import ConfigError


# ---- Constants ----

USER_CFG: Final = "teryx.yml"
DEFAULT_REMOTE_USER: Final = "www-data"
DEFAULT_FOSSILS_ROOT: Final = "fossils"


def _get_user_config_search_paths() -> tuple[Path, ...]:
    """Get config file search paths (ordered by priority: lowest to highest).

    Evaluated on every call so environment overrides set by tests take effect.
    """
    return (
        Path("/etc/teryx") / USER_CFG,  # System defaults
        Path.home() / ".config" / "teryx" / USER_CFG,  # User config
        Path(os.getenv("XDG_CONFIG_HOME", "")) / "teryx" / USER_CFG,  # XDG override
        Path(os.getenv("TERYX_CONFIG_HOME", "")) / USER_CFG,  # Explicit override (highest priority)
    )


def _load_merged_config_data(candidates: tuple[Path, ...]) -> dict:
    """Load and merge config data from candidate paths.

    Later files override keys from earlier ones. Missing files are skipped;
    finding none at all yields an empty dict.

    Raises:
        ConfigError: If a file exists but is not a YAML mapping
    """
    merged_data = {}
    found_configs = []

    for candidate in candidates:
        # Unset env vars collapse to a relative path; skip those
        if not candidate.is_absolute() or not candidate.exists():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config {candidate}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {candidate} must contain a mapping")

        merged_data.update(data)
        found_configs.append(str(candidate))
        logger.debug(f"Loaded config from {candidate}")

    if found_configs:
        logger.debug(f"Merged config from: {', '.join(found_configs)}")
    else:
        logger.debug("No teryx.yml found, using defaults")
    return merged_data


# ---- User Config Model ----

class UserConfig(BaseModel):
    """Optional per-user settings; every field has a working default."""
    fossil_bin: str = "fossil"
    scp_bin: str = "scp"
    sftp_bin: str = "sftp"
    whoami_bin: str = "whoami"

    # Clone layout root, relative to the home directory unless absolute
    fossils_root: Path = Path(DEFAULT_FOSSILS_ROOT)

    # Owner/group suggested in the post-transfer permission fix
    remote_user: str = Field(default=DEFAULT_REMOTE_USER, min_length=1)

    # Optional logging configuration
    local_log: Optional[Path] = None

    @field_validator("fossil_bin", "scp_bin", "sftp_bin", "whoami_bin")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("executable name must not be blank")
        return value.strip()

    def fossils_dir(self, home: Path) -> Path:
        """Absolute root of the clone layout for the given home directory."""
        if self.fossils_root.is_absolute():
            return self.fossils_root
        return home / self.fossils_root

    @classmethod
    def load(cls, config_path: Path) -> "UserConfig":
        """Load user config from a single file."""
        return _validate(_load_merged_config_data((config_path,)))


def _validate(data: dict) -> UserConfig:
    try:
        return UserConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid user config: {e}") from e


def load_merged_user_config() -> UserConfig:
    """Load and merge user config from all locations (system defaults + user overrides)."""
    candidates = _get_user_config_search_paths()
    return _validate(_load_merged_config_data(candidates))


# done.
