# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/system/logging_setup.py

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from teryx.config.manager import UserConfig


def setup_logging(user_config: Optional[UserConfig] = None, verbose: bool = False) -> None:
    """Setup loguru logging for the entire application.

    Configures:
    - Console output: WARNING+ only (clean CLI output), DEBUG+ when verbose
    - File output: DEBUG+ if local_log is configured in user config
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<level>{level}</level>: {message}",
        colorize=True
    )

    if user_config is None or not user_config.local_log:
        return

    try:
        log_dir = Path(user_config.local_log).expanduser()
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "teryx.log"

        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention="30 days",
            compression="gz"
        )
        logger.debug(f"File logging enabled: {log_file}")

    except OSError as e:
        # A broken log directory must not stop the workflow
        logger.warning(f"Failed to setup file logging: {e}")
