# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/__main__.py

from teryx.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
