# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/__init__.py

"""teryx - Fossil SCM workflow helper."""
