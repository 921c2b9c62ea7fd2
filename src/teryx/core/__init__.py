# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/core/__init__.py

"""Workflow core: naming helpers, runner protocol and the init/clone/transfer workflows."""
