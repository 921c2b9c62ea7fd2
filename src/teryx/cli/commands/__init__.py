# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/cli/commands/__init__.py

"""
Command handlers for teryx CLI operations.

This package contains the glue between the CLI layer and the workflows
in teryx.core.lifecycle.
"""
