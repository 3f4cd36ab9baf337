"""CLI module for menudiff.

This module provides the command-line interface using Typer.
"""

from __future__ import annotations

from menudiff.cli.main import app

__all__ = ["app"]
