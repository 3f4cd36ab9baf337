"""Reporters module for menudiff.

This module provides output formatters for menu diffs:
- Console: Terminal output with tables and colors
- JSON: Machine-readable format
- Markdown: see MenuDiffResult.to_markdown
"""

from __future__ import annotations

from menudiff.reporters.console import ConsoleReporter
from menudiff.reporters.json import JSONReporter

__all__ = [
    "ConsoleReporter",
    "JSONReporter",
]
