"""JSON reporter for menudiff.

This module provides JSON output for menu diffs, suitable for CI
pipelines and for the presentation layer that renders the report.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from menudiff.diff.models import MenuDiffResult


class JSONReporter:
    """Reporter that outputs menu diffs as JSON.

    Attributes:
        indent: JSON indentation level (None for compact).

    Example:
        >>> reporter = JSONReporter()
        >>> print(reporter.report(result))
        {
          "timestamp": "2026-01-15T10:30:00+00:00",
          "leftLabel": "prod",
          "rightLabel": "staging",
          ...
        }
    """

    def __init__(self, indent: int | None = 2) -> None:
        """Initialize JSONReporter.

        Args:
            indent: JSON indentation level. Defaults to 2. Use None for compact output.
        """
        self.indent = indent

    def _get_timestamp(self) -> str:
        """Get current timestamp in ISO 8601 format."""
        return datetime.now(timezone.utc).isoformat(timespec="seconds")

    def to_dict(
        self,
        result: MenuDiffResult,
        metadata: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Convert a diff to a timestamped dictionary.

        Args:
            result: The diff to convert.
            metadata: Optional metadata, e.g. dataset fingerprints.

        Returns:
            Dictionary with a timestamp, the diff and the metadata.
        """
        return {
            "timestamp": self._get_timestamp(),
            **result.to_dict(),
            "hasChanges": result.has_changes,
            "metadata": metadata or {},
        }

    def report(
        self,
        result: MenuDiffResult,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Generate a JSON report.

        Args:
            result: The diff to report.
            metadata: Optional metadata to include in the report.

        Returns:
            JSON string representation of the diff.
        """
        return json.dumps(self.to_dict(result, metadata), indent=self.indent, ensure_ascii=False, default=str)

    def report_to_file(
        self,
        result: MenuDiffResult,
        path: Path | str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Write a JSON report to a file.

        Args:
            result: The diff to report.
            path: Path to the output file.
            metadata: Optional metadata to include in the report.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.report(result, metadata), encoding="utf-8")
