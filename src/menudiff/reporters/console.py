"""Console reporter for menudiff.

This module renders a MenuDiffResult in the terminal: summary badges per
collection, a status-marked entity list and a before/after field table
with expandable reference-collection details.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, TextIO

from menudiff.diff.formatting import DEFAULT_MAX_INLINE_LENGTH, format_value, is_block, summarize_ref_detail
from menudiff.diff.generator import filter_entities
from menudiff.diff.models import DiffStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from menudiff.diff.models import EntityDiff, FieldDiff, MenuDiffResult, StatusCounts


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    CYAN = "\033[36m"


# Marker and color per status
STATUS_STYLE: dict[DiffStatus, tuple[str, str]] = {
    DiffStatus.ADDED: ("+", Colors.GREEN),
    DiffStatus.REMOVED: ("-", Colors.RED),
    DiffStatus.CHANGED: ("~", Colors.YELLOW),
    DiffStatus.UNCHANGED: ("=", Colors.DIM),
}


class ConsoleReporter:
    """Reporter that outputs menu diffs to the terminal.

    Attributes:
        use_colors: Whether to use ANSI colors in output.
        max_inline_length: Longest value rendered on the table row itself.
        output: Output stream (defaults to stdout).

    Example:
        >>> reporter = ConsoleReporter()
        >>> reporter.report(result)
          prod → staging

          ┌────────────┬───────┬───────┬─────────┬─────────┬───────────┐
          │ Collection │ Total │ Added │ Removed │ Changed │ Unchanged │
          ├────────────┼───────┼───────┼─────────┼─────────┼───────────┤
          │ products   │     4 │     1 │       1 │       1 │         1 │
          ...
    """

    def __init__(
        self,
        use_colors: bool = True,
        max_inline_length: int = DEFAULT_MAX_INLINE_LENGTH,
        output: TextIO | None = None,
    ) -> None:
        """Initialize ConsoleReporter.

        Args:
            use_colors: Whether to use ANSI colors. Defaults to True.
            max_inline_length: Values longer than this render below the row.
            output: Output stream. Defaults to sys.stdout.
        """
        self.use_colors = use_colors and _supports_color(output or sys.stdout)
        self.max_inline_length = max_inline_length
        self.output = output or sys.stdout

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_colors:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _print(self, text: str = "") -> None:
        """Print text to output stream."""
        print(text, file=self.output)

    def report(
        self,
        result: MenuDiffResult,
        *,
        collections: Iterable[str] = ("products", "categories"),
        status: DiffStatus | None = None,
        search: str | None = None,
        show_fields: bool = True,
    ) -> None:
        """Report a full diff: summary, entity lists and field tables.

        Args:
            result: The diff to report.
            collections: Collections to list.
            status: Only list entities with this status.
            search: Only list entities whose id or name contains this text.
            show_fields: Print the field table under each changed entity.
        """
        self._print()
        self._print(self._color(f"  {result.left_label} → {result.right_label}", Colors.BOLD))
        self.report_summary(result)

        for collection in collections:
            entities = filter_entities(result.entities(collection), status=status, search=search)
            self.report_entities(entities, title=collection.capitalize(), show_fields=show_fields)

    def report_summary(self, result: MenuDiffResult) -> None:
        """Print the per-collection status counts as a table."""
        rows = [("products", result.summary.products), ("categories", result.summary.categories)]
        self._print_summary_table(rows)

    def _print_summary_table(self, rows: list[tuple[str, StatusCounts]]) -> None:
        headers = ("Collection", "Total", "Added", "Removed", "Changed", "Unchanged")
        widths = [len(h) + 2 for h in headers]

        horizontal = "─"
        self._print()
        self._print("  ┌" + "┬".join(horizontal * w for w in widths) + "┐")
        self._print(
            "  │" + "│".join(self._color(f" {h:<{w - 2}} ", Colors.BOLD) for h, w in zip(headers, widths)) + "│"
        )
        self._print("  ├" + "┼".join(horizontal * w for w in widths) + "┤")

        for name, counts in rows:
            cells = [f" {name:<{widths[0] - 2}} ", f" {counts.total:>{widths[1] - 2}} "]
            for status, width in zip(
                (DiffStatus.ADDED, DiffStatus.REMOVED, DiffStatus.CHANGED, DiffStatus.UNCHANGED),
                widths[2:],
            ):
                value = counts.count(status)
                cell = f" {value:>{width - 2}} "
                cells.append(self._color(cell, STATUS_STYLE[status][1]) if value else cell)
            self._print("  │" + "│".join(cells) + "│")

        self._print("  └" + "┴".join(horizontal * w for w in widths) + "┘")

    def report_entities(
        self,
        entities: list[EntityDiff],
        title: str,
        show_fields: bool = True,
    ) -> None:
        """Print one line per entity, and field tables for changed ones.

        Args:
            entities: Entity diffs to print, already filtered and ordered.
            title: Section title.
            show_fields: Print the field table under each changed entity.
        """
        self._print()
        self._print(self._color(f"  {title} ({len(entities)})", Colors.BOLD + Colors.CYAN))
        if not entities:
            self._print(self._color("    No items match the current filter", Colors.DIM))
            return

        for entity in entities:
            marker, color = STATUS_STYLE[entity.status]
            line = f"    {marker} {entity.display_name} [{entity.id}]"
            if entity.matched_by_name:
                line += f" (matched by name → {entity.matched_right_id})"
            if entity.status is DiffStatus.CHANGED:
                line += f" · {len(entity.fields)} field{'s' if len(entity.fields) != 1 else ''}"
            self._print(self._color(line, color))
            if show_fields and entity.fields:
                self.report_fields(entity.fields)

    def report_fields(self, fields: Iterable[FieldDiff]) -> None:
        """Print a before/after table of differing fields.

        Values that format as blocks are printed on their own lines below
        the field name. Reference collections list their added, removed
        and modified keys, or their raw values when only presence differs.
        """
        for f in fields:
            if f.ref_detail is not None and not f.ref_detail.is_empty:
                self._print(f"        {f.field}: {summarize_ref_detail(f.ref_detail)}")
                for key in f.ref_detail.added:
                    self._print(self._color(f"          + {key}", Colors.GREEN))
                for key in f.ref_detail.removed:
                    self._print(self._color(f"          - {key}", Colors.RED))
                for key in f.ref_detail.modified:
                    self._print(self._color(f"          ~ {key}", Colors.YELLOW))
                continue

            before = format_value(f.left)
            after = format_value(f.right)
            if is_block(before, self.max_inline_length) or is_block(after, self.max_inline_length):
                self._print(f"        {f.field}:")
                self._print_block(before, "before", Colors.RED)
                self._print_block(after, "after", Colors.GREEN)
            else:
                self._print(
                    f"        {f.field}: {self._color(before, Colors.RED)} → {self._color(after, Colors.GREEN)}"
                )

    def _print_block(self, text: str, label: str, color: str) -> None:
        self._print(self._color(f"          {label}:", Colors.DIM))
        for line in text.splitlines():
            self._print(self._color(f"            {line}", color))


def _supports_color(stream: TextIO) -> bool:
    """Check if the output stream supports ANSI colors.

    Args:
        stream: Output stream to check.

    Returns:
        True if colors are supported, False otherwise.
    """
    if not hasattr(stream, "isatty"):
        return False
    if not stream.isatty():
        return False

    if os.environ.get("NO_COLOR"):
        return False

    return os.environ.get("TERM") != "dumb"
