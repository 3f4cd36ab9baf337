"""Display helpers for diff values.

Formatting only decides how values are shown; equality decisions are
made by the field differ on raw values and never on formatted text.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from menudiff.diff.models import MISSING

if TYPE_CHECKING:
    from menudiff.diff.models import RefDetail

PLACEHOLDER = "—"
DEFAULT_MAX_INLINE_LENGTH = 60


def sort_keys(value: Any) -> Any:
    """Deep-sort mapping keys so equal structures serialize identically.

    Example:
        >>> sort_keys({"b": {"z": 1, "a": 2}, "a": 3})
        {'a': 3, 'b': {'a': 2, 'z': 1}}
    """
    if isinstance(value, Mapping):
        return {k: sort_keys(value[k]) for k in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [sort_keys(v) for v in value]
    return value


def format_value(value: Any) -> str:
    """Render a raw field value for display.

    Strings render as-is, booleans as ``true``/``false``, numbers in their
    literal form, absent or null values as a placeholder, and mappings or
    lists as indented JSON with sorted keys.

    Example:
        >>> format_value(True)
        'true'
        >>> format_value(None)
        '—'
        >>> print(format_value({"z": 1, "a": 2}))
        {
          "a": 2,
          "z": 1
        }
    """
    if value is MISSING or value is None:
        return PLACEHOLDER
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(sort_keys(value), indent=2, ensure_ascii=False, default=str)
    return str(value)


def is_block(text: str, max_inline_length: int = DEFAULT_MAX_INLINE_LENGTH) -> bool:
    """Whether formatted text should render as an expandable block.

    Args:
        text: Output of format_value.
        max_inline_length: Longest text rendered inline.

    Returns:
        True if the text spans several lines or exceeds the inline limit.
    """
    return "\n" in text or len(text) > max_inline_length


def summarize_ref_detail(detail: RefDetail) -> str:
    """One-line summary such as ``+1 added, -2 removed``."""
    parts = []
    if detail.added:
        parts.append(f"+{len(detail.added)} added")
    if detail.removed:
        parts.append(f"-{len(detail.removed)} removed")
    if detail.modified:
        parts.append(f"~{len(detail.modified)} modified")
    return ", ".join(parts) if parts else "no ref changes"
