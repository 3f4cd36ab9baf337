"""Menu diff engine.

This module compares two menu datasets and produces a classified
report of added, removed, changed and unchanged products and categories.

Example:
    >>> from menudiff.diff import compute_diff
    >>>
    >>> diff = compute_diff(left_menu, right_menu, "prod", "staging")
    >>> diff.summary.products.changed
    3
    >>> print(diff.to_markdown())
"""

from __future__ import annotations

from menudiff.diff.fields import FieldKind, FieldValue, diff_fields, diff_ref_collection, values_equal
from menudiff.diff.formatting import PLACEHOLDER, format_value, is_block, sort_keys, summarize_ref_detail
from menudiff.diff.generator import compute_diff, filter_entities
from menudiff.diff.matcher import match_entities
from menudiff.diff.models import (
    MISSING,
    DiffStatus,
    DiffSummary,
    EntityDiff,
    FieldDiff,
    MenuDiffResult,
    RefDetail,
    StatusCounts,
)

__all__ = [
    "MISSING",
    "PLACEHOLDER",
    "DiffStatus",
    "DiffSummary",
    "EntityDiff",
    "FieldDiff",
    "FieldKind",
    "FieldValue",
    "MenuDiffResult",
    "RefDetail",
    "StatusCounts",
    "compute_diff",
    "diff_fields",
    "diff_ref_collection",
    "filter_entities",
    "format_value",
    "is_block",
    "match_entities",
    "sort_keys",
    "summarize_ref_detail",
    "values_equal",
]
