"""Diff generation for menu datasets.

This module provides compute_diff, the single entry point of the engine,
and filter_entities for navigating a finished report.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from menudiff.core.config import DiffConfig
from menudiff.core.types import Dataset
from menudiff.diff.matcher import match_entities
from menudiff.diff.models import DiffStatus, DiffSummary, EntityDiff, MenuDiffResult, StatusCounts

if TYPE_CHECKING:
    from collections.abc import Iterable

    from menudiff.core.types import Collection

logger = logging.getLogger(__name__)

# Display order used when listing entities
STATUS_ORDER: dict[DiffStatus, int] = {
    DiffStatus.CHANGED: 0,
    DiffStatus.ADDED: 1,
    DiffStatus.REMOVED: 2,
    DiffStatus.UNCHANGED: 3,
}


def _as_dataset(data: Dataset | Mapping[str, Any]) -> Dataset:
    if isinstance(data, Dataset):
        return data
    return Dataset.from_dict(data)


def _diff_collection(
    left: Dataset,
    right: Dataset,
    collection: Collection,
    config: DiffConfig,
) -> tuple[EntityDiff, ...]:
    entities = tuple(match_entities(left.entities(collection), right.entities(collection), config))
    logger.debug("Diffed %d %s", len(entities), collection)
    return entities


def compute_diff(
    left: Dataset | Mapping[str, Any],
    right: Dataset | Mapping[str, Any],
    left_label: str,
    right_label: str,
    *,
    config: DiffConfig | None = None,
) -> MenuDiffResult:
    """Compare two menu datasets.

    Products and categories are matched and diffed independently with
    the same algorithm. Neither input is modified.

    Args:
        left: Left (base) dataset, or a raw menu mapping.
        right: Right (compared) dataset, or a raw menu mapping.
        left_label: Display label of the left dataset.
        right_label: Display label of the right dataset.
        config: Field schema. Defaults to DiffConfig().

    Returns:
        MenuDiffResult with per-collection entity diffs and summaries.

    Example:
        >>> result = compute_diff(
        ...     {"products": {"p1": {"displayName": "Fries", "price": 2.5}}},
        ...     {"products": {"p1": {"displayName": "Fries", "price": 2.99}}},
        ...     "prod",
        ...     "staging",
        ... )
        >>> result.products[0].status
        <DiffStatus.CHANGED: 'changed'>
    """
    config = config or DiffConfig()
    left_dataset = _as_dataset(left)
    right_dataset = _as_dataset(right)

    products = _diff_collection(left_dataset, right_dataset, "products", config)
    categories = _diff_collection(left_dataset, right_dataset, "categories", config)

    return MenuDiffResult(
        left_label=left_label,
        right_label=right_label,
        products=products,
        categories=categories,
        summary=DiffSummary(
            products=StatusCounts.from_entities(products),
            categories=StatusCounts.from_entities(categories),
        ),
    )


def filter_entities(
    entities: Iterable[EntityDiff],
    *,
    status: DiffStatus | None = None,
    search: str | None = None,
) -> list[EntityDiff]:
    """Filter and order entity diffs for display.

    Args:
        entities: Entity diffs of one collection.
        status: Keep only entities with this status.
        search: Keep only entities whose id or display name contains
            this text, case-insensitively.

    Returns:
        Matching entities ordered changed, added, removed, unchanged,
        keeping report order within each status.
    """
    result = list(entities)
    if status is not None:
        result = [e for e in result if e.status is status]
    if search:
        needle = search.lower()
        result = [e for e in result if needle in e.id.lower() or needle in e.display_name.lower()]
    return sorted(result, key=lambda e: STATUS_ORDER[e.status])
