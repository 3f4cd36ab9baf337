"""Data models for menu diff reports.

This module provides the immutable result types produced by the diff
engine: per-field differences, reference-collection details, per-entity
diffs and the aggregated MenuDiffResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class _Missing:
    """Marker for an attribute absent from an entity record.

    Distinct from None, which is an explicit null value.
    """

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class DiffStatus(str, Enum):
    """Classification of one entity across the two datasets.

    Attributes:
        ADDED: Only present in the right dataset.
        REMOVED: Only present in the left dataset.
        CHANGED: Matched, with at least one differing field.
        UNCHANGED: Matched, with no differing field.
    """

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class RefDetail:
    """Key-level diff of a reference-collection attribute.

    Attributes:
        added: Ref keys present only on the right.
        removed: Ref keys present only on the left.
        modified: Ref keys on both sides whose override objects differ.
    """

    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "added": list(self.added),
            "removed": list(self.removed),
            "modified": list(self.modified),
        }


@dataclass(frozen=True)
class FieldDiff:
    """A single differing field of a matched entity pair.

    ``left`` and ``right`` hold the raw values; an absent attribute is
    represented by ``MISSING``.
    """

    field: str
    left: Any
    right: Any
    ref_detail: RefDetail | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"field": self.field}
        if self.left is not MISSING:
            data["left"] = self.left
        if self.right is not MISSING:
            data["right"] = self.right
        if self.ref_detail is not None:
            data["refDetail"] = self.ref_detail.to_dict()
        return data


@dataclass(frozen=True)
class EntityDiff:
    """Diff of one product or category.

    Attributes:
        id: Left id for matched and removed entities, right id for added ones.
        display_name: The entity's displayName, or its id when it has none.
        status: Classification of the entity.
        matched_by_id: True when the pair was matched by identical ids.
        matched_right_id: Right-side id of a pair matched by display name.
        fields: Differing fields; empty unless status is CHANGED.
    """

    id: str
    display_name: str
    status: DiffStatus
    matched_by_id: bool = False
    matched_right_id: str | None = None
    fields: tuple[FieldDiff, ...] = ()

    @property
    def matched_by_name(self) -> bool:
        """True for a low-confidence pair made by display name."""
        return not self.matched_by_id and self.matched_right_id is not None

    @property
    def fields_changed(self) -> list[str]:
        """Names of the differing fields."""
        return [f.field for f in self.fields]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "displayName": self.display_name,
            "status": self.status.value,
            "matchedById": self.matched_by_id,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.matched_right_id is not None:
            data["matchedRightId"] = self.matched_right_id
        return data


@dataclass(frozen=True)
class StatusCounts:
    """Tally of entity statuses in one collection."""

    added: int = 0
    removed: int = 0
    changed: int = 0
    unchanged: int = 0

    @property
    def total(self) -> int:
        return self.added + self.removed + self.changed + self.unchanged

    @classmethod
    def from_entities(cls, entities: tuple[EntityDiff, ...] | list[EntityDiff]) -> StatusCounts:
        counts = dict.fromkeys(DiffStatus, 0)
        for entity in entities:
            counts[entity.status] += 1
        return cls(
            added=counts[DiffStatus.ADDED],
            removed=counts[DiffStatus.REMOVED],
            changed=counts[DiffStatus.CHANGED],
            unchanged=counts[DiffStatus.UNCHANGED],
        )

    def count(self, status: DiffStatus) -> int:
        return int(getattr(self, status.value))

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "added": self.added,
            "removed": self.removed,
            "changed": self.changed,
            "unchanged": self.unchanged,
        }


@dataclass(frozen=True)
class DiffSummary:
    """Per-collection status counts."""

    products: StatusCounts = field(default_factory=StatusCounts)
    categories: StatusCounts = field(default_factory=StatusCounts)

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {
            "products": self.products.to_dict(),
            "categories": self.categories.to_dict(),
        }


@dataclass(frozen=True)
class MenuDiffResult:
    """Diff between two menu datasets.

    Attributes:
        left_label: Display label of the left dataset.
        right_label: Display label of the right dataset.
        products: Entity diffs of the products collection.
        categories: Entity diffs of the categories collection.
        summary: Status counts per collection.
    """

    left_label: str
    right_label: str
    products: tuple[EntityDiff, ...] = ()
    categories: tuple[EntityDiff, ...] = ()
    summary: DiffSummary = field(default_factory=DiffSummary)

    @property
    def has_changes(self) -> bool:
        """True if any entity is added, removed or changed."""
        return any(
            counts.added or counts.removed or counts.changed
            for counts in (self.summary.products, self.summary.categories)
        )

    def entities(self, collection: str) -> tuple[EntityDiff, ...]:
        """Entity diffs of one collection by name."""
        if collection == "products":
            return self.products
        if collection == "categories":
            return self.categories
        raise KeyError(collection)

    def counts(self, collection: str) -> StatusCounts:
        """Status counts of one collection by name."""
        if collection == "products":
            return self.summary.products
        if collection == "categories":
            return self.summary.categories
        raise KeyError(collection)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "leftLabel": self.left_label,
            "rightLabel": self.right_label,
            "products": [e.to_dict() for e in self.products],
            "categories": [e.to_dict() for e in self.categories],
            "summary": self.summary.to_dict(),
        }

    def to_markdown(self) -> str:
        """Generate a markdown report of the changed, added and removed entities."""
        from menudiff.diff.formatting import format_value, summarize_ref_detail

        lines = [
            "## Menu Diff Report",
            "",
            f"**Left:** {self.left_label}",
            f"**Right:** {self.right_label}",
            "",
            "### Summary",
            "",
            "| Collection | Total | Added | Removed | Changed | Unchanged |",
            "|------------|-------|-------|---------|---------|-----------|",
        ]
        for name in ("products", "categories"):
            c = self.counts(name)
            lines.append(f"| {name} | {c.total} | {c.added} | {c.removed} | {c.changed} | {c.unchanged} |")

        for name in ("products", "categories"):
            changed = [e for e in self.entities(name) if e.status is not DiffStatus.UNCHANGED]
            if not changed:
                continue
            lines.extend(["", f"### {name.capitalize()}", ""])
            for entity in changed:
                suffix = ""
                if entity.matched_by_name:
                    suffix = f" (matched by name to `{entity.matched_right_id}`)"
                lines.append(f"- **{entity.status.value}** `{entity.id}` {entity.display_name}{suffix}")
                for f in entity.fields:
                    if f.ref_detail is not None and not f.ref_detail.is_empty:
                        detail = summarize_ref_detail(f.ref_detail)
                        lines.append(f"  - `{f.field}`: {detail}")
                    else:
                        before = format_value(f.left).replace("\n", " ")
                        after = format_value(f.right).replace("\n", " ")
                        lines.append(f"  - `{f.field}`: {before} → {after}")

        return "\n".join(lines)
