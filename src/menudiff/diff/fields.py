"""Field-level comparison of matched entity pairs.

Every attribute is wrapped as a FieldValue whose kind comes from the
injected DiffConfig: names declared as reference fields holding a mapping
are reference collections, other mappings and lists are objects, and the
rest are scalars. Reference collections get a key-level RefDetail; all
other kinds use strict deep equality.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from menudiff.core.config import DiffConfig
from menudiff.diff.models import MISSING, FieldDiff, RefDetail

if TYPE_CHECKING:
    from menudiff.core.types import Entity

ID_FIELD = "id"


class FieldKind(str, Enum):
    """Kind of an attribute value."""

    MISSING = "missing"
    SCALAR = "scalar"
    OBJECT = "object"
    REFERENCE_COLLECTION = "reference_collection"


@dataclass(frozen=True)
class FieldValue:
    """An attribute value tagged with its kind.

    Attributes:
        kind: How the value is compared.
        raw: The untouched value, or MISSING.
    """

    kind: FieldKind
    raw: Any

    @classmethod
    def of(cls, entity: Entity, name: str, config: DiffConfig) -> FieldValue:
        """Read and classify one attribute of an entity."""
        if name not in entity.attributes:
            return cls(FieldKind.MISSING, MISSING)
        raw = entity.attributes[name]
        if config.is_reference(name) and isinstance(raw, Mapping):
            return cls(FieldKind.REFERENCE_COLLECTION, raw)
        if isinstance(raw, (Mapping, list, tuple)):
            return cls(FieldKind.OBJECT, raw)
        return cls(FieldKind.SCALAR, raw)

    @property
    def refs(self) -> Mapping[str, Any]:
        """Ref-to-override mapping; empty unless this is a reference collection."""
        if self.kind is FieldKind.REFERENCE_COLLECTION:
            return self.raw
        return {}


def values_equal(left: Any, right: Any) -> bool:
    """Strict deep structural equality.

    Booleans never equal numbers, ints and floats compare numerically,
    arrays are order-sensitive, mappings compare key sets and values,
    and MISSING only equals MISSING (so absent differs from None).

    Example:
        >>> values_equal({"a": [1, 2]}, {"a": [1, 2]})
        True
        >>> values_equal(True, 1)
        False
        >>> values_equal(None, MISSING)
        False
    """
    if left is MISSING or right is MISSING:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        if left == right:
            return True
        # NaN only arrives via float('nan'); a dataset must still equal itself
        return isinstance(left, float) and isinstance(right, float) and math.isnan(left) and math.isnan(right)
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))
    return type(left) is type(right) and left == right


def diff_ref_collection(left: Mapping[str, Any], right: Mapping[str, Any]) -> RefDetail:
    """Key-level diff of two reference collections.

    Args:
        left: Left ref-to-override mapping.
        right: Right ref-to-override mapping.

    Returns:
        RefDetail with right-only keys as added, left-only keys as removed,
        and shared keys whose override objects differ as modified. Keys keep
        their encounter order.
    """
    added = tuple(key for key in right if key not in left)
    removed = tuple(key for key in left if key not in right)
    modified = tuple(key for key in left if key in right and not values_equal(left[key], right[key]))
    return RefDetail(added=added, removed=removed, modified=modified)


def _diff_field(name: str, left: FieldValue, right: FieldValue) -> FieldDiff | None:
    if FieldKind.REFERENCE_COLLECTION in (left.kind, right.kind):
        detail = diff_ref_collection(left.refs, right.refs)
        if detail.is_empty and values_equal(left.raw, right.raw):
            return None
        return FieldDiff(field=name, left=left.raw, right=right.raw, ref_detail=detail)

    if values_equal(left.raw, right.raw):
        return None
    return FieldDiff(field=name, left=left.raw, right=right.raw)


def diff_fields(left: Entity, right: Entity, config: DiffConfig | None = None) -> list[FieldDiff]:
    """Compare a matched pair attribute by attribute.

    The entity ids are compared first as the pseudo-field ``id``, so a pair
    matched by display name always reports its differing ids. Attributes
    follow in first-encountered order: the left record's, then right-only
    ones. Excluded fields are skipped.

    Args:
        left: Entity from the left dataset.
        right: Entity it was matched with.
        config: Field schema. Defaults to DiffConfig().

    Returns:
        The differing fields; empty when the pair is unchanged.
    """
    config = config or DiffConfig()
    diffs: list[FieldDiff] = []

    if not config.is_excluded(ID_FIELD) and left.id != right.id:
        diffs.append(FieldDiff(field=ID_FIELD, left=left.id, right=right.id))

    names = list(left.attributes)
    names.extend(name for name in right.attributes if name not in left.attributes)

    for name in names:
        # the collection key already stands for the id attribute
        if name == ID_FIELD or config.is_excluded(name):
            continue
        diff = _diff_field(name, FieldValue.of(left, name, config), FieldValue.of(right, name, config))
        if diff is not None:
            diffs.append(diff)

    return diffs
