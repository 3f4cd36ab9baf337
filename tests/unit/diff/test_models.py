"""Unit tests for diff result models."""

from __future__ import annotations

import copy
import pickle

import pytest

from menudiff.diff.models import (
    MISSING,
    DiffStatus,
    EntityDiff,
    FieldDiff,
    MenuDiffResult,
    RefDetail,
    StatusCounts,
)


class TestMissing:
    """Tests for the MISSING sentinel."""

    def test_is_falsy_and_distinct_from_none(self) -> None:
        assert not MISSING
        assert MISSING is not None
        assert repr(MISSING) == "MISSING"

    def test_survives_copy_and_pickle(self) -> None:
        assert copy.copy(MISSING) is MISSING
        assert copy.deepcopy(MISSING) is MISSING
        assert pickle.loads(pickle.dumps(MISSING)) is MISSING


class TestFieldDiff:
    """Tests for FieldDiff serialization."""

    def test_missing_side_is_omitted(self) -> None:
        diff = FieldDiff(field="calories", left=MISSING, right=250)
        assert diff.to_dict() == {"field": "calories", "right": 250}

    def test_null_side_is_kept(self) -> None:
        diff = FieldDiff(field="description", left=None, right=MISSING)
        assert diff.to_dict() == {"field": "description", "left": None}

    def test_frozen(self) -> None:
        diff = FieldDiff(field="price", left=1, right=2)
        with pytest.raises(AttributeError):
            diff.field = "other"  # type: ignore[misc]


class TestStatusCounts:
    """Tests for StatusCounts."""

    def test_from_entities(self) -> None:
        entities = [
            EntityDiff(id="a", display_name="A", status=DiffStatus.ADDED),
            EntityDiff(id="b", display_name="B", status=DiffStatus.CHANGED, fields=(FieldDiff("x", 1, 2),)),
            EntityDiff(id="c", display_name="C", status=DiffStatus.CHANGED, fields=(FieldDiff("x", 1, 2),)),
        ]

        counts = StatusCounts.from_entities(entities)

        assert counts.to_dict() == {"total": 3, "added": 1, "removed": 0, "changed": 2, "unchanged": 0}
        assert counts.count(DiffStatus.CHANGED) == 2


class TestMenuDiffResult:
    """Tests for MenuDiffResult helpers."""

    def test_empty_result(self) -> None:
        result = MenuDiffResult(left_label="L", right_label="R")

        assert not result.has_changes
        assert result.to_dict()["products"] == []

    def test_unknown_collection(self) -> None:
        result = MenuDiffResult(left_label="L", right_label="R")
        with pytest.raises(KeyError):
            result.entities("modifiers")

    def test_ref_detail_to_dict(self) -> None:
        detail = RefDetail(added=("products.c",))
        assert detail.to_dict() == {"added": ["products.c"], "removed": [], "modified": []}
        assert not detail.is_empty
