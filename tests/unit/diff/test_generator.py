"""Unit tests for compute_diff and filter_entities."""

from __future__ import annotations

from typing import Any

import pytest

from menudiff.core.types import Dataset
from menudiff.diff import DiffStatus, MenuDiffResult, RefDetail, compute_diff, filter_entities

# =============================================================================
# Fixtures
# =============================================================================


def make_product(**overrides: Any) -> dict[str, Any]:
    product: dict[str, Any] = {
        "displayName": "Test Product",
        "isAvailable": True,
        "price": 5.99,
        "calories": 250,
        "PLU": 1001,
    }
    product.update(overrides)
    return product


def make_category(**overrides: Any) -> dict[str, Any]:
    category: dict[str, Any] = {
        "displayName": "Test Category",
        "childRefs": {},
        "selectionQuantity": {"min": 1, "max": 1},
    }
    category.update(overrides)
    return category


@pytest.fixture
def left_menu() -> Dataset:
    """Base menu with a mix of products and categories."""
    return Dataset(
        products={
            "p1": make_product(displayName="Fries", price=2.5),
            "p2": make_product(displayName="Shake"),
            "p4": make_product(displayName="Nuggets"),
            "p5": make_product(displayName="Salad"),
        },
        categories={
            "c1": make_category(
                displayName="Sides",
                childRefs={"products.p1": {}, "products.p5": {"isDefault": True}},
            ),
        },
    )


@pytest.fixture
def right_menu() -> Dataset:
    """Compared menu: a price change, a renamed id, an addition and a removal."""
    return Dataset(
        products={
            "p1": make_product(displayName="Fries", price=2.99),
            "p9": make_product(displayName="Shake"),
            "p4": make_product(displayName="Nuggets"),
            "p3": make_product(displayName="Wrap"),
        },
        categories={
            "c1": make_category(
                displayName="Sides",
                childRefs={"products.p1": {}, "products.p3": {}},
            ),
            "c2": make_category(displayName="Drinks"),
        },
    )


@pytest.fixture
def result(left_menu: Dataset, right_menu: Dataset) -> MenuDiffResult:
    return compute_diff(left_menu, right_menu, "prod", "staging")


# =============================================================================
# Scenarios
# =============================================================================


class TestScenarios:
    """Reference scenarios."""

    def test_scalar_change(self) -> None:
        result = compute_diff(
            {"products": {"p1": {"displayName": "Fries", "price": 2.5}}},
            {"products": {"p1": {"displayName": "Fries", "price": 2.99}}},
            "L",
            "R",
        )

        assert len(result.products) == 1
        entity = result.products[0]
        assert entity.status is DiffStatus.CHANGED
        assert [f.to_dict() for f in entity.fields] == [{"field": "price", "left": 2.5, "right": 2.99}]

    def test_name_fallback(self) -> None:
        result = compute_diff(
            {"products": {"p2": {"displayName": "Shake"}}},
            {"products": {"p9": {"displayName": "Shake"}}},
            "L",
            "R",
        )

        assert len(result.products) == 1
        entity = result.products[0]
        assert entity.status is DiffStatus.CHANGED
        assert entity.id == "p2"
        assert entity.matched_by_id is False
        assert entity.matched_right_id == "p9"

    def test_added(self) -> None:
        result = compute_diff({"products": {}}, {"products": {"p3": {"displayName": "Wrap"}}}, "L", "R")

        assert len(result.products) == 1
        assert result.products[0].id == "p3"
        assert result.products[0].status is DiffStatus.ADDED
        assert result.products[0].fields == ()

    def test_child_refs_detail(self) -> None:
        result = compute_diff(
            {"categories": {"c1": {"childRefs": {"products.a": {}, "products.b": {"isDefault": True}}}}},
            {"categories": {"c1": {"childRefs": {"products.a": {}, "products.c": {}}}}},
            "L",
            "R",
        )

        field = result.categories[0].fields[0]
        assert field.field == "childRefs"
        assert field.ref_detail == RefDetail(added=("products.c",), removed=("products.b",), modified=())
        assert field.to_dict()["refDetail"] == {
            "added": ["products.c"],
            "removed": ["products.b"],
            "modified": [],
        }


# =============================================================================
# Report shape
# =============================================================================


class TestComputeDiff:
    """Tests for the aggregated report."""

    def test_labels(self, result: MenuDiffResult) -> None:
        assert result.left_label == "prod"
        assert result.right_label == "staging"

    def test_product_statuses(self, result: MenuDiffResult) -> None:
        statuses = {e.id: e.status for e in result.products}
        assert statuses == {
            "p1": DiffStatus.CHANGED,
            "p2": DiffStatus.CHANGED,
            "p4": DiffStatus.UNCHANGED,
            "p5": DiffStatus.REMOVED,
            "p3": DiffStatus.ADDED,
        }

    def test_summary_counts(self, result: MenuDiffResult) -> None:
        products = result.summary.products
        assert (products.added, products.removed, products.changed, products.unchanged) == (1, 1, 2, 1)
        assert products.total == 5

        categories = result.summary.categories
        assert (categories.added, categories.changed, categories.total) == (1, 1, 2)

    def test_collections_are_independent(self) -> None:
        """A product and a category sharing an id do not interact."""
        result = compute_diff(
            {"products": {"x": {"displayName": "X"}}, "categories": {}},
            {"products": {}, "categories": {"x": {"displayName": "X"}}},
            "L",
            "R",
        )
        assert result.products[0].status is DiffStatus.REMOVED
        assert result.categories[0].status is DiffStatus.ADDED

    def test_missing_collections_are_empty(self) -> None:
        result = compute_diff({}, {"categories": None}, "L", "R")

        assert result.products == ()
        assert result.categories == ()
        assert result.summary.products.total == 0
        assert not result.has_changes

    def test_inputs_are_not_mutated(self, left_menu: Dataset, right_menu: Dataset) -> None:
        before = (left_menu.model_dump(), right_menu.model_dump())
        compute_diff(left_menu, right_menu, "prod", "staging")
        assert (left_menu.model_dump(), right_menu.model_dump()) == before

    def test_large_collections(self) -> None:
        products = {f"p-{i}": make_product(displayName=f"Product {i}", price=i) for i in range(500)}
        changed = dict(products)
        for i in range(10):
            changed[f"p-{i}"] = make_product(displayName=f"Product {i}", price=i + 100)

        result = compute_diff({"products": products}, {"products": changed}, "L", "R")

        assert result.summary.products.changed == 10
        assert result.summary.products.unchanged == 490
        assert result.summary.products.total == 500

    def test_to_dict_shape(self, result: MenuDiffResult) -> None:
        data = result.to_dict()

        assert data["leftLabel"] == "prod"
        assert data["summary"]["products"]["total"] == 5
        renamed = next(e for e in data["products"] if e["id"] == "p2")
        assert renamed["matchedById"] is False
        assert renamed["matchedRightId"] == "p9"
        removed = next(e for e in data["products"] if e["id"] == "p5")
        assert "matchedRightId" not in removed

    def test_to_markdown(self, result: MenuDiffResult) -> None:
        markdown = result.to_markdown()

        assert "## Menu Diff Report" in markdown
        assert "| products | 5 | 1 | 1 | 2 | 1 |" in markdown
        assert "`price`: 2.5 → 2.99" in markdown
        assert "matched by name to `p9`" in markdown
        assert "`childRefs`: +1 added, -1 removed" in markdown
        assert "p4" not in markdown

    def test_markdown_ref_field_presence_only(self) -> None:
        result = compute_diff(
            {"categories": {"c1": {}}},
            {"categories": {"c1": {"childRefs": {}}}},
            "L",
            "R",
        )

        assert "`childRefs`: — → {}" in result.to_markdown()


# =============================================================================
# Properties
# =============================================================================


class TestProperties:
    """Invariants that hold for any pair of datasets."""

    def test_counts_are_symmetric(self, left_menu: Dataset, right_menu: Dataset) -> None:
        forward = compute_diff(left_menu, right_menu, "L", "R")
        backward = compute_diff(right_menu, left_menu, "R", "L")

        for name in ("products", "categories"):
            assert forward.counts(name).added == backward.counts(name).removed
            assert forward.counts(name).removed == backward.counts(name).added

    def test_identity_is_unchanged(self, left_menu: Dataset) -> None:
        result = compute_diff(left_menu, left_menu, "a", "b")

        assert not result.has_changes
        for name in ("products", "categories"):
            assert all(e.status is DiffStatus.UNCHANGED for e in result.entities(name))

    def test_totality(self, result: MenuDiffResult) -> None:
        for name in ("products", "categories"):
            counts = result.counts(name)
            assert counts.total == len(result.entities(name))
            assert counts.total == counts.added + counts.removed + counts.changed + counts.unchanged

    def test_changed_iff_fields(self, result: MenuDiffResult) -> None:
        for entity in result.products + result.categories:
            assert (entity.status is DiffStatus.CHANGED) == bool(entity.fields)

    def test_ref_detail_consistency(self, left_menu: Dataset, right_menu: Dataset, result: MenuDiffResult) -> None:
        for entity in result.categories:
            for field in entity.fields:
                if field.ref_detail is None:
                    continue
                detail = field.ref_detail
                assert not set(detail.added) & set(detail.removed)
                left_keys = set(left_menu.categories[entity.id][field.field])
                right_keys = set(right_menu.categories[entity.id][field.field])
                assert set(detail.modified) <= left_keys & right_keys


# =============================================================================
# filter_entities
# =============================================================================


class TestFilterEntities:
    """Tests for status filtering, search and ordering."""

    def test_orders_by_status(self, result: MenuDiffResult) -> None:
        statuses = [e.status for e in filter_entities(result.products)]
        assert statuses == [
            DiffStatus.CHANGED,
            DiffStatus.CHANGED,
            DiffStatus.ADDED,
            DiffStatus.REMOVED,
            DiffStatus.UNCHANGED,
        ]

    def test_stable_within_status(self, result: MenuDiffResult) -> None:
        changed = filter_entities(result.products, status=DiffStatus.CHANGED)
        assert [e.id for e in changed] == ["p1", "p2"]

    def test_search_by_name_case_insensitive(self, result: MenuDiffResult) -> None:
        assert [e.id for e in filter_entities(result.products, search="fRiEs")] == ["p1"]

    def test_search_by_id(self, result: MenuDiffResult) -> None:
        assert [e.id for e in filter_entities(result.products, search="p5")] == ["p5"]

    def test_no_match(self, result: MenuDiffResult) -> None:
        assert filter_entities(result.products, status=DiffStatus.ADDED, search="fries") == []
