"""Core type definitions for menudiff.

This module defines the menu Dataset: two keyed collections of entity
records (products and categories). Entities are open records; their
attributes are only given a kind when the field differ wraps them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from menudiff.core.hashing import compute_hash_short

logger = logging.getLogger(__name__)

Collection = Literal["products", "categories"]
COLLECTIONS: tuple[Collection, ...] = ("products", "categories")

EntityRecord = dict[str, Any]


class Dataset(BaseModel):
    """One version of a menu.

    Attributes:
        products: Product records keyed by product id.
        categories: Category records keyed by category id.
        display_name: Optional human-readable menu name.

    Example:
        >>> menu = Dataset(
        ...     products={"p1": {"displayName": "Fries", "price": 2.5}},
        ...     categories={"c1": {"displayName": "Sides", "childRefs": {"products.p1": {}}}},
        ... )
        >>> menu.size
        2
    """

    model_config = {"frozen": True}

    products: dict[str, EntityRecord] = Field(
        default_factory=dict,
        description="Product records keyed by id",
    )
    categories: dict[str, EntityRecord] = Field(
        default_factory=dict,
        description="Category records keyed by id",
    )
    display_name: str | None = Field(default=None, description="Menu display name")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Dataset:
        """Build a Dataset from a raw menu mapping.

        A missing or non-mapping collection is treated as empty, and
        non-object entity records are dropped, so any mapping yields
        a Dataset.

        Args:
            data: Raw menu object, e.g. a parsed menu.json.

        Returns:
            Dataset holding the products and categories of ``data``.
        """
        collections: dict[str, dict[str, EntityRecord]] = {}
        for name in COLLECTIONS:
            raw = data.get(name)
            if raw is None:
                collections[name] = {}
                continue
            if not isinstance(raw, Mapping):
                logger.warning("Ignoring '%s': expected mapping, got %s", name, type(raw).__name__)
                collections[name] = {}
                continue
            records: dict[str, EntityRecord] = {}
            for entity_id, record in raw.items():
                if isinstance(record, Mapping):
                    records[str(entity_id)] = dict(record)
                else:
                    logger.warning("Ignoring %s.%s: expected object, got %s", name, entity_id, type(record).__name__)
            collections[name] = records

        display_name = data.get("displayName")
        return cls(
            products=collections["products"],
            categories=collections["categories"],
            display_name=display_name if isinstance(display_name, str) and display_name else None,
        )

    def collection(self, name: Collection) -> dict[str, EntityRecord]:
        """Return the records of one collection by name."""
        if name == "products":
            return self.products
        if name == "categories":
            return self.categories
        raise KeyError(name)

    @property
    def size(self) -> int:
        """Total number of entities across both collections."""
        return len(self.products) + len(self.categories)

    @property
    def fingerprint(self) -> str:
        """Short content hash, independent of key order."""
        return compute_hash_short({"products": self.products, "categories": self.categories})

    def entities(self, name: Collection) -> list[Entity]:
        """Wrap the records of one collection as Entity objects, in key order.

        Records were validated with the Dataset, so entities are built
        without re-validating or copying their attributes.
        """
        return [
            Entity.model_construct(id=entity_id, attributes=record)
            for entity_id, record in self.collection(name).items()
        ]


class Entity(BaseModel):
    """A product or category record together with its collection key.

    Attributes:
        id: Key of the record in its collection.
        attributes: The record's named attributes.
    """

    model_config = {"frozen": True}

    id: str = Field(..., description="Collection key of the entity")
    attributes: EntityRecord = Field(default_factory=dict, description="Named attributes")

    @property
    def display_name(self) -> str | None:
        """The displayName attribute when it is a non-empty string."""
        name = self.attributes.get("displayName")
        return name if isinstance(name, str) and name else None

    @property
    def label(self) -> str:
        """Display name, falling back to the id."""
        return self.display_name or self.id
