"""menudiff: Structural diff engine for hierarchical menu catalog data."""

from __future__ import annotations

from menudiff.core.config import DiffConfig, Settings
from menudiff.core.exceptions import ConfigurationError, DatasetLoadError, MenuDiffError
from menudiff.core.types import Dataset, Entity
from menudiff.dataset.io import load_dataset, parse_dataset
from menudiff.diff import (
    DiffStatus,
    EntityDiff,
    FieldDiff,
    MenuDiffResult,
    RefDetail,
    StatusCounts,
    compute_diff,
    filter_entities,
)

__version__ = "0.3.0"
__all__ = [
    # Configuration
    "DiffConfig",
    "Settings",
    # Datasets
    "Dataset",
    "Entity",
    "load_dataset",
    "parse_dataset",
    # Diff engine
    "DiffStatus",
    "EntityDiff",
    "FieldDiff",
    "MenuDiffResult",
    "RefDetail",
    "StatusCounts",
    "compute_diff",
    "filter_entities",
    # Errors
    "ConfigurationError",
    "DatasetLoadError",
    "MenuDiffError",
    # Version
    "__version__",
]
