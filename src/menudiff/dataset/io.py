"""Dataset I/O operations.

This module loads menu datasets from JSON files or already-parsed data,
validating the shape the diff engine expects.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from menudiff.core.exceptions import DatasetLoadError
from menudiff.core.types import COLLECTIONS, Dataset

logger = logging.getLogger(__name__)


def load_dataset(path: str | Path) -> Dataset:
    """Load a menu Dataset from a JSON file.

    Args:
        path: Path to the menu JSON file.

    Returns:
        Loaded Dataset. Its display name is the menu's ``displayName``,
        else the file stem.

    Raises:
        DatasetLoadError: If the file is missing, is not valid JSON, or is
            not a menu object.
    """
    path = Path(path)

    if not path.exists():
        raise DatasetLoadError(f"Menu file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DatasetLoadError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise DatasetLoadError(f"Invalid JSON in {path}: {e}") from e

    dataset = parse_dataset(data, name=path.stem)
    logger.info(
        "Loaded %s: %d products, %d categories",
        path,
        len(dataset.products),
        len(dataset.categories),
    )
    return dataset


def parse_dataset(data: Any, name: str | None = None) -> Dataset:
    """Validate parsed menu JSON and build a Dataset.

    Args:
        data: Parsed menu JSON.
        name: Fallback display name when the menu has no ``displayName``.

    Returns:
        Dataset built from ``data``.

    Raises:
        DatasetLoadError: If ``data`` is not an object, holds neither a
            ``products`` nor a ``categories`` mapping, or holds a collection
            that is not a mapping of objects.
    """
    if not isinstance(data, dict):
        raise DatasetLoadError(f"Invalid menu JSON: expected object, got {type(data).__name__}")

    for collection in COLLECTIONS:
        records = data.get(collection)
        if records is None:
            continue
        if not isinstance(records, dict):
            raise DatasetLoadError(f"'{collection}' must be an object keyed by id, got {type(records).__name__}")
        for entity_id, record in records.items():
            if not isinstance(record, dict):
                raise DatasetLoadError(f"{collection}.{entity_id}: expected object, got {type(record).__name__}")

    if not any(isinstance(data.get(key), dict) for key in COLLECTIONS):
        raise DatasetLoadError("Invalid menu JSON: no 'products' or 'categories' collection")

    dataset = Dataset.from_dict(data)
    if dataset.display_name is None and name:
        dataset = dataset.model_copy(update={"display_name": name})
    return dataset
