"""Core module for menudiff.

This module contains the dataset types, exceptions, hashing and
configuration shared by the engine, the loaders and the CLI.
"""

from __future__ import annotations

from menudiff.core.config import DiffConfig, Settings, configure_logging
from menudiff.core.exceptions import (
    ConfigurationError,
    DatasetLoadError,
    MenuDiffError,
)
from menudiff.core.types import COLLECTIONS, Collection, Dataset, Entity

__all__ = [
    "COLLECTIONS",
    "Collection",
    "ConfigurationError",
    "Dataset",
    "DatasetLoadError",
    "DiffConfig",
    "Entity",
    "MenuDiffError",
    "Settings",
    "configure_logging",
]
