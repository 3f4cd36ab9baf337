"""Dataset management module for menudiff.

This module provides tools for loading menu datasets.
"""

from __future__ import annotations

from menudiff.dataset.io import load_dataset, parse_dataset

__all__ = [
    "load_dataset",
    "parse_dataset",
]
