"""Custom exceptions for menudiff.

This module defines the exception hierarchy used outside the diff engine.
The engine itself is a total function over well-shaped datasets and raises
nothing of its own; ingestion and configuration errors inherit from
MenuDiffError for easy catching.
"""

from __future__ import annotations


class MenuDiffError(Exception):
    """Base exception for all menudiff errors.

    Example:
        >>> try:
        ...     # menudiff operations
        ...     pass
        ... except MenuDiffError as e:
        ...     print(f"menudiff error: {e}")
    """


class DatasetLoadError(MenuDiffError):
    """Raised when a menu dataset cannot be loaded.

    This exception is raised when a file is missing, is not valid JSON,
    or does not hold a ``products`` or ``categories`` mapping.

    Example:
        >>> raise DatasetLoadError("Invalid menu JSON: expected object, got list")
    """


class ConfigurationError(MenuDiffError):
    """Raised when configuration is invalid.

    Example:
        >>> raise ConfigurationError("Field 'childRefs' is both excluded and a reference field")
    """
