"""Configuration management for menudiff.

This module provides the environment-backed Settings class (pydantic-settings)
and the DiffConfig value the diff engine receives. The engine never reads the
environment itself; callers build a DiffConfig and inject it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from menudiff.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

DEFAULT_EXCLUDED_FIELDS = ("_meta", "_source")
DEFAULT_REFERENCE_FIELDS = ("childRefs", "ingredientRefs", "modifierGroupRefs", "relatedProducts")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be configured via environment variables with
    the MENUDIFF_ prefix. List values are given as JSON arrays.

    Attributes:
        excluded_fields: Attribute names never compared (ingestion metadata).
        reference_fields: Attribute names holding reference collections.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        block_max_length: Longest formatted value rendered inline.

    Example:
        >>> # export MENUDIFF_EXCLUDED_FIELDS='["_meta", "updatedAt"]'
        >>> # export MENUDIFF_LOG_LEVEL=DEBUG
        >>>
        >>> settings = Settings()
        >>> settings.log_level
        'DEBUG'

    Environment Variables:
        MENUDIFF_EXCLUDED_FIELDS: JSON list (default: ["_meta", "_source"])
        MENUDIFF_REFERENCE_FIELDS: JSON list (default: childRefs, ingredientRefs,
            modifierGroupRefs, relatedProducts)
        MENUDIFF_LOG_LEVEL: Logging level (default: WARNING)
        MENUDIFF_BLOCK_MAX_LENGTH: Inline length limit (default: 60)
    """

    model_config = SettingsConfigDict(
        env_prefix="MENUDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    excluded_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_FIELDS),
        description="Attribute names skipped by the field differ",
    )
    reference_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REFERENCE_FIELDS),
        description="Attribute names diffed as reference collections",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    block_max_length: int = Field(
        default=60,
        ge=1,
        description="Formatted values longer than this render as blocks",
    )


@dataclass(frozen=True)
class DiffConfig:
    """Field schema injected into the diff engine.

    Attributes:
        excluded_fields: Attribute names that are never compared.
        reference_fields: Attribute names whose values are reference
            collections (ref string -> override object).

    Raises:
        ConfigurationError: If a field is both excluded and a reference field.
    """

    excluded_fields: frozenset[str] = frozenset(DEFAULT_EXCLUDED_FIELDS)
    reference_fields: frozenset[str] = frozenset(DEFAULT_REFERENCE_FIELDS)

    def __post_init__(self) -> None:
        overlap = self.excluded_fields & self.reference_fields
        if overlap:
            raise ConfigurationError(
                f"Fields cannot be both excluded and reference fields: {sorted(overlap)}"
            )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> DiffConfig:
        """Build a DiffConfig from environment settings."""
        settings = settings or Settings()
        return cls(
            excluded_fields=frozenset(settings.excluded_fields),
            reference_fields=frozenset(settings.reference_fields),
        )

    def with_overrides(
        self,
        *,
        exclude: Iterable[str] = (),
        reference: Iterable[str] = (),
    ) -> DiffConfig:
        """Return a copy with extra excluded and reference field names."""
        return DiffConfig(
            excluded_fields=self.excluded_fields | frozenset(exclude),
            reference_fields=self.reference_fields | frozenset(reference),
        )

    def is_excluded(self, name: str) -> bool:
        return name in self.excluded_fields

    def is_reference(self, name: str) -> bool:
        return name in self.reference_fields


def configure_logging(level: str = "WARNING") -> None:
    """Configure the menudiff logger hierarchy.

    Args:
        level: Level name such as "DEBUG" or "INFO".

    Raises:
        ConfigurationError: If the level name is unknown.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level: {level}")

    logger = logging.getLogger("menudiff")
    logger.setLevel(numeric)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
