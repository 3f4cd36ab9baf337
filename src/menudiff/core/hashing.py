"""Fingerprinting utilities for menu datasets.

A fingerprint is the truncated SHA256 of the canonical JSON of a value:
sorted keys, no extra whitespace. Two datasets with the same content always
share a fingerprint, regardless of key insertion order.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def canonical_json(data: Any) -> str:
    """Stable JSON serialization used for fingerprints.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_hash(data: Any) -> str:
    """Full 64-character SHA256 hex digest of JSON-serializable data."""
    return hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()


def compute_hash_short(data: Any, length: int = 16) -> str:
    """Truncated SHA256 digest for display.

    Example:
        >>> len(compute_hash_short({"key": "value"}))
        16
    """
    return compute_hash(data)[:length]
