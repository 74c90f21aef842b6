"""
Canonical JSON Serialization

Provides deterministic JSON serialization for hashing and comparison.
Based on RFC 8785 (JSON Canonicalization Scheme) principles:
- Sorted keys (lexicographic)
- No whitespace
- UTF-8 encoding

The same provider query always produces the same canonical JSON, so a
content hash of a provider is a cheap fingerprint for "did the holidays
change" checks between releases or rule pack edits.
"""
from __future__ import annotations

import hashlib
import json
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any


def _default_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for non-standard types.

    Handles:
    - objects with to_dict(): Holiday, JurisdictionProvider
    - datetime/date: ISO 8601 format (offset kept for aware datetimes)
    - Enum: value
    - mappingproxy: dict
    - set/frozenset: sorted list
    """
    if hasattr(obj, "to_dict") and callable(obj.to_dict):
        return obj.to_dict()
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, MappingProxyType):
        return dict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        default=_default_serializer,
        ensure_ascii=False,
    )


def canonical_json_bytes(obj: Any) -> bytes:
    return canonical_json(obj).encode("utf-8")


def content_hash(obj: Any) -> str:
    """
    Compute SHA-256 hash of canonical JSON representation.

    Args:
        obj: Any JSON-serializable object, or one with to_dict()

    Returns:
        Hex-encoded SHA-256 hash string (64 characters)
    """
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()


def content_hash_short(obj: Any, length: int = 12) -> str:
    """Truncated content hash for display."""
    return content_hash(obj)[:length]
