"""
Module 01 - Schemas
File: canonical.py

Purpose: Deterministic serialization of structured objects into leaf bytes.

CRITICAL: Two processes that serialize the same object must produce the
same bytes, otherwise their leaf hashes and roots diverge.
"""

import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with Z suffix.

    Naive datetimes are treated as UTC.

    Args:
        dt: A datetime object.

    Returns:
        ISO-8601 formatted string (e.g., "2026-01-27T21:35:00Z").
    """
    if dt.tzinfo is None:
        utc_dt = dt.replace(tzinfo=timezone.utc)
    else:
        utc_dt = dt.astimezone(timezone.utc)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized
            (NaN/Infinity floats, unsupported types).
    """
    if isinstance(value, Enum):
        return canonicalize_value(value.value, path)

    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationException(
                message=f"Non-finite float value encountered: {value}",
                details={"path": path, "value": str(value)},
            )
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        result = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise CanonicalizationException(
                    message=f"Dictionary keys must be strings, got {type(k).__name__}",
                    details={"path": path, "key": repr(k)},
                )
            if v is None:
                continue
            result[k] = canonicalize_value(v, f"{path}.{k}" if path else k)
        return result

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]")
            for i, item in enumerate(value)
        ]

    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Sorted keys, no whitespace, None fields dropped, datetimes as
    ISO-8601 with Z, enums by value, bytes as hex.

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    canonicalized = canonicalize_value(obj)
    return json.dumps(
        canonicalized,
        sort_keys=True,
        separators=CANONICAL_JSON_SEPARATORS,
        ensure_ascii=False,
        allow_nan=False,
    )


def canonical_leaf(obj: Any) -> bytes:
    """Return the UTF-8 canonical JSON bytes of obj, for use as a tree leaf."""
    return dumps_canonical(obj).encode("utf-8")


__all__ = [
    "CANONICAL_JSON_SEPARATORS",
    "canonical_leaf",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
]
