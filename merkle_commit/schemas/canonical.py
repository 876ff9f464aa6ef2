"""
Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic JSON serialization of structured items, so that
the same logical record always hashes to the same Merkle leaf.

Rules:
    - Object keys sorted, no whitespace
    - None-valued mapping entries dropped
    - Datetimes rendered as ISO-8601 UTC with a Z suffix
    - Enums rendered as their values
    - bytes rendered as 0x-prefixed lowercase hex
    - Sets rendered as lists sorted by their canonical form
    - NaN / Infinity rejected
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


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime (naive values are taken as UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with Z suffix for UTC.

    Microseconds are only included when non-zero.
    """
    utc_dt = ensure_utc(dt)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _join(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively convert a value into its canonical JSON-compatible form.

    Args:
        value: Any supported Python value.
        path: Dotted location of ``value`` inside the root object,
            used in error details.

    Returns:
        A structure made only of dict, list, str, int, float, bool and None.

    Raises:
        CanonicalizationException: If the value holds a non-finite float,
            a non-string mapping key, or an unsupported type.
    """
    # bool before int: bool is an int subclass
    if value is None or isinstance(value, (bool, str)):
        return value

    if isinstance(value, int):
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

    if isinstance(value, Enum):
        return canonicalize_value(value.value, path)

    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        result: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise CanonicalizationException(
                    message=f"Mapping keys must be strings, got {type(key).__name__}",
                    details={"path": path, "key": repr(key)},
                )
            if item is not None:
                result[key] = canonicalize_value(item, _join(path, key))
        return result

    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]

    if isinstance(value, (set, frozenset)):
        items = [canonicalize_value(item, f"{path}{{}}") for item in value]
        return sorted(items, key=_dumps)

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def _dumps(canonicalized: Any) -> str:
    return json.dumps(
        canonicalized,
        sort_keys=True,
        separators=CANONICAL_JSON_SEPARATORS,
        ensure_ascii=False,
        allow_nan=False,
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to its canonical JSON string.

    Example:
        >>> from datetime import datetime
        >>> dumps_canonical({"b": 2, "a": 1, "at": datetime(2026, 1, 27, 21, 35)})
        '{"a":1,"at":"2026-01-27T21:35:00Z","b":2}'

    Raises:
        CanonicalizationException: If serialization fails.
    """
    try:
        return _dumps(canonicalize_value(obj))
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def canonical_equals(obj1: Any, obj2: Any) -> bool:
    """True if both objects have identical canonical JSON forms."""
    try:
        return dumps_canonical(obj1) == dumps_canonical(obj2)
    except CanonicalizationException:
        return False
