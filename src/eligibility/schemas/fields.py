"""Lenient field coercion shared by the requirement and snapshot schemas.

Stored documents are edited by several screens and arrive with inconsistent
types. Every coercer here maps bad input to ``None`` (or an empty container)
instead of raising, so a malformed field reads as "no value provided".
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any, Mapping


def optional_int(value: Any) -> int | None:
    number = optional_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def optional_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def optional_label(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def string_tuple(value: Any) -> tuple[str, ...]:
    """Normalize list-like input to an ordered tuple of distinct strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (set, frozenset)):
        items = sorted(str(item) for item in value if isinstance(item, (str, int, float)))
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return ()

    result: list[str] = []
    seen: set[str] = set()
    for item in items:
        label = optional_label(item)
        if label is None:
            continue
        key = label.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(label)
    return tuple(result)


def subject_mapping(value: Any) -> dict[str, Any]:
    """Coerce a subject record into ``{name: marker}``.

    Lists of names are accepted and marked ``True``; only key presence matters
    to the coverage check.
    """
    if isinstance(value, Mapping):
        record: dict[str, Any] = {}
        for key, marker in value.items():
            name = optional_label(key)
            if name is not None:
                record[name] = marker
        return record
    return {name: True for name in string_tuple(value)}


def timestamp_text(value: Any) -> str | None:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        # Firestore timestamps serialized as {"seconds": ..., "nanoseconds": ...}
        seconds = optional_float(value.get("seconds", value.get("_seconds")))
        if seconds is None:
            return None
        try:
            stamp = datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
        return stamp.isoformat()
    return optional_label(value)


__all__ = [
    "optional_int",
    "optional_float",
    "optional_label",
    "string_tuple",
    "subject_mapping",
    "timestamp_text",
]
