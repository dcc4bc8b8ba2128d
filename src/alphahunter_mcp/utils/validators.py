"""Boundary coercion for JSON payloads.

The scoring core assumes well-formed snapshots. These helpers turn loosely
typed payload values (strings, None, numpy scalars) into the exact types the
core expects, raising ValueError only for values that cannot be a number at
all.
"""

import math
from enum import Enum
from typing import Any, TypeVar

E = TypeVar("E", bound=Enum)

_TRUE_STRINGS = {"true", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "no", "n", "0", ""}


def coerce_float(value: Any, default: float = 0.0, field: str = "value") -> float:
    """
    Coerce a payload value to a finite float.

    None, NaN and infinities resolve to ``default``.

    Raises:
        ValueError: if the value is not numeric (e.g. "abc")
    """
    if value is None:
        return default
    try:
        num = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid number for '{field}': {value!r}") from e
    if not math.isfinite(num):
        return default
    return num


def coerce_optional_float(value: Any, field: str = "value") -> float | None:
    """Like coerce_float, but missing or non-finite values stay None."""
    if value is None:
        return None
    try:
        num = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid number for '{field}': {value!r}") from e
    return num if math.isfinite(num) else None


def coerce_bool(value: Any, field: str = "value") -> bool:
    """Coerce booleans, 0/1 and yes/no strings."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"Invalid boolean for '{field}': {value!r}")


def parse_choice(enum_cls: type[E], value: Any, default: E) -> E:
    """
    Map a categorical string onto ``enum_cls``.

    Matches member values case-insensitively, then member names. Missing or
    unrecognized strings resolve to ``default`` (usually the UNKNOWN member)
    so the scorer can name them in its rationale.
    """
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    text = str(value).strip()
    lowered = text.lower()
    for member in enum_cls:
        if str(member.value).lower() == lowered:
            return member
    normalized = lowered.replace("-", "_").replace(" ", "_")
    for member in enum_cls:
        if member.name.lower() == normalized:
            return member
    return default
