"""Shared financial arithmetic.

Every helper here is total: division by zero, missing history and
non-positive bases resolve to a documented neutral value instead of raising
or leaking NaN/inf into a score.
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

# 12 quarters = 3 years of lookback for CAGR
CAGR_MAX_LOOKBACK = 12
CAGR_MIN_POINTS = 5
QUARTERS_PER_YEAR = 4


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 for a zero or non-finite result."""
    if denominator == 0:
        return 0.0
    result = numerator / denominator
    if not math.isfinite(result):
        return 0.0
    return result


def compute_cagr(values: Sequence[float]) -> float:
    """
    Compound annual growth rate (percent) from a newest-first quarterly series.

    Uses the oldest point within a 12-quarter (~3 year) lookback. Needs at
    least 5 points and a positive oldest value, otherwise returns 0.0.

    Args:
        values: Quarterly values, newest first

    Returns:
        CAGR in percent (e.g. 33.8 for 33.8%)
    """
    if len(values) < CAGR_MIN_POINTS:
        return 0.0

    latest = values[0]
    oldest_index = min(len(values) - 1, CAGR_MAX_LOOKBACK)
    oldest = values[oldest_index]
    years = oldest_index / QUARTERS_PER_YEAR

    if oldest <= 0 or years <= 0 or latest < 0:
        return 0.0

    cagr = ((latest / oldest) ** (1 / years) - 1) * 100
    return cagr if math.isfinite(cagr) else 0.0


def yoy_growth(values: Sequence[float], offset: int) -> float:
    """Year-over-year growth (percent) of the quarter at ``offset`` vs four quarters earlier."""
    current = values[offset]
    year_ago = values[offset + QUARTERS_PER_YEAR]
    if year_ago <= 0:
        return 0.0
    return (current - year_ago) / year_ago * 100


def calc_ttm(
    statements: Iterable[Mapping[str, Any] | Any],
    key: str,
    max_quarters: int = QUARTERS_PER_YEAR,
) -> float | None:
    """
    Trailing-twelve-month sum of ``key`` over the newest quarters.

    Statements are sorted by ``date`` (newest first) before slicing.
    Non-numeric values count as zero. Fewer than ``max_quarters`` statements
    are summed as-is.

    Args:
        statements: Mappings or objects exposing ``date`` and ``key``
        key: Field to sum
        max_quarters: Number of quarters to include

    Returns:
        The sum, or None when there are no statements
    """
    items = list(statements or [])
    if not items:
        return None

    def _get(item: Any, name: str) -> Any:
        if isinstance(item, Mapping):
            return item.get(name)
        return getattr(item, name, None)

    ordered = sorted(items, key=lambda s: str(_get(s, "date") or ""), reverse=True)

    total = 0.0
    for item in ordered[:max_quarters]:
        try:
            value = float(_get(item, key) or 0)
        except (TypeError, ValueError):
            value = 0.0
        if math.isfinite(value):
            total += value
    return total
