"""Build a PriceSnapshot from daily closes."""

from collections.abc import Sequence
from typing import Any

import pandas as pd

from alphahunter_mcp.models import PriceSnapshot
from alphahunter_mcp.utils.indicators import calculate_52_week_range, calculate_sma, latest_value

SMA_PERIOD = 200


def _to_close_series(closes: pd.Series | pd.DataFrame | Sequence[Any]) -> pd.Series:
    """Normalize input to a numeric close series, oldest first."""
    if isinstance(closes, pd.DataFrame):
        column = next((c for c in closes.columns if str(c).lower() in ("close", "adj close")), None)
        if column is None:
            raise ValueError("Price frame has no Close column")
        series = closes[column]
    elif isinstance(closes, pd.Series):
        series = closes
    else:
        series = pd.Series(list(closes), dtype="object")

    if isinstance(series.index, pd.DatetimeIndex):
        series = series.sort_index()
    return pd.to_numeric(series, errors="coerce").dropna().reset_index(drop=True)


def build_price_snapshot(
    closes: pd.Series | pd.DataFrame | Sequence[Any],
    price: float | None = None,
) -> PriceSnapshot:
    """
    Build a PriceSnapshot from daily closes.

    Args:
        closes: Daily closes, oldest first. A Series with a DatetimeIndex is
            sorted by date; a DataFrame must carry a Close column.
        price: Current price (default: the latest close)

    Returns:
        PriceSnapshot with history newest first, the 200-day SMA (None with
        fewer than 200 closes) and the 52-week range

    Raises:
        ValueError: if there is neither a close nor an explicit price
    """
    series = _to_close_series(closes)
    if price is None:
        if series.empty:
            raise ValueError("No valid closes to derive a price from")
        price = float(series.iloc[-1])

    sma200 = latest_value(calculate_sma(series, SMA_PERIOD)) if len(series) >= SMA_PERIOD else None
    high, low = calculate_52_week_range(series)

    return PriceSnapshot(
        price=float(price),
        history=tuple(float(v) for v in series.iloc[::-1]),
        sma200=sma200,
        week52_high=high,
        week52_low=low,
    )
