"""Price indicators used by the technical scorer."""

import pandas as pd

TRADING_DAYS_PER_YEAR = 252


def calculate_sma(prices: pd.Series, period: int) -> pd.Series:
    """
    Calculate Simple Moving Average.

    Args:
        prices: Price series (typically close prices), oldest first
        period: Number of periods for the average

    Returns:
        SMA series
    """
    return prices.rolling(window=period, min_periods=period).mean()


def latest_value(series: pd.Series) -> float | None:
    """Last value of a series as a float, or None when empty or NaN."""
    if series.empty:
        return None
    value = series.iloc[-1]
    if pd.isna(value):
        return None
    return float(value)


def calculate_52_week_range(
    prices: pd.Series,
    window: int = TRADING_DAYS_PER_YEAR,
) -> tuple[float | None, float | None]:
    """
    Calculate the 52-week high and low from daily closes.

    Uses however many closes are available when fewer than a full year exist.

    Args:
        prices: Daily close series, oldest first
        window: Trading days in the lookback (default: 252)

    Returns:
        (high, low), each None when there are no valid closes
    """
    recent = pd.to_numeric(prices, errors="coerce").dropna().iloc[-window:]
    if recent.empty:
        return None, None
    return float(recent.max()), float(recent.min())
