"""Batch scanner with a politeness queue.

Upstream data providers rate-limit aggressively, so tickers are analyzed
through a bounded semaphore with a fixed delay before each one. A failing
ticker is logged and skipped; it never aborts the batch.
"""

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable, Iterable

from alphahunter_mcp.models import FinalAnalysis

logger = logging.getLogger(__name__)

DEFAULT_SCAN_DELAY_SECONDS = 2.0

Analyzer = Callable[[str], Awaitable[FinalAnalysis | None]]


def scan_delay_from_env() -> float:
    """Politeness delay from SCAN_DELAY_SECONDS (default 2.0, never negative)."""
    raw = os.environ.get("SCAN_DELAY_SECONDS")
    if raw is None:
        return DEFAULT_SCAN_DELAY_SECONDS
    try:
        return max(0.0, float(raw))
    except ValueError:
        logger.warning(f"Invalid SCAN_DELAY_SECONDS={raw!r}, using {DEFAULT_SCAN_DELAY_SECONDS}")
        return DEFAULT_SCAN_DELAY_SECONDS


def unique_tickers(tickers: Iterable[str]) -> list[str]:
    """Uppercase, strip and deduplicate, preserving first-seen order."""
    seen: set[str] = set()
    ordered: list[str] = []
    for ticker in tickers:
        normalized = ticker.upper().strip()
        if normalized and normalized not in seen:
            seen.add(normalized)
            ordered.append(normalized)
    return ordered


async def scan_tickers(
    tickers: Iterable[str],
    analyze: Analyzer,
    delay_seconds: float | None = None,
    concurrency: int = 1,
) -> list[FinalAnalysis]:
    """
    Analyze a batch of tickers politely.

    Args:
        tickers: Symbols to scan (duplicates are dropped)
        analyze: Coroutine function producing a FinalAnalysis (or None when
            the ticker has no usable data)
        delay_seconds: Wait before each ticker (default: SCAN_DELAY_SECONDS)
        concurrency: Maximum tickers in flight (default: 1, fully serial)

    Returns:
        Successful analyses sorted by final score, highest first
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")
    delay = scan_delay_from_env() if delay_seconds is None else delay_seconds
    symbols = unique_tickers(tickers)
    semaphore = asyncio.Semaphore(concurrency)

    logger.info(f"Scanning {len(symbols)} tickers (delay={delay}s, concurrency={concurrency})")

    async def run_one(symbol: str) -> FinalAnalysis | None:
        async with semaphore:
            if delay > 0:
                await asyncio.sleep(delay)
            try:
                result = await analyze(symbol)
            except Exception as e:
                logger.warning(f"Scan failed for {symbol}: {type(e).__name__}: {e}")
                return None
            if result is None:
                logger.warning(f"Scan skipped {symbol}: no analysis produced")
            return result

    results = await asyncio.gather(*(run_one(symbol) for symbol in symbols))
    completed = [r for r in results if r is not None]
    logger.info(f"Scan complete: {len(completed)}/{len(symbols)} analyzed")
    return sorted(completed, key=lambda r: r.final_score, reverse=True)
