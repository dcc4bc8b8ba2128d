"""Batch analysis: run the full pipeline over many companies politely."""

from time import perf_counter
from typing import Any

from alphahunter_mcp.models import FinalAnalysis
from alphahunter_mcp.scanner import scan_tickers
from alphahunter_mcp.tools.analyze import build_final_analysis
from alphahunter_mcp.utils.provenance import build_error_response, build_meta


async def scan_companies(
    companies: list[dict[str, Any]],
    delay_seconds: float | None = None,
    concurrency: int = 1,
) -> dict[str, Any]:
    """
    Analyze a batch of company payloads and rank them.

    Each entry carries ``ticker`` plus the analyze_company arguments
    (fundamentals, statements, market_cap, and optionally closes, short
    interest, days to cover, AI judgment, TTM revenue). The first entry per
    ticker wins. A company whose payload fails is skipped, not fatal.

    Args:
        companies: Company payloads
        delay_seconds: Wait before each company (default: SCAN_DELAY_SECONDS)
        concurrency: Maximum companies in flight

    Returns:
        Dict with results ranked by final score and the skipped tickers
    """
    start_time = perf_counter()
    payloads: dict[str, dict[str, Any]] = {}
    for index, company in enumerate(companies):
        if not isinstance(company, dict) or not str(company.get("ticker") or "").strip():
            return build_error_response("invalid_input", f"companies[{index}] must be an object with a ticker")
        symbol = str(company["ticker"]).upper().strip()
        if symbol not in payloads:
            payloads[symbol] = {k: v for k, v in company.items() if k != "ticker"}

    async def analyze(symbol: str) -> FinalAnalysis:
        return build_final_analysis(symbol, **payloads[symbol])

    try:
        results = await scan_tickers(list(payloads), analyze, delay_seconds=delay_seconds, concurrency=concurrency)
    except ValueError as e:
        return build_error_response("invalid_input", str(e))

    analyzed = {r.ticker for r in results}
    return {
        "meta": build_meta("scan_companies", (perf_counter() - start_time) * 1000),
        "scanned": len(payloads),
        "skipped": [symbol for symbol in payloads if symbol not in analyzed],
        "results": [{"disqualified": r.disqualified, **r.to_dict()} for r in results],
    }
