"""Full company analysis: every scorer plus the AI judgment, merged."""

import logging
from time import perf_counter
from typing import Any

from alphahunter_mcp.ai.judgment import parse_ai_judgment
from alphahunter_mcp.data.fundamentals import fundamentals_from_dict
from alphahunter_mcp.data.prices import build_price_snapshot
from alphahunter_mcp.models import AIJudgment, FinalAnalysis
from alphahunter_mcp.scoring.final import aggregate_final_score
from alphahunter_mcp.scoring.multibagger import compute_multibagger_score
from alphahunter_mcp.scoring.squeeze import compute_squeeze_setup
from alphahunter_mcp.scoring.technical import compute_technical_score
from alphahunter_mcp.tools.scoring import risk_flags_from_payload
from alphahunter_mcp.utils.provenance import build_error_response, build_meta
from alphahunter_mcp.utils.validators import coerce_float, coerce_optional_float

logger = logging.getLogger(__name__)


def _load_judgment(ticker: str, payload: dict[str, Any] | str | None) -> AIJudgment | None:
    """Parse the AI judgment; an unreadable one is logged and treated as absent."""
    if payload is None:
        return None
    try:
        return parse_ai_judgment(payload)
    except ValueError as e:
        logger.warning(f"Ignoring AI judgment for {ticker}: {e}")
        return None


def build_final_analysis(
    ticker: str,
    fundamentals: dict[str, Any],
    income_statements: list[dict[str, Any]],
    balance_sheets: list[dict[str, Any]],
    cash_flows: list[dict[str, Any]],
    market_cap: float,
    closes: list[float] | None = None,
    short_interest_pct: float = 0.0,
    days_to_cover: float | None = None,
    ai_judgment: dict[str, Any] | str | None = None,
    ttm_revenue: float | None = None,
) -> FinalAnalysis:
    """
    Run the whole pipeline on already-fetched payloads.

    The technical overlay is skipped when no closes are given; the AI
    judgment is optional and contributes 0 when absent or unreadable.

    Raises:
        ValueError: on malformed payloads
    """
    data = fundamentals_from_dict(ticker, fundamentals)
    multibagger = compute_multibagger_score(data)

    flags, *_ = risk_flags_from_payload(
        income_statements, balance_sheets, cash_flows, market_cap, ttm_revenue, short_interest_pct
    )

    technical = None
    if closes:
        technical = compute_technical_score(build_price_snapshot(closes))

    squeeze = compute_squeeze_setup(
        multibagger.total_score,
        coerce_float(short_interest_pct, field="short_interest_pct"),
        coerce_optional_float(days_to_cover, field="days_to_cover"),
    )

    judgment = _load_judgment(data.ticker, ai_judgment)

    return aggregate_final_score(
        data.ticker,
        multibagger,
        flags,
        technical=technical,
        squeeze=squeeze,
        ai_judgment=judgment,
    )


def analyze_company(
    ticker: str,
    fundamentals: dict[str, Any],
    income_statements: list[dict[str, Any]],
    balance_sheets: list[dict[str, Any]],
    cash_flows: list[dict[str, Any]],
    market_cap: float,
    closes: list[float] | None = None,
    short_interest_pct: float = 0.0,
    days_to_cover: float | None = None,
    ai_judgment: dict[str, Any] | str | None = None,
    ttm_revenue: float | None = None,
) -> dict[str, Any]:
    """
    Full analysis as a JSON-safe dict.

    Returns:
        Dict with final score, tier, verdict, position size and every
        component result; an error envelope on malformed input
    """
    start_time = perf_counter()
    try:
        analysis = build_final_analysis(
            ticker,
            fundamentals,
            income_statements,
            balance_sheets,
            cash_flows,
            market_cap,
            closes=closes,
            short_interest_pct=short_interest_pct,
            days_to_cover=days_to_cover,
            ai_judgment=ai_judgment,
            ttm_revenue=ttm_revenue,
        )
    except ValueError as e:
        logger.warning(f"analyze_company rejected input for {ticker}: {e}")
        return build_error_response("invalid_input", str(e), ticker=ticker)

    duration_ms = (perf_counter() - start_time) * 1000
    return {
        "meta": build_meta("analyze_company", duration_ms),
        "disqualified": analysis.disqualified,
        **analysis.to_dict(),
    }
