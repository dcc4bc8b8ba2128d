"""Single-concern scoring tools.

Each tool takes plain JSON payloads, runs one scorer and returns a JSON-safe
dict with a ``meta`` block. Malformed input comes back as an error envelope.
"""

from time import perf_counter
from typing import Any

from alphahunter_mcp.data.fundamentals import fundamentals_from_dict
from alphahunter_mcp.data.prices import build_price_snapshot
from alphahunter_mcp.data.statements import (
    balance_sheets_from_rows,
    cash_flows_from_rows,
    income_statements_from_rows,
)
from alphahunter_mcp.models import BalanceSheet, CashFlowStatement, IncomeStatement, RiskFlags
from alphahunter_mcp.scoring.multibagger import compute_multibagger_score
from alphahunter_mcp.scoring.risk_flags import calculate_risk_flags
from alphahunter_mcp.scoring.squeeze import compute_squeeze_setup
from alphahunter_mcp.scoring.technical import compute_technical_score
from alphahunter_mcp.scoring.valuation import calc_valuation_score
from alphahunter_mcp.utils.financial import calc_ttm
from alphahunter_mcp.utils.normalize import to_jsonable
from alphahunter_mcp.utils.provenance import build_error_response, build_meta
from alphahunter_mcp.utils.validators import coerce_float, coerce_optional_float


def _elapsed_ms(start_time: float) -> float:
    return (perf_counter() - start_time) * 1000


def risk_flags_from_payload(
    income_statements: list[dict[str, Any]] | None,
    balance_sheets: list[dict[str, Any]] | None,
    cash_flows: list[dict[str, Any]] | None,
    market_cap: Any,
    ttm_revenue: Any = None,
    short_interest_pct: Any = 0.0,
) -> tuple[RiskFlags, tuple[IncomeStatement, ...], tuple[BalanceSheet, ...], tuple[CashFlowStatement, ...]]:
    """
    Parse statement rows and evaluate the risk layer.

    TTM revenue defaults to the sum of the four newest income statements.

    Raises:
        ValueError: on malformed rows or missing income/balance statements
    """
    income = income_statements_from_rows(income_statements)
    balance = balance_sheets_from_rows(balance_sheets)
    cash = cash_flows_from_rows(cash_flows)

    ttm = coerce_optional_float(ttm_revenue, field="ttm_revenue")
    if ttm is None:
        ttm = calc_ttm(income, "revenue") or 0.0

    flags = calculate_risk_flags(
        income,
        balance,
        cash,
        market_cap=coerce_float(market_cap, field="market_cap"),
        ttm_revenue=ttm,
        short_interest_pct=coerce_float(short_interest_pct, field="short_interest_pct"),
    )
    return flags, income, balance, cash


def score_multibagger(ticker: str, fundamentals: dict[str, Any]) -> dict[str, Any]:
    """
    Score fundamentals on the five multi-bagger pillars plus bonuses.

    Args:
        ticker: Stock ticker symbol
        fundamentals: FundamentalData payload (snake_case or camelCase keys)

    Returns:
        Dict with the multi-bagger score, tier and per-pillar rationale
    """
    start_time = perf_counter()
    try:
        data = fundamentals_from_dict(ticker, fundamentals)
    except ValueError as e:
        return build_error_response("invalid_input", str(e), ticker=ticker)

    score = compute_multibagger_score(data)
    return {
        "meta": build_meta("score_multibagger", _elapsed_ms(start_time)),
        "ticker": data.ticker,
        "multibagger": to_jsonable(score),
    }


def evaluate_risk_flags(
    ticker: str,
    income_statements: list[dict[str, Any]],
    balance_sheets: list[dict[str, Any]],
    cash_flows: list[dict[str, Any]],
    market_cap: float,
    ttm_revenue: float | None = None,
    short_interest_pct: float = 0.0,
) -> dict[str, Any]:
    """
    Run the forensic risk layer (Beneish, Altman, dilution, runway, QoE).

    Returns:
        Dict with risk flags, disqualify reasons and warnings
    """
    start_time = perf_counter()
    try:
        flags, *_ = risk_flags_from_payload(
            income_statements, balance_sheets, cash_flows, market_cap, ttm_revenue, short_interest_pct
        )
    except ValueError as e:
        return build_error_response("invalid_input", str(e), ticker=ticker)

    return {
        "meta": build_meta("evaluate_risk_flags", _elapsed_ms(start_time)),
        "ticker": ticker.upper(),
        "risk_flags": to_jsonable(flags),
        "infinite_runway": flags.has_infinite_runway,
    }


def score_technicals(ticker: str, closes: list[float], price: float | None = None) -> dict[str, Any]:
    """
    Score trend health from daily closes (oldest first).

    Returns:
        Dict with the technical score and its components
    """
    start_time = perf_counter()
    try:
        snapshot = build_price_snapshot(closes, price=coerce_optional_float(price, field="price"))
    except ValueError as e:
        return build_error_response("invalid_input", str(e), ticker=ticker)

    return {
        "meta": build_meta("score_technicals", _elapsed_ms(start_time)),
        "ticker": ticker.upper(),
        "price": snapshot.price,
        "sma200": snapshot.sma200,
        "week52_high": snapshot.week52_high,
        "week52_low": snapshot.week52_low,
        "technical": to_jsonable(compute_technical_score(snapshot)),
    }


def classify_squeeze(
    ticker: str,
    multibagger_score: float,
    short_interest_pct: float,
    days_to_cover: float | None = None,
) -> dict[str, Any]:
    """Classify a short-squeeze setup from quality and short positioning."""
    start_time = perf_counter()
    try:
        setup = compute_squeeze_setup(
            coerce_float(multibagger_score, field="multibagger_score"),
            coerce_float(short_interest_pct, field="short_interest_pct"),
            coerce_optional_float(days_to_cover, field="days_to_cover"),
        )
    except ValueError as e:
        return build_error_response("invalid_input", str(e), ticker=ticker)

    return {
        "meta": build_meta("classify_squeeze", _elapsed_ms(start_time)),
        "ticker": ticker.upper(),
        "squeeze": to_jsonable(setup),
    }


def score_valuation(
    ticker: str,
    pe: float | None,
    ps: float | None,
    revenue_cagr_3y: float | None,
    eps_cagr_3y: float | None = None,
) -> dict[str, Any]:
    """Score valuation relative to growth (PEG, with PSG fallback)."""
    start_time = perf_counter()
    try:
        score, explanation = calc_valuation_score(
            coerce_optional_float(pe, field="pe"),
            coerce_optional_float(ps, field="ps"),
            coerce_optional_float(revenue_cagr_3y, field="revenue_cagr_3y"),
            coerce_optional_float(eps_cagr_3y, field="eps_cagr_3y"),
        )
    except ValueError as e:
        return build_error_response("invalid_input", str(e), ticker=ticker)

    return {
        "meta": build_meta("score_valuation", _elapsed_ms(start_time)),
        "ticker": ticker.upper(),
        "valuation_score": score,
        "explanation": explanation,
    }
