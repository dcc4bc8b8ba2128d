"""AlphaHunter scoring MCP server using FastMCP."""

import json
import logging
import os
from typing import Any

from fastmcp import FastMCP

from alphahunter_mcp import SCHEMA_VERSION, SERVER_VERSION
from alphahunter_mcp.tools import (
    analyze_company,
    classify_squeeze,
    evaluate_risk_flags,
    scan_companies,
    score_multibagger,
    score_technicals,
    score_valuation,
)

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(
    name="alphahunter",
)


def _dumps(result: dict[str, Any]) -> str:
    return json.dumps(result, indent=2, default=str)


# ============================================================================
# TOOLS
# ============================================================================


@mcp.tool
async def get_multibagger_score(ticker: str, fundamentals: dict[str, Any]) -> str:
    """
    Score a company on the five multi-bagger pillars (growth & TAM, unit
    economics, alignment, valuation, catalysts) plus quality bonuses.

    Args:
        ticker: Stock ticker symbol
        fundamentals: Fundamentals snapshot. Percent fields (gross_margin,
            roic, ownership, revenue_growth_forecast) are percentages;
            roe, fcf_margin and revenue_growth are fractions.
            revenue_history is quarterly, newest first.

    Returns:
        JSON with total score (0-100), tier, bonuses and per-pillar rationale
    """
    return _dumps(score_multibagger(ticker=ticker, fundamentals=fundamentals))


@mcp.tool
async def get_risk_flags(
    ticker: str,
    income_statements: list[dict[str, Any]],
    balance_sheets: list[dict[str, Any]],
    cash_flows: list[dict[str, Any]],
    market_cap: float,
    ttm_revenue: float | None = None,
    short_interest_pct: float = 0.0,
) -> str:
    """
    Run forensic risk checks: Beneish M-Score, Altman Z-Score, dilution,
    cash runway and quality of earnings.

    Args:
        ticker: Stock ticker symbol
        income_statements: Quarterly income statements (FMP-style keys)
        balance_sheets: Quarterly balance sheets (FMP-style keys)
        cash_flows: Quarterly cash flow statements (FMP-style keys)
        market_cap: Market capitalization in dollars
        ttm_revenue: Trailing revenue (default: sum of the 4 newest quarters)
        short_interest_pct: Short interest as % of float

    Returns:
        JSON with disqualification reasons, warnings and risk penalty
    """
    result = evaluate_risk_flags(
        ticker=ticker,
        income_statements=income_statements,
        balance_sheets=balance_sheets,
        cash_flows=cash_flows,
        market_cap=market_cap,
        ttm_revenue=ttm_revenue,
        short_interest_pct=short_interest_pct,
    )
    return _dumps(result)


@mcp.tool
async def get_technical_score(ticker: str, closes: list[float], price: float | None = None) -> str:
    """
    Score trend health: 12-month performance, 200-day SMA and distance
    from the 52-week high.

    Args:
        ticker: Stock ticker symbol
        closes: Daily closes, oldest first (about 260 for a full score)
        price: Current price (default: latest close)

    Returns:
        JSON with technical score (0-25) and component rationale
    """
    return _dumps(score_technicals(ticker=ticker, closes=closes, price=price))


@mcp.tool
async def get_squeeze_setup(
    ticker: str,
    multibagger_score: float,
    short_interest_pct: float,
    days_to_cover: float | None = None,
) -> str:
    """
    Classify a short-squeeze setup. Only high-quality names qualify.

    Args:
        ticker: Stock ticker symbol
        multibagger_score: Multi-bagger total score (0-100)
        short_interest_pct: Short interest as % of float
        days_to_cover: Short interest / average daily volume

    Returns:
        JSON with squeeze tier (None, Watch, Moderate, Strong) and rationale
    """
    return _dumps(
        classify_squeeze(
            ticker=ticker,
            multibagger_score=multibagger_score,
            short_interest_pct=short_interest_pct,
            days_to_cover=days_to_cover,
        )
    )


@mcp.tool
async def get_valuation_score(
    ticker: str,
    pe: float | None,
    ps: float | None,
    revenue_cagr_3y: float | None,
    eps_cagr_3y: float | None = None,
) -> str:
    """
    Score valuation relative to growth using PEG, with PSG as the fallback
    for companies without meaningful earnings.

    Args:
        ticker: Stock ticker symbol
        pe: Trailing P/E
        ps: Trailing P/S
        revenue_cagr_3y: 3-year revenue CAGR as a fraction (0.25 = 25%)
        eps_cagr_3y: 3-year EPS CAGR as a fraction

    Returns:
        JSON with valuation score (-10 to +15) and explanation
    """
    return _dumps(
        score_valuation(
            ticker=ticker,
            pe=pe,
            ps=ps,
            revenue_cagr_3y=revenue_cagr_3y,
            eps_cagr_3y=eps_cagr_3y,
        )
    )


@mcp.tool
async def analyze(
    ticker: str,
    fundamentals: dict[str, Any],
    income_statements: list[dict[str, Any]],
    balance_sheets: list[dict[str, Any]],
    cash_flows: list[dict[str, Any]],
    market_cap: float,
    closes: list[float] | None = None,
    short_interest_pct: float = 0.0,
    days_to_cover: float | None = None,
    ai_judgment: dict[str, Any] | None = None,
    ttm_revenue: float | None = None,
) -> str:
    """
    Full analysis: multi-bagger score, risk layer, technicals, squeeze setup
    and the AI judgment merged into a final score, tier and verdict.

    Disqualification by the risk layer always forces a final score of 0.

    Args:
        ticker: Stock ticker symbol
        fundamentals: Fundamentals snapshot (see get_multibagger_score)
        income_statements: Quarterly income statements, FMP-style
        balance_sheets: Quarterly balance sheets, FMP-style
        cash_flows: Quarterly cash flow statements, FMP-style
        market_cap: Market capitalization in dollars
        closes: Daily closes, oldest first (optional)
        short_interest_pct: Short interest as % of float
        days_to_cover: Short interest / average daily volume
        ai_judgment: AI judge JSON object (aiStatus, moatScore, warningFlags, ...)
        ttm_revenue: Trailing revenue (default: sum of the 4 newest quarters)

    Returns:
        JSON with final score, tier, verdict, position size and components
    """
    result = analyze_company(
        ticker=ticker,
        fundamentals=fundamentals,
        income_statements=income_statements,
        balance_sheets=balance_sheets,
        cash_flows=cash_flows,
        market_cap=market_cap,
        closes=closes,
        short_interest_pct=short_interest_pct,
        days_to_cover=days_to_cover,
        ai_judgment=ai_judgment,
        ttm_revenue=ttm_revenue,
    )
    return _dumps(result)


@mcp.tool
async def scan(
    companies: list[dict[str, Any]],
    concurrency: int = 1,
) -> str:
    """
    Batch analysis: run the full analysis over several companies and rank
    them by final score. Companies are processed through a politeness queue
    (SCAN_DELAY_SECONDS before each one); a company with a malformed payload
    is skipped and listed, not fatal.

    Args:
        companies: Objects with ticker plus the analyze arguments
            (fundamentals, income_statements, balance_sheets, cash_flows,
            market_cap, and optionally closes, short_interest_pct,
            days_to_cover, ai_judgment, ttm_revenue)
        concurrency: Maximum companies analyzed at once

    Returns:
        JSON with ranked results and the skipped tickers
    """
    return _dumps(await scan_companies(companies, concurrency=concurrency))


# ============================================================================
# ENTRY POINT
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    logger.info(f"Starting AlphaHunter MCP Server v{SERVER_VERSION} (schema v{SCHEMA_VERSION})")
    mcp.run()


if __name__ == "__main__":
    main()
