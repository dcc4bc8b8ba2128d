"""Pytest configuration and fixtures."""

import pandas as pd
import pytest

from alphahunter_mcp.models import (
    BalanceSheet,
    CashFlowStatement,
    FundamentalData,
    IncomeStatement,
    InsiderActivity,
    MarginTrend,
    PricingPower,
    Rating,
    RevenuePoint,
    RevenueType,
    Sector,
    TamPenetration,
)

QUARTER_DATES = [
    "2025-12-31",
    "2025-09-30",
    "2025-06-30",
    "2025-03-31",
    "2024-12-31",
    "2024-09-30",
    "2024-06-30",
    "2024-03-31",
]

# Accelerating quarterly revenue, newest first (~53% 3y CAGR)
ACCELERATING_REVENUE = [360, 310, 270, 240, 210, 190, 170, 155, 140, 130, 120, 110, 100]


def revenue_points(values: list[float]) -> tuple[RevenuePoint, ...]:
    """Revenue points dated one quarter apart, newest first."""
    dates = pd.date_range(end="2025-12-31", periods=len(values), freq="QE")[::-1]
    return tuple(RevenuePoint(date=d.strftime("%Y-%m-%d"), value=float(v)) for d, v in zip(dates, values))


@pytest.fixture
def compounder() -> FundamentalData:
    """SaaS compounder scoring full marks on every pillar and both big bonuses."""
    return FundamentalData(
        ticker="CMPD",
        sector=Sector.SAAS,
        revenue_history=revenue_points(ACCELERATING_REVENUE),
        gross_margin=80.0,
        gross_margin_trend=MarginTrend.EXPANDING,
        revenue_type=RevenueType.RECURRING,
        roic=25.0,
        is_profitable=True,
        revenue_growth_forecast=40.0,
        founder_led=True,
        insider_ownership_pct=15.0,
        net_insider_buying=InsiderActivity.BUYING,
        institutional_ownership_pct=50.0,
        ps_ratio=5.0,
        pe_ratio=60.0,
        forward_pe_ratio=40.0,
        catalyst_density=Rating.HIGH,
        asymmetry_score=Rating.HIGH,
        pricing_power=PricingPower.STRONG,
        tam_penetration=TamPenetration.FROM_1_TO_5,
        roe=0.40,
        fcf_margin=0.30,
        revenue_growth=0.50,
    )


@pytest.fixture
def sparse_company() -> FundamentalData:
    """Company with almost nothing known: every categorical field Unknown."""
    return FundamentalData(ticker="THIN", revenue_history=revenue_points([10, 9, 8]))


@pytest.fixture
def clean_income() -> tuple[IncomeStatement, ...]:
    """Eight flat, profitable quarters with a stable share count."""
    return tuple(
        IncomeStatement(
            date=d,
            revenue=1000.0,
            gross_profit=600.0,
            operating_income=200.0,
            net_income=150.0,
            weighted_average_shares_diluted=100.0,
        )
        for d in QUARTER_DATES
    )


@pytest.fixture
def clean_balance() -> tuple[BalanceSheet, ...]:
    """Eight healthy balance sheets (Altman Z ~ 3.97 at a market cap of 10,000)."""
    return tuple(
        BalanceSheet(
            date=d,
            cash_and_equivalents=500.0,
            short_term_investments=100.0,
            total_current_assets=2500.0,
            total_assets=5000.0,
            total_current_liabilities=1000.0,
            total_liabilities=2000.0,
            retained_earnings=1000.0,
        )
        for d in QUARTER_DATES
    )


@pytest.fixture
def clean_cash_flows() -> tuple[CashFlowStatement, ...]:
    """Eight quarters of cash generation well above net income."""
    return tuple(
        CashFlowStatement(date=d, operating_cash_flow=200.0, capital_expenditure=-50.0)
        for d in QUARTER_DATES
    )


@pytest.fixture
def uptrend_closes() -> pd.Series:
    """260 daily closes rising steadily from 100 to ~200, oldest first."""
    dates = pd.bdate_range(end="2025-12-31", periods=260)
    return pd.Series([100.0 * (1.0027 ** i) for i in range(260)], index=dates)


@pytest.fixture
def fmp_statement_rows() -> dict[str, list[dict]]:
    """FMP-style statement rows, deliberately oldest first."""
    dates = list(reversed(QUARTER_DATES))
    return {
        "income_statements": [
            {
                "date": d,
                "revenue": 1000,
                "grossProfit": 600,
                "grossProfitRatio": 0.6,
                "operatingIncome": 200,
                "netIncome": 150,
                "weightedAverageShsOutDil": 100,
            }
            for d in dates
        ],
        "balance_sheets": [
            {
                "date": d,
                "cashAndCashEquivalents": 500,
                "shortTermInvestments": 100,
                "totalCurrentAssets": 2500,
                "totalAssets": 5000,
                "totalCurrentLiabilities": 1000,
                "totalLiabilities": 2000,
                "retainedEarnings": 1000,
            }
            for d in dates
        ],
        "cash_flows": [
            {"date": d, "operatingCashFlow": 200, "capitalExpenditure": -50, "freeCashFlow": 150}
            for d in dates
        ],
    }
