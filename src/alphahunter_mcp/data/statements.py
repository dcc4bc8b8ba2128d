"""
Build statement records from FMP-style JSON rows.

One mapping per quarter with camelCase keys. Records come out as tuples of
frozen dataclasses, newest quarter first.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

from alphahunter_mcp.models import BalanceSheet, CashFlowStatement, IncomeStatement
from alphahunter_mcp.utils.validators import coerce_float, coerce_optional_float

logger = logging.getLogger(__name__)


def _require_mapping(row: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(row, Mapping):
        raise ValueError(f"{kind} rows must be JSON objects, got {type(row).__name__}")
    return row


def _period(date: str) -> pd.Timestamp | None:
    if not date:
        return None
    try:
        period = pd.Timestamp(date)
    except (TypeError, ValueError):
        return None
    if pd.isna(period):
        return None
    return period.tz_convert(None) if period.tzinfo is not None else period


def newest_first(records: Iterable[Any]) -> tuple:
    """
    Order dated records newest first.

    Dates are parsed, so "2025-3-31" sorts before "2025-12-31". When any
    record is undated or its date does not parse, the input order is kept.
    """
    items = list(records)
    periods = [_period(r.date) for r in items]
    if any(p is None for p in periods):
        if items:
            logger.debug(f"Keeping input order: {periods.count(None)} of {len(items)} records undated")
        return tuple(items)
    order = sorted(range(len(items)), key=lambda i: periods[i], reverse=True)
    return tuple(items[i] for i in order)



def income_statement_from_dict(row: Mapping[str, Any]) -> IncomeStatement:
    row = _require_mapping(row, "Income statement")
    return IncomeStatement(
        date=str(row.get("date", "")),
        revenue=coerce_float(row.get("revenue"), field="revenue"),
        gross_profit=coerce_float(row.get("grossProfit"), field="grossProfit"),
        operating_income=coerce_float(row.get("operatingIncome"), field="operatingIncome"),
        net_income=coerce_float(row.get("netIncome"), field="netIncome"),
        weighted_average_shares_diluted=coerce_float(
            row.get("weightedAverageShsOutDil"), field="weightedAverageShsOutDil"
        ),
        gross_profit_ratio=coerce_optional_float(row.get("grossProfitRatio"), field="grossProfitRatio"),
    )


def balance_sheet_from_dict(row: Mapping[str, Any]) -> BalanceSheet:
    row = _require_mapping(row, "Balance sheet")
    return BalanceSheet(
        date=str(row.get("date", "")),
        cash_and_equivalents=coerce_float(row.get("cashAndCashEquivalents"), field="cashAndCashEquivalents"),
        short_term_investments=coerce_float(row.get("shortTermInvestments"), field="shortTermInvestments"),
        total_current_assets=coerce_float(row.get("totalCurrentAssets"), field="totalCurrentAssets"),
        total_assets=coerce_float(row.get("totalAssets"), field="totalAssets"),
        total_current_liabilities=coerce_float(
            row.get("totalCurrentLiabilities"), field="totalCurrentLiabilities"
        ),
        total_liabilities=coerce_float(row.get("totalLiabilities"), field="totalLiabilities"),
        retained_earnings=coerce_float(row.get("retainedEarnings"), field="retainedEarnings"),
    )


def cash_flow_from_dict(row: Mapping[str, Any]) -> CashFlowStatement:
    row = _require_mapping(row, "Cash flow")
    return CashFlowStatement(
        date=str(row.get("date", "")),
        operating_cash_flow=coerce_float(row.get("operatingCashFlow"), field="operatingCashFlow"),
        capital_expenditure=coerce_float(row.get("capitalExpenditure"), field="capitalExpenditure"),
        free_cash_flow=coerce_optional_float(row.get("freeCashFlow"), field="freeCashFlow"),
    )


def income_statements_from_rows(rows: Iterable[Mapping[str, Any]] | None) -> tuple[IncomeStatement, ...]:
    return newest_first(income_statement_from_dict(r) for r in rows or [])


def balance_sheets_from_rows(rows: Iterable[Mapping[str, Any]] | None) -> tuple[BalanceSheet, ...]:
    return newest_first(balance_sheet_from_dict(r) for r in rows or [])


def cash_flows_from_rows(rows: Iterable[Mapping[str, Any]] | None) -> tuple[CashFlowStatement, ...]:
    return newest_first(cash_flow_from_dict(r) for r in rows or [])
