"""Boundary builders: provider payloads in, frozen snapshots out."""

from alphahunter_mcp.data.fundamentals import fundamentals_from_dict
from alphahunter_mcp.data.prices import build_price_snapshot
from alphahunter_mcp.data.statements import (
    balance_sheets_from_rows,
    cash_flows_from_rows,
    income_statements_from_rows,
    newest_first,
)

__all__ = [
    "fundamentals_from_dict",
    "build_price_snapshot",
    "balance_sheets_from_rows",
    "cash_flows_from_rows",
    "income_statements_from_rows",
    "newest_first",
]
