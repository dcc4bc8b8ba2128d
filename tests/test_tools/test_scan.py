"""Tests for the batch scan tool."""

import asyncio
import copy
import json

import pytest

from alphahunter_mcp.tools import scan_companies
from alphahunter_mcp.utils.normalize import to_jsonable


@pytest.fixture
def company(compounder, fmp_statement_rows) -> dict:
    return {
        "ticker": "cmpd",
        "fundamentals": to_jsonable(compounder),
        "market_cap": 10_000,
        **fmp_statement_rows,
    }


def _scan(companies: list, **kwargs) -> dict:
    return asyncio.run(scan_companies(companies, delay_seconds=0, **kwargs))


class TestScanCompanies:
    """Tests for scan_companies."""

    def test_ranks_by_final_score(self, company) -> None:
        diluter = copy.deepcopy(company)
        diluter["ticker"] = "dilu"
        diluter["income_statements"][-1]["weightedAverageShsOutDil"] = 450

        result = _scan([diluter, company])

        assert result["meta"]["tool"] == "scan_companies"
        assert result["scanned"] == 2
        assert result["skipped"] == []
        assert [r["ticker"] for r in result["results"]] == ["CMPD", "DILU"]
        assert result["results"][0]["final_score"] == 100
        assert result["results"][1]["disqualified"] is True
        assert result["results"][1]["tier"] == "Disqualified"
        json.dumps(result, allow_nan=False)

    def test_malformed_company_is_skipped(self, company, caplog) -> None:
        """A company whose payload cannot be read never aborts the batch."""
        broken = copy.deepcopy(company)
        broken["ticker"] = "BRKN"
        broken["fundamentals"] = {"ps_ratio": "cheap"}

        result = _scan([broken, company])

        assert result["scanned"] == 2
        assert result["skipped"] == ["BRKN"]
        assert [r["ticker"] for r in result["results"]] == ["CMPD"]
        assert "Scan failed for BRKN" in caplog.text

    def test_duplicate_tickers_keep_first_payload(self, company) -> None:
        second = copy.deepcopy(company)
        second["ticker"] = " CMPD "
        second["income_statements"][-1]["weightedAverageShsOutDil"] = 450

        result = _scan([company, second])

        assert result["scanned"] == 1
        assert result["results"][0]["disqualified"] is False

    def test_ai_judgment_flows_through(self, company) -> None:
        company["ai_judgment"] = {"aiStatus": "AVOID"}

        result = _scan([company])

        assert result["results"][0]["ai_score"] == -10
        assert result["results"][0]["final_score"] == 90

    @pytest.mark.parametrize("entry", [{"fundamentals": {}}, {"ticker": "  "}, "CMPD"])
    def test_entry_without_ticker_rejected(self, company, entry) -> None:
        result = _scan([company, entry])

        assert result["error"] is True
        assert result["error_type"] == "invalid_input"
        assert "companies[1]" in result["message"]

    def test_invalid_concurrency_rejected(self, company) -> None:
        result = _scan([company], concurrency=0)

        assert result["error"] is True
        assert "concurrency" in result["message"]

    def test_empty_batch(self) -> None:
        result = _scan([])

        assert result["scanned"] == 0
        assert result["results"] == []
