"""Tests for final aggregation and the disqualification override."""

import logging
from dataclasses import replace

import pytest

from alphahunter_mcp.models import (
    AIJudgment,
    AIStatus,
    FinalTier,
    Verdict,
)
from alphahunter_mcp.scoring.final import aggregate_final_score, compute_ai_score
from alphahunter_mcp.scoring.multibagger import compute_multibagger_score
from alphahunter_mcp.scoring.risk_flags import calculate_risk_flags
from alphahunter_mcp.utils.normalize import to_jsonable

MARKET_CAP = 10_000.0
TTM_REVENUE = 100_000_000.0


@pytest.fixture
def clean_flags(clean_income, clean_balance, clean_cash_flows):
    return calculate_risk_flags(clean_income, clean_balance, clean_cash_flows, MARKET_CAP, TTM_REVENUE)


@pytest.fixture
def diluted_flags(clean_income, clean_balance, clean_cash_flows):
    income = (replace(clean_income[0], weighted_average_shares_diluted=450.0),) + clean_income[1:]
    return calculate_risk_flags(income, clean_balance, clean_cash_flows, MARKET_CAP, TTM_REVENUE)


class TestAIScore:
    """Tests for the AI judgment adjustment."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (AIStatus.STRONG_PASS, 10),
            (AIStatus.SOFT_PASS, 5),
            (AIStatus.MONITOR_ONLY, 0),
            (AIStatus.AVOID, -10),
            (AIStatus.UNKNOWN, 0),
        ],
    )
    def test_status_points(self, status, expected) -> None:
        score, _ = compute_ai_score(AIJudgment(status=status))
        assert score == expected

    def test_no_judgment(self) -> None:
        """A missing judgment contributes nothing."""
        assert compute_ai_score(None) == (0, ("No AI judgment available (+0)",))

    def test_elite_moat(self) -> None:
        """Moat score of 8+ adds 3."""
        score, rationale = compute_ai_score(AIJudgment(status=AIStatus.SOFT_PASS, moat_score=9))

        assert score == 8
        assert "Elite Moat (9/10): +3" in rationale

    def test_warning_flags_capped(self) -> None:
        """Each warning flag costs 2, capped at 6."""
        two, _ = compute_ai_score(AIJudgment(warning_flags=("a", "b")))
        five, _ = compute_ai_score(AIJudgment(warning_flags=("a", "b", "c", "d", "e")))
        assert (two, five) == (-4, -6)


class TestAggregation:
    """Tests for the merged final score."""

    def test_disqualification_is_absolute(self, compounder, diluted_flags) -> None:
        """A maximal quant score with disqualified flags is 0 / Disqualified."""
        multibagger = compute_multibagger_score(compounder)
        judgment = AIJudgment(status=AIStatus.STRONG_PASS, moat_score=10)

        analysis = aggregate_final_score("CMPD", multibagger, diluted_flags, ai_judgment=judgment)

        assert multibagger.total_score == 100
        assert analysis.final_score == 0
        assert analysis.tier == FinalTier.DISQUALIFIED
        assert analysis.verdict == Verdict.DISQUALIFIED
        assert analysis.suggested_position_size == "None"
        assert analysis.disqualified
        assert analysis.disqualify_reasons == ("Dilution rate 350.0% > 300% (massive dilution)",)

    def test_disqualification_logged(self, compounder, diluted_flags, caplog) -> None:
        """The override is logged at INFO."""
        with caplog.at_level(logging.INFO, logger="alphahunter_mcp.scoring.final"):
            aggregate_final_score("CMPD", compute_multibagger_score(compounder), diluted_flags)
        assert "CMPD: disqualified" in caplog.text

    def test_clamped_to_100(self, compounder, clean_flags) -> None:
        """Quant 100 plus AI upside stays at 100; the raw score keeps the excess."""
        judgment = AIJudgment(status=AIStatus.STRONG_PASS, moat_score=9)
        analysis = aggregate_final_score(
            "CMPD", compute_multibagger_score(compounder), clean_flags, ai_judgment=judgment
        )

        assert analysis.raw_score == 113
        assert analysis.final_score == 100
        assert analysis.tier == FinalTier.TIER_1
        assert analysis.verdict == Verdict.STRONG_BUY
        assert "Elite Moat (+3)" in analysis.bonuses

    def test_floor_at_zero(self, sparse_company, clean_flags) -> None:
        """A weak company with an AVOID judgment never goes negative."""
        judgment = AIJudgment(status=AIStatus.AVOID, warning_flags=("a", "b", "c"))
        multibagger = compute_multibagger_score(sparse_company)
        flags = replace(clean_flags, risk_penalty=-20, warnings=("x",))

        analysis = aggregate_final_score("THIN", multibagger, flags, ai_judgment=judgment)

        assert analysis.raw_score < 0
        assert analysis.final_score == 0
        assert analysis.tier == FinalTier.NOT_INTERESTING
        assert analysis.verdict == Verdict.PASS

    def test_risk_penalty_subtracts(self, compounder, clean_flags) -> None:
        """raw = quant + ai + penalty."""
        multibagger = compute_multibagger_score(compounder)
        flags = replace(clean_flags, risk_penalty=-10, warnings=("Dilution rate 30.0% > 25% (high dilution)",))

        analysis = aggregate_final_score("CMPD", multibagger, flags)

        assert analysis.raw_score == 90
        assert analysis.final_score == 90
        assert analysis.warnings == flags.warnings

    @pytest.mark.parametrize(
        "score,tier,verdict,size",
        [
            (85, FinalTier.TIER_1, Verdict.STRONG_BUY, "Core (5-8%)"),
            (84, FinalTier.TIER_2, Verdict.BUY, "Standard (3-5%)"),
            (65, FinalTier.TIER_2, Verdict.BUY, "Standard (3-5%)"),
            (50, FinalTier.TIER_3, Verdict.WATCH, "Starter (1-2%)"),
            (49, FinalTier.NOT_INTERESTING, Verdict.PASS, "None"),
        ],
    )
    def test_tier_mapping(self, compounder, clean_flags, score, tier, verdict, size) -> None:
        """Final tiers cut at 85 / 65 / 50."""
        multibagger = replace(compute_multibagger_score(compounder), total_score=score)
        analysis = aggregate_final_score("CMPD", multibagger, clean_flags)

        assert (analysis.tier, analysis.verdict, analysis.suggested_position_size) == (tier, verdict, size)

    def test_deterministic(self, compounder, clean_flags) -> None:
        """Identical inputs serialize identically."""
        first = aggregate_final_score("CMPD", compute_multibagger_score(compounder), clean_flags)
        second = aggregate_final_score("CMPD", compute_multibagger_score(compounder), clean_flags)
        assert to_jsonable(first) == to_jsonable(second)

    def test_to_dict_is_json_safe(self, compounder, clean_flags) -> None:
        """Enums flatten to values and the 999 runway survives as a number."""
        data = aggregate_final_score("CMPD", compute_multibagger_score(compounder), clean_flags).to_dict()

        assert data["tier"] == "Tier 1"
        assert data["risk_flags"]["cash_runway_quarters"] == 999.0
        assert data["multibagger"]["pillars"]["growth"]["max_score"] == 35
