"""Multi-bagger score: five pillars plus quality/growth bonuses."""

import logging

from alphahunter_mcp.models import FundamentalData, MultiBaggerScore, PillarScore
from alphahunter_mcp.scoring.pillars import (
    score_alignment,
    score_catalysts,
    score_growth_and_tam,
    score_unit_economics,
    score_valuation,
)
from alphahunter_mcp.scoring.thresholds import DEFAULT_CONFIG, ScoringConfig
from alphahunter_mcp.utils.financial import compute_cagr

logger = logging.getLogger(__name__)

CAPITAL_EFFICIENCY_BONUS = 15
SAAS_COMPOUNDER_BONUS = 20
QUALITY_BONUS = 5

PILLAR_LABELS = {
    "growth": "A. Growth & TAM",
    "economics": "B. Economics",
    "alignment": "C. Alignment",
    "valuation": "D. Valuation",
    "catalysts": "E. Catalysts",
}


def is_capital_efficient(data: FundamentalData) -> bool:
    """High ROE, high FCF margin, still growing (AAPL/MSFT profile)."""
    return data.roe >= 0.35 and data.fcf_margin >= 0.25 and data.revenue_growth >= 0.05


def is_saas_compounder(data: FundamentalData) -> bool:
    """High 3y CAGR, high current growth, software-grade gross margin."""
    cagr_3y = compute_cagr(data.revenue_values)
    gm = data.gross_margin if data.gross_margin is not None else 0.0
    return cagr_3y >= 25 and data.revenue_growth * 100 >= 20 and gm >= 70


def is_legacy_quality(data: FundamentalData, growth: PillarScore) -> bool:
    gm = data.gross_margin if data.gross_margin is not None else 0.0
    high_quality = (data.roic is not None and data.roic > 15) or gm > 60
    return data.is_profitable and high_quality and growth.score >= 8


def compute_multibagger_score(
    data: FundamentalData,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> MultiBaggerScore:
    """
    Score a company on the five multi-bagger pillars.

    Bonuses apply in fixed order: Capital Efficiency (+15) and SaaS
    Compounder (+20) are independent and additive; Legacy Quality (+5) only
    applies when neither of them fired. The total is capped at
    ``config.score_cap``.

    Args:
        data: Normalized fundamentals snapshot
        config: Sector thresholds and tier cut-offs

    Returns:
        MultiBaggerScore with per-pillar breakdown and fired bonuses
    """
    pillars = {
        "growth": score_growth_and_tam(data, config),
        "economics": score_unit_economics(data, config),
        "alignment": score_alignment(data, config),
        "valuation": score_valuation(data, config),
        "catalysts": score_catalysts(data, config),
    }
    pillar_sum = sum(p.score for p in pillars.values())

    bonuses: list[str] = []
    capital_bonus = saas_bonus = quality_bonus = 0

    capital_efficient = is_capital_efficient(data)
    if capital_efficient:
        capital_bonus = CAPITAL_EFFICIENCY_BONUS
        bonuses.append(f"Capital Efficiency (+{CAPITAL_EFFICIENCY_BONUS})")
    logger.debug(
        f"[CapitalEfficiency] {data.ticker}: ROE={data.roe:.2f}, FCF={data.fcf_margin:.2f}, "
        f"Growth={data.revenue_growth:.2f} -> {'BONUS APPLIED' if capital_efficient else 'No Bonus'}"
    )

    saas = is_saas_compounder(data)
    if saas:
        saas_bonus = SAAS_COMPOUNDER_BONUS
        bonuses.append(f"SaaS Compounder (+{SAAS_COMPOUNDER_BONUS})")
    logger.debug(
        f"[GrowthBonus] {data.ticker}: CAGR3y={compute_cagr(data.revenue_values):.1f}%, "
        f"LastGrowth={data.revenue_growth * 100:.1f}% -> {'BONUS APPLIED' if saas else 'No Bonus'}"
    )

    if not capital_efficient and not saas and is_legacy_quality(data, pillars["growth"]):
        quality_bonus = QUALITY_BONUS
        bonuses.append(f"Quality (+{QUALITY_BONUS})")

    raw_score = pillar_sum + capital_bonus + saas_bonus + quality_bonus
    total_score = min(raw_score, config.score_cap)
    tier = config.multibagger_tier(total_score)

    lines = [
        f"Total Score: {total_score}/100 ({tier.value}) "
        f"[CapEff: +{capital_bonus}, SaaS: +{saas_bonus}, Qual: +{quality_bonus}]",
        "-" * 40,
    ]
    for key, pillar in pillars.items():
        lines.append(f"{PILLAR_LABELS[key] + ':':<17}{pillar.score}/{pillar.max_score}")

    return MultiBaggerScore(
        total_score=total_score,
        raw_score=raw_score,
        tier=tier,
        pillars=pillars,
        bonuses=tuple(bonuses),
        summary="\n".join(lines),
    )
