"""Final aggregation: quant score + AI judgment + risk penalty.

Disqualification by the risk layer always wins. A disqualified company gets
a final score of 0 and the Disqualified tier no matter how strong the quant
or AI inputs are.
"""

import logging

from alphahunter_mcp.models import (
    AIJudgment,
    AIStatus,
    FinalAnalysis,
    FinalTier,
    MultiBaggerScore,
    RiskFlags,
    SqueezeSetup,
    TechnicalScore,
    Verdict,
)
from alphahunter_mcp.scoring.thresholds import DEFAULT_CONFIG, ScoringConfig

logger = logging.getLogger(__name__)

AI_STATUS_POINTS: dict[AIStatus, int] = {
    AIStatus.STRONG_PASS: 10,
    AIStatus.SOFT_PASS: 5,
    AIStatus.MONITOR_ONLY: 0,
    AIStatus.AVOID: -10,
    AIStatus.UNKNOWN: 0,
}

ELITE_MOAT_SCORE = 8
ELITE_MOAT_BONUS = 3
WARNING_FLAG_PENALTY = 2
WARNING_FLAG_PENALTY_CAP = 6

TIER_VERDICTS: dict[FinalTier, Verdict] = {
    FinalTier.TIER_1: Verdict.STRONG_BUY,
    FinalTier.TIER_2: Verdict.BUY,
    FinalTier.TIER_3: Verdict.WATCH,
    FinalTier.NOT_INTERESTING: Verdict.PASS,
    FinalTier.DISQUALIFIED: Verdict.DISQUALIFIED,
}

# Suggested % of portfolio for a concentrated long-term book
TIER_POSITION_SIZES: dict[FinalTier, str] = {
    FinalTier.TIER_1: "Core (5-8%)",
    FinalTier.TIER_2: "Standard (3-5%)",
    FinalTier.TIER_3: "Starter (1-2%)",
    FinalTier.NOT_INTERESTING: "None",
    FinalTier.DISQUALIFIED: "None",
}


def compute_ai_score(judgment: AIJudgment | None) -> tuple[int, tuple[str, ...]]:
    """
    Translate an AI judgment into a score adjustment.

    Args:
        judgment: Parsed AI judgment, or None when the judge was not run

    Returns:
        (score, rationale)
    """
    if judgment is None:
        return 0, ("No AI judgment available (+0)",)

    rationale: list[str] = []
    status_points = AI_STATUS_POINTS[judgment.status]
    sign = "+" if status_points >= 0 else ""
    rationale.append(f"AI Status {judgment.status.value}: {sign}{status_points}")
    score = status_points

    if judgment.moat_score >= ELITE_MOAT_SCORE:
        score += ELITE_MOAT_BONUS
        rationale.append(f"Elite Moat ({judgment.moat_score}/10): +{ELITE_MOAT_BONUS}")

    if judgment.warning_flags:
        penalty = min(len(judgment.warning_flags) * WARNING_FLAG_PENALTY, WARNING_FLAG_PENALTY_CAP)
        score -= penalty
        rationale.append(f"AI Warning Flags ({len(judgment.warning_flags)}): -{penalty}")

    return score, tuple(rationale)


def aggregate_final_score(
    ticker: str,
    multibagger: MultiBaggerScore,
    risk_flags: RiskFlags,
    technical: TechnicalScore | None = None,
    squeeze: SqueezeSetup | None = None,
    ai_judgment: AIJudgment | None = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> FinalAnalysis:
    """
    Merge the quant score, the AI judgment and the risk penalty.

    The technical score and squeeze setup are carried along for display
    only; they do not move the final score.

    Args:
        ticker: Stock ticker symbol
        multibagger: Output of compute_multibagger_score
        risk_flags: Output of calculate_risk_flags
        technical: Optional technical overlay
        squeeze: Optional squeeze classification
        ai_judgment: Optional parsed AI judgment
        config: Tier cut-offs

    Returns:
        FinalAnalysis
    """
    quant_score = multibagger.total_score
    ai_score, ai_rationale = compute_ai_score(ai_judgment)
    raw_score = quant_score + ai_score + risk_flags.risk_penalty

    if risk_flags.disqualified:
        logger.info(
            f"[Final] {ticker}: disqualified, overriding score {raw_score} -> 0 "
            f"({'; '.join(risk_flags.disqualify_reasons)})"
        )
        final_score = 0
        tier = FinalTier.DISQUALIFIED
    else:
        final_score = max(0, min(raw_score, config.score_cap))
        tier = config.final_tier(final_score)

    bonuses = list(multibagger.bonuses)
    if ai_judgment is not None and ai_judgment.moat_score >= ELITE_MOAT_SCORE:
        bonuses.append(f"Elite Moat (+{ELITE_MOAT_BONUS})")

    return FinalAnalysis(
        ticker=ticker,
        final_score=final_score,
        raw_score=raw_score,
        tier=tier,
        verdict=TIER_VERDICTS[tier],
        quant_score=quant_score,
        ai_score=ai_score,
        risk_penalty=risk_flags.risk_penalty,
        bonuses=tuple(bonuses),
        suggested_position_size=TIER_POSITION_SIZES[tier],
        warnings=risk_flags.warnings,
        disqualify_reasons=risk_flags.disqualify_reasons,
        multibagger=multibagger,
        risk_flags=risk_flags,
        technical=technical,
        squeeze=squeeze,
        ai_judgment=ai_judgment,
        ai_rationale=ai_rationale,
    )
