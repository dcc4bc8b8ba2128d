"""The five multi-bagger pillars.

Each scorer maps a FundamentalData snapshot to a PillarScore. Scorers are
pure: missing or out-of-range inputs fall back to a documented default that
is spelled out in the rationale, never raised.

All five scorers share the ``(data, config)`` signature so the aggregator
calls them alike. Only unit economics reads the sector table; the other four
accept ``config`` and ignore it.
"""

from enum import Enum

from alphahunter_mcp.models import (
    FundamentalData,
    InsiderActivity,
    MarginTrend,
    PillarScore,
    PricingPower,
    Rating,
    RevenueType,
    TamPenetration,
)
from alphahunter_mcp.scoring.thresholds import DEFAULT_CONFIG, ScoringConfig
from alphahunter_mcp.utils.financial import compute_cagr, yoy_growth

GROWTH_MAX = 35
ECONOMICS_MAX = 25
ALIGNMENT_MAX = 20
VALUATION_MAX = 10
CATALYSTS_MAX = 10

ACCELERATION_MIN_POINTS = 8
ACCELERATION_DEFAULT = 5

# Lookup tables are keyed by every member of their enum (see tests).
# A middle penetration band scores highest: validated but still early.
TAM_PENETRATION_POINTS: dict[TamPenetration, int] = {
    TamPenetration.FROM_1_TO_5: 10,
    TamPenetration.BELOW_1: 6,
    TamPenetration.FROM_5_TO_10: 6,
    TamPenetration.ABOVE_10: 2,
    TamPenetration.UNKNOWN: 0,
}

MARGIN_TREND_POINTS: dict[MarginTrend, int] = {
    MarginTrend.EXPANDING: 5,
    MarginTrend.STABLE: 2,
    MarginTrend.CONTRACTING: 0,
    MarginTrend.UNKNOWN: 0,
}

REVENUE_TYPE_POINTS: dict[RevenueType, int] = {
    RevenueType.RECURRING: 5,
    RevenueType.CONSUMABLE: 4,
    RevenueType.TRANSACTIONAL: 3,
    RevenueType.ONE_TIME: 1,
    RevenueType.PROJECT_BASED: 0,
    RevenueType.UNKNOWN: 0,
}

INSIDER_ACTIVITY_POINTS: dict[InsiderActivity, int] = {
    InsiderActivity.BUYING: 5,
    InsiderActivity.NEUTRAL: 2,
    InsiderActivity.SELLING: 0,
    InsiderActivity.UNKNOWN: 0,
}

RATING_POINTS: dict[Rating, int] = {
    Rating.HIGH: 5,
    Rating.MEDIUM: 3,
    Rating.LOW: 0,
    Rating.UNKNOWN: 0,
}

PRICING_POWER_ADJUSTMENT: dict[PricingPower, int] = {
    PricingPower.STRONG: 1,
    PricingPower.NEUTRAL: 0,
    PricingPower.WEAK: -1,
    PricingPower.UNKNOWN: 0,
}

# (threshold, points), checked top-down with >=
CAGR_BRACKETS = ((40, 15), (25, 12), (15, 8), (10, 4))


def _category_label(value: Enum) -> str:
    text = value.value
    return f"{text}, unrecognized or missing" if text == "Unknown" else text


# --- Growth & TAM ---


def score_cagr(values: list[float]) -> tuple[int, float]:
    """CAGR sub-score (max 15) and the CAGR it was based on."""
    cagr = compute_cagr(values)
    for threshold, points in CAGR_BRACKETS:
        if cagr >= threshold:
            return points, cagr
    return 0, cagr


def score_growth_and_tam(data: FundamentalData, config: ScoringConfig = DEFAULT_CONFIG) -> PillarScore:
    """Growth & TAM pillar (max 35): CAGR, acceleration, TAM penetration."""
    rationale: list[str] = []
    values = data.revenue_values

    cagr_score, cagr = score_cagr(values)
    if len(values) < 5:
        rationale.append(f"Insufficient revenue history for CAGR ({len(values)} quarters, need 5)")
    rationale.append(f"Revenue CAGR (~{cagr:.1f}%): +{cagr_score}/15")

    accel_score = ACCELERATION_DEFAULT
    accel_status = "Flat/Mixed"
    if len(values) >= ACCELERATION_MIN_POINTS:
        q1, q2, q3 = (yoy_growth(values, offset) for offset in (0, 1, 2))
        if q1 > q2 > q3:
            accel_score, accel_status = 10, "Accelerating"
        elif q1 < q2 < q3:
            accel_score, accel_status = 0, "Decelerating"
    else:
        rationale.append("Insufficient history for acceleration check (Defaulting to Mixed)")
    rationale.append(f"Growth Trend ({accel_status}): +{accel_score}/10")

    tam_score = TAM_PENETRATION_POINTS[data.tam_penetration]
    rationale.append(f"TAM Penetration ({_category_label(data.tam_penetration)}): +{tam_score}/10")

    return PillarScore(
        score=cagr_score + accel_score + tam_score,
        max_score=GROWTH_MAX,
        rationale=tuple(rationale),
    )


# --- Unit Economics ---


def score_unit_economics(data: FundamentalData, config: ScoringConfig = DEFAULT_CONFIG) -> PillarScore:
    """Unit economics pillar (max 25)."""
    rationale: list[str] = []
    sector = config.for_sector(data.sector)

    gm = data.gross_margin if data.gross_margin is not None else 0.0
    if data.gross_margin is None:
        rationale.append("Gross margin unavailable (treated as 0%)")
    if gm >= sector.gross_margin_top:
        gm_score = 10
    elif gm >= sector.gross_margin_mid:
        gm_score = 5
    else:
        gm_score = 0
    rationale.append(
        f"Gross Margin ({gm:.1f}% vs Top {sector.gross_margin_top:g}%): +{gm_score}/10"
    )

    trend_score = MARGIN_TREND_POINTS[data.gross_margin_trend]
    rationale.append(f"GM Trend ({_category_label(data.gross_margin_trend)}): +{trend_score}/5")

    rev_score = REVENUE_TYPE_POINTS[data.revenue_type]
    rationale.append(f"Revenue Type ({_category_label(data.revenue_type)}): +{rev_score}/5")

    if data.is_profitable and data.roic is not None:
        if data.roic > sector.roic_top:
            roic_score = 5
        elif data.roic >= sector.roic_mid:
            roic_score = 3
        else:
            roic_score = 0
        rationale.append(f"ROIC ({data.roic:.1f}%): +{roic_score}/5")
    else:
        growth = data.revenue_growth_forecast
        if gm > 60 and growth > 30:
            roic_score = 4
        elif gm > 50 and growth > 20:
            roic_score = 2
        else:
            roic_score = 0
        rationale.append(
            f"Capital Efficiency (Pre-profit Proxy: GM {gm:.0f}% / Growth {growth:.0f}%): +{roic_score}/5"
        )

    return PillarScore(
        score=gm_score + trend_score + rev_score + roic_score,
        max_score=ECONOMICS_MAX,
        rationale=tuple(rationale),
    )


# --- Alignment ---


def _insider_points(pct: float, founder_led: bool) -> int:
    if founder_led:
        brackets = (10, 7, 3)
    else:
        brackets = (5, 3, 1)
    if pct > 10:
        return brackets[0]
    if pct >= 3:
        return brackets[1]
    if pct >= 0.5:
        return brackets[2]
    return 0


def _institutional_points(pct: float) -> int:
    # Validated but not overcrowded
    if 30 <= pct <= 85:
        return 5
    if pct > 85:
        return 3
    return 2


def score_alignment(data: FundamentalData, config: ScoringConfig = DEFAULT_CONFIG) -> PillarScore:
    """Alignment pillar (max 20): insider ownership, insider buying, institutions."""
    insider_score = _insider_points(data.insider_ownership_pct, data.founder_led)
    buying_score = INSIDER_ACTIVITY_POINTS[data.net_insider_buying]
    inst_score = _institutional_points(data.institutional_ownership_pct)

    rationale = (
        f"Insider Ownership ({data.insider_ownership_pct:.1f}%, Founder: {data.founder_led}): "
        f"+{insider_score}/10",
        f"Insider Activity ({_category_label(data.net_insider_buying)}): +{buying_score}/5",
        f"Institutional Ownership ({data.institutional_ownership_pct:.1f}%): +{inst_score}/5",
    )
    return PillarScore(
        score=insider_score + buying_score + inst_score,
        max_score=ALIGNMENT_MAX,
        rationale=rationale,
    )


# --- Valuation ---


def score_valuation(data: FundamentalData, config: ScoringConfig = DEFAULT_CONFIG) -> PillarScore:
    """Valuation pillar (max 10): PSG plus trailing-vs-forward P/E trend."""
    rationale: list[str] = []

    psg = 0.0
    if data.revenue_growth_forecast > 0:
        psg = data.ps_ratio / data.revenue_growth_forecast
    else:
        rationale.append("Revenue growth forecast unavailable (PSG not computed)")

    psg_score = 0
    if psg > 0:
        if psg < 0.5:
            psg_score = 5
        elif psg <= 1.0:
            psg_score = 4
        elif psg <= 2.0:
            psg_score = 2
    rationale.append(f"PSG Ratio ({psg:.2f}): +{psg_score}/5")

    pe, fwd = data.pe_ratio, data.forward_pe_ratio
    if pe is not None and fwd is not None and pe > 0 and fwd > 0:
        ratio = pe / fwd
        if ratio > 1.1:
            trend_score = 5
        elif ratio >= 1.0:
            trend_score = 3
        else:
            trend_score = 0
        rationale.append(
            f"P/E Trend (Trailing {pe:.1f} / Fwd {fwd:.1f} = {ratio:.2f}): +{trend_score}/5"
        )
    else:
        trend_score = 2
        rationale.append("P/E Not Meaningful (Default Neutral): +2/5")

    return PillarScore(
        score=psg_score + trend_score,
        max_score=VALUATION_MAX,
        rationale=tuple(rationale),
    )


# --- Catalysts ---


def score_catalysts(data: FundamentalData, config: ScoringConfig = DEFAULT_CONFIG) -> PillarScore:
    """Catalysts pillar (max 10). Pricing power only moves the asymmetry term."""
    rationale: list[str] = []

    density_score = RATING_POINTS[data.catalyst_density]
    rationale.append(f"Catalyst Density ({_category_label(data.catalyst_density)}): +{density_score}/5")

    adjustment = PRICING_POWER_ADJUSTMENT[data.pricing_power]
    asym_score = min(max(RATING_POINTS[data.asymmetry_score] + adjustment, 0), 5)
    if adjustment > 0:
        rationale.append("Pricing Power Boost: +1")
    elif adjustment < 0:
        rationale.append("Pricing Power Penalty: -1")
    rationale.append(f"Asymmetry ({_category_label(data.asymmetry_score)}): +{asym_score}/5")

    return PillarScore(
        score=density_score + asym_score,
        max_score=CATALYSTS_MAX,
        rationale=tuple(rationale),
    )
