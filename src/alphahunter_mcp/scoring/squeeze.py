"""Short-squeeze setup classifier.

Only high-quality names qualify: heavy short interest on a weak business is
flagged as a trap, not a setup.
"""

from alphahunter_mcp.models import SqueezeSetup, SqueezeTier


def compute_squeeze_setup(
    multibagger_score: float,
    short_interest_pct: float,
    days_to_cover: float | None = None,
) -> SqueezeSetup:
    """
    Classify a squeeze setup. Rules are checked in priority order.

    Args:
        multibagger_score: MultiBaggerScore.total_score (0-100)
        short_interest_pct: Short interest as % of float
        days_to_cover: Short interest / average daily volume (default: 0)

    Returns:
        SqueezeSetup with tier and rationale
    """
    dtc = days_to_cover or 0.0

    if multibagger_score >= 75 and short_interest_pct >= 20 and dtc >= 5:
        return SqueezeSetup(
            tier=SqueezeTier.STRONG,
            rationale=(
                "Strong Squeeze Setup: High Quality (Score >= 75) + High Short Interest (>= 20%) "
                "+ High DTC (>= 5)",
            ),
        )
    if multibagger_score >= 65 and short_interest_pct >= 15 and dtc >= 3:
        return SqueezeSetup(
            tier=SqueezeTier.MODERATE,
            rationale=(
                "Moderate Squeeze Setup: Good Quality (Score >= 65) + Elevated Short Interest (>= 15%) "
                "+ Moderate DTC (>= 3)",
            ),
        )
    if multibagger_score >= 55 and short_interest_pct >= 10:
        return SqueezeSetup(
            tier=SqueezeTier.WATCH,
            rationale=("Watch Squeeze Setup: Decent Quality (Score >= 55) + Notable Short Interest (>= 10%)",),
        )

    if short_interest_pct > 10 and multibagger_score < 55:
        note = "High Short Interest but Low Quality: Warning (Not a squeeze candidate)"
    else:
        note = "No significant squeeze setup detected"
    return SqueezeSetup(tier=SqueezeTier.NONE, rationale=(note,))
