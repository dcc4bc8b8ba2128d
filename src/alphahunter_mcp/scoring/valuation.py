"""PEG / PSG valuation score.

Growth is the denominator: high growth justifies higher multiples. PEG < 1.0
is the classic growth-at-a-reasonable-price bar; PSG is the fallback for
high-growth companies without meaningful earnings.
"""

import logging

logger = logging.getLogger(__name__)

PS_BUBBLE_CAP = 50
MIN_GROWTH = 0.05

# (upper bound exclusive, points), checked in order; last entry catches the rest
PEG_BRACKETS = ((0.5, 15), (1.0, 10), (1.5, 5), (2.0, 0), (3.0, -5), (float("inf"), -10))
PSG_BRACKETS = ((0.3, 10), (0.6, 5), (1.0, 0), (1.5, -5), (float("inf"), -10))


def _bracket(value: float, brackets: tuple[tuple[float, int], ...]) -> int:
    for upper, points in brackets:
        if value < upper:
            return points
    return brackets[-1][1]


def growth_rate_for_valuation(revenue_cagr_3y: float | None, eps_cagr_3y: float | None = None) -> float:
    """EPS CAGR when positive (the "E" in PEG), else revenue CAGR. Fractions."""
    if eps_cagr_3y is not None and eps_cagr_3y > 0:
        return eps_cagr_3y
    return revenue_cagr_3y or 0.0


def calc_valuation_score(
    pe: float | None,
    ps: float | None,
    revenue_cagr_3y: float | None,
    eps_cagr_3y: float | None = None,
) -> tuple[int, str]:
    """
    Score valuation relative to growth (-10 to +15).

    Args:
        pe: Trailing P/E (None or <= 0 when not meaningful)
        ps: Trailing P/S
        revenue_cagr_3y: 3-year revenue CAGR as a fraction (0.25 = 25%)
        eps_cagr_3y: 3-year EPS CAGR as a fraction

    Returns:
        (score, explanation)
    """
    if ps is not None and ps > PS_BUBBLE_CAP:
        return -10, f"Safety valve: P/S {ps:.1f} > {PS_BUBBLE_CAP}"

    growth = growth_rate_for_valuation(revenue_cagr_3y, eps_cagr_3y)
    if growth <= MIN_GROWTH:
        return -10, f"Growth {growth * 100:.1f}% <= 5%: multiples hard to justify"

    if pe is not None and pe > 0:
        peg = pe / (growth * 100)
        score = _bracket(peg, PEG_BRACKETS)
        logger.debug(f"[Valuation] PEG={peg:.2f} (PE={pe}, Growth={growth * 100:.1f}%) -> Score: {score}")
        return score, f"PEG {peg:.2f} (P/E {pe:.1f}, Growth {growth * 100:.1f}%)"

    if ps is not None and ps > 0:
        psg = ps / (growth * 100)
        score = _bracket(psg, PSG_BRACKETS)
        logger.debug(f"[Valuation] PSG={psg:.2f} (PS={ps}, Growth={growth * 100:.1f}%) -> Score: {score}")
        return score, f"PSG {psg:.2f} (P/S {ps:.1f}, Growth {growth * 100:.1f}%)"

    return 0, "No valid valuation metrics"
