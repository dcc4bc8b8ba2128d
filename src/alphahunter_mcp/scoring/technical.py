"""Technical score (0-25): is the stock in a constructive trend?"""

from alphahunter_mcp.models import PriceSnapshot, TechnicalScore

RS_MIN_HISTORY = 250
YEAR_AGO_INDEX = 250


def score_relative_strength(data: PriceSnapshot) -> tuple[int, str]:
    """
    12-month performance sub-score (0-10).

    Absolute performance is the proxy for relative strength. Needs about a
    year of daily closes (newest first).
    """
    if len(data.history) < RS_MIN_HISTORY:
        return 0, "Insufficient history for RS check"

    one_year_ago = data.history[min(len(data.history) - 1, YEAR_AGO_INDEX)]
    if one_year_ago == 0:
        return 0, "Invalid history data"

    perf = (data.price - one_year_ago) / one_year_ago * 100
    if perf > 20:
        score = 10
    elif perf >= 5:
        score = 7
    elif perf >= 0:
        score = 3
    else:
        score = 0
    return score, f"12-Month Performance: {perf:.1f}% (+{score}/10)"


def score_sma200(data: PriceSnapshot) -> tuple[int, str]:
    """Price vs 200-day average sub-score (0-10)."""
    if not data.sma200:
        return 0, "SMA200 unavailable"

    diff = (data.price - data.sma200) / data.sma200 * 100
    if data.price > data.sma200:
        score = 10
    elif diff >= -5:
        score = 5
    else:
        score = 0
    sign = "+" if diff > 0 else ""
    return score, f"Price vs 200-DMA: {sign}{diff:.1f}% (+{score}/10)"


def score_52_week_high(data: PriceSnapshot) -> tuple[int, str]:
    """Proximity to the 52-week high (0-5). Never 0 when the high is known."""
    if not data.week52_high:
        return 0, "52-Week High unavailable"

    below_high = (data.week52_high - data.price) / data.week52_high * 100
    if below_high <= 15:
        score = 5
    elif below_high <= 30:
        score = 3
    else:
        score = 1
    return score, f"Below 52W High: {below_high:.1f}% (+{score}/5)"


def compute_technical_score(data: PriceSnapshot) -> TechnicalScore:
    rs_score, rs_detail = score_relative_strength(data)
    sma_score, sma_detail = score_sma200(data)
    high_score, high_detail = score_52_week_high(data)

    return TechnicalScore(
        total_score=rs_score + sma_score + high_score,
        relative_strength_score=rs_score,
        sma200_score=sma_score,
        week52_high_score=high_score,
        rationale=(rs_detail, sma_detail, high_detail),
    )
