"""Tests for the technical score and squeeze classifier."""

import pytest

from alphahunter_mcp.models import PriceSnapshot, SqueezeTier
from alphahunter_mcp.scoring.squeeze import compute_squeeze_setup
from alphahunter_mcp.scoring.technical import (
    compute_technical_score,
    score_52_week_high,
    score_relative_strength,
    score_sma200,
)


def _history(price: float, year_ago: float, length: int = 260) -> tuple[float, ...]:
    """Newest-first history with ``year_ago`` at index 250."""
    history = [price] * length
    history[250] = year_ago
    return tuple(history)


class TestRelativeStrength:
    """Tests for the 12-month performance sub-score."""

    @pytest.mark.parametrize(
        "year_ago,expected",
        [(80.0, 10), (95.0, 7), (100.0, 3), (110.0, 0)],
    )
    def test_brackets(self, year_ago, expected) -> None:
        """>20% -> 10, >=5% -> 7, >=0% -> 3, else 0."""
        data = PriceSnapshot(price=100.0, history=_history(100.0, year_ago))
        score, _ = score_relative_strength(data)
        assert score == expected

    def test_needs_250_points(self) -> None:
        """Under 250 closes scores 0."""
        data = PriceSnapshot(price=100.0, history=(50.0,) * 249)
        assert score_relative_strength(data) == (0, "Insufficient history for RS check")

    def test_year_ago_index_clamped(self) -> None:
        """With exactly 250 closes the oldest one is the year-ago close."""
        history = (100.0,) * 249 + (50.0,)
        score, detail = score_relative_strength(PriceSnapshot(price=100.0, history=history))

        assert score == 10
        assert detail == "12-Month Performance: 100.0% (+10/10)"

    def test_zero_year_ago_close(self) -> None:
        """A zero close a year ago is invalid data, not a division error."""
        data = PriceSnapshot(price=100.0, history=_history(100.0, 0.0))
        assert score_relative_strength(data) == (0, "Invalid history data")


class TestSma200:
    """Tests for the 200-day average sub-score."""

    @pytest.mark.parametrize(
        "price,expected",
        [(101.0, 10), (96.0, 5), (95.5, 5), (90.0, 0)],
    )
    def test_brackets(self, price, expected) -> None:
        """Above -> 10, within 5% below -> 5, else 0."""
        score, _ = score_sma200(PriceSnapshot(price=price, sma200=100.0))
        assert score == expected

    def test_missing_sma(self) -> None:
        """Missing average scores 0 and says so."""
        assert score_sma200(PriceSnapshot(price=100.0)) == (0, "SMA200 unavailable")


class TestWeek52High:
    """Tests for 52-week high proximity."""

    @pytest.mark.parametrize(
        "price,expected",
        [(90.0, 5), (86.0, 5), (75.0, 3), (71.0, 3), (40.0, 1)],
    )
    def test_brackets(self, price, expected) -> None:
        """Within 15% -> 5, within 30% -> 3, else 1."""
        score, _ = score_52_week_high(PriceSnapshot(price=price, week52_high=100.0))
        assert score == expected

    def test_never_zero_when_known(self) -> None:
        """Even a collapsed price keeps 1 point."""
        score, _ = score_52_week_high(PriceSnapshot(price=1.0, week52_high=100.0))
        assert score == 1

    def test_missing_high(self) -> None:
        """A missing high scores 0."""
        assert score_52_week_high(PriceSnapshot(price=100.0)) == (0, "52-Week High unavailable")


class TestTechnicalScore:
    """Tests for the combined score."""

    def test_total_in_range(self) -> None:
        """Maximal inputs give exactly 25."""
        data = PriceSnapshot(price=150.0, history=_history(150.0, 100.0), sma200=120.0, week52_high=150.0)
        score = compute_technical_score(data)

        assert score.total_score == 25
        assert len(score.rationale) == 3

    def test_empty_snapshot(self) -> None:
        """No history and no averages gives 0 with a reason for each part."""
        score = compute_technical_score(PriceSnapshot(price=10.0))

        assert score.total_score == 0
        assert score.rationale == (
            "Insufficient history for RS check",
            "SMA200 unavailable",
            "52-Week High unavailable",
        )


class TestSqueezeSetup:
    """Tests for the squeeze classifier."""

    def test_strong(self) -> None:
        assert compute_squeeze_setup(80, 25, 6).tier == SqueezeTier.STRONG

    def test_moderate(self) -> None:
        assert compute_squeeze_setup(70, 18, 4).tier == SqueezeTier.MODERATE

    def test_strong_needs_days_to_cover(self) -> None:
        """Strong quality and short interest without DTC drops to Watch."""
        assert compute_squeeze_setup(80, 25).tier == SqueezeTier.WATCH

    def test_watch(self) -> None:
        assert compute_squeeze_setup(56, 10, 0).tier == SqueezeTier.WATCH

    def test_low_quality_trap(self) -> None:
        """Heavy short interest on a weak business is a warning, not a setup."""
        setup = compute_squeeze_setup(40, 30, 10)

        assert setup.tier == SqueezeTier.NONE
        assert setup.rationale == ("High Short Interest but Low Quality: Warning (Not a squeeze candidate)",)

    def test_none(self) -> None:
        setup = compute_squeeze_setup(90, 5, 1)

        assert setup.tier == SqueezeTier.NONE
        assert setup.rationale == ("No significant squeeze setup detected",)

    def test_priority_order(self) -> None:
        """The first matching rule wins."""
        setup = compute_squeeze_setup(100, 50, 50)
        assert setup.rationale[0].startswith("Strong Squeeze Setup")
