"""Tests for shared financial arithmetic."""

import pytest

from alphahunter_mcp.utils.financial import calc_ttm, compute_cagr, safe_divide, yoy_growth


class TestSafeDivide:
    """Tests for safe_divide."""

    def test_basic(self) -> None:
        assert safe_divide(10, 4) == 2.5

    def test_zero_denominator(self) -> None:
        """Division by zero is 0, never inf."""
        assert safe_divide(10, 0) == 0.0

    def test_non_finite_result(self) -> None:
        """NaN inputs resolve to 0."""
        assert safe_divide(float("nan"), 2) == 0.0
        assert safe_divide(float("inf"), 2) == 0.0


class TestComputeCagr:
    """Tests for the shared CAGR helper."""

    def test_caps_lookback_at_12_quarters(self) -> None:
        """Points older than 12 quarters are ignored."""
        values = [2.0] + [1.0] * 11 + [1.0, 0.001]
        assert compute_cagr(values) == pytest.approx((2 ** (1 / 3) - 1) * 100)

    def test_partial_history(self) -> None:
        """Five points span one year."""
        assert compute_cagr([150.0, 140.0, 130.0, 120.0, 100.0]) == pytest.approx(50.0)

    def test_needs_five_points(self) -> None:
        assert compute_cagr([2.0, 1.0, 1.0, 1.0]) == 0.0

    @pytest.mark.parametrize("oldest", [0.0, -5.0])
    def test_non_positive_base(self, oldest) -> None:
        """A non-positive starting value has no meaningful CAGR."""
        assert compute_cagr([10.0, 1.0, 1.0, 1.0, oldest]) == 0.0


class TestYoyGrowth:
    """Tests for yoy_growth."""

    def test_basic(self) -> None:
        values = [120.0, 0, 0, 0, 100.0]
        assert yoy_growth(values, 0) == pytest.approx(20.0)

    def test_non_positive_year_ago(self) -> None:
        """Growth from a non-positive base is 0."""
        assert yoy_growth([120.0, 0, 0, 0, 0.0], 0) == 0.0


class TestCalcTtm:
    """Tests for calc_ttm."""

    def test_sums_newest_four(self) -> None:
        """Statements are sorted by date before the newest four are summed."""
        rows = [
            {"date": "2024-12-31", "revenue": 1},
            {"date": "2025-12-31", "revenue": 10},
            {"date": "2025-09-30", "revenue": 10},
            {"date": "2025-06-30", "revenue": 10},
            {"date": "2025-03-31", "revenue": 10},
        ]
        assert calc_ttm(rows, "revenue") == 40.0

    def test_objects_and_bad_values(self, clean_income) -> None:
        """Dataclass records work; non-numeric values count as zero."""
        assert calc_ttm(clean_income, "revenue") == 4000.0
        assert calc_ttm([{"date": "2025", "revenue": "n/a"}], "revenue") == 0.0

    def test_empty(self) -> None:
        assert calc_ttm([], "revenue") is None
