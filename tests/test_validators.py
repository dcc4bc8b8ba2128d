"""Tests for payload coercion."""

import pytest

from alphahunter_mcp.models import Rating, TamPenetration
from alphahunter_mcp.utils.validators import (
    coerce_bool,
    coerce_float,
    coerce_optional_float,
    parse_choice,
)


class TestCoerceFloat:
    """Tests for coerce_float."""

    def test_numeric_strings(self) -> None:
        assert coerce_float("12.5") == 12.5
        assert coerce_float(3) == 3.0

    @pytest.mark.parametrize("value", [None, float("nan"), float("inf"), "nan"])
    def test_missing_uses_default(self, value) -> None:
        assert coerce_float(value, default=7.0) == 7.0

    def test_garbage_raises(self) -> None:
        """Non-numeric values name the field."""
        with pytest.raises(ValueError, match="Invalid number for 'roic'"):
            coerce_float("abc", field="roic")


class TestCoerceOptionalFloat:
    """Tests for coerce_optional_float."""

    def test_missing_stays_none(self) -> None:
        assert coerce_optional_float(None) is None
        assert coerce_optional_float(float("inf")) is None

    def test_value(self) -> None:
        assert coerce_optional_float("0.25") == 0.25

    def test_garbage_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid number"):
            coerce_optional_float([1, 2])


class TestCoerceBool:
    """Tests for coerce_bool."""

    @pytest.mark.parametrize("value", [True, 1, "true", "Yes", " y ", "1"])
    def test_truthy(self, value) -> None:
        assert coerce_bool(value) is True

    @pytest.mark.parametrize("value", [False, 0, None, "false", "No", "", "0"])
    def test_falsy(self, value) -> None:
        assert coerce_bool(value) is False

    def test_garbage_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid boolean for 'founder_led'"):
            coerce_bool("maybe", field="founder_led")


class TestParseChoice:
    """Tests for parse_choice."""

    def test_value_case_insensitive(self) -> None:
        assert parse_choice(Rating, "high", Rating.UNKNOWN) == Rating.HIGH
        assert parse_choice(Rating, " Medium ", Rating.UNKNOWN) == Rating.MEDIUM

    def test_member_name(self) -> None:
        """Member names match with dashes or spaces for underscores."""
        assert parse_choice(TamPenetration, "from-1-to-5", TamPenetration.UNKNOWN) == TamPenetration.FROM_1_TO_5

    def test_member_passthrough(self) -> None:
        assert parse_choice(Rating, Rating.LOW, Rating.UNKNOWN) == Rating.LOW

    @pytest.mark.parametrize("value", [None, "stellar", 5])
    def test_unrecognized_uses_default(self, value) -> None:
        assert parse_choice(Rating, value, Rating.UNKNOWN) == Rating.UNKNOWN
