"""
Unit Tests for ScaledDecimal Parsing and Canonical Formatting

Tests the scaled-integer representation:
- Grammar accepted and rejected by parse()
- Truncation of fractional digits past the 7th
- Scale alignment without information loss
- Canonical formatting (no trailing zeros, no trailing point, no -0)
"""

import pytest
import os
from decimal import Decimal

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from amount_engine.decimal_engine import compare
from amount_engine.errors import DecimalErrorCode, InvalidDecimalFormat
from amount_engine.scaled_decimal import (
    MAX_SCALE,
    ScaledDecimal,
    align,
    format_scaled,
    parse,
)


# =============================================================================
# Test Parsing
# =============================================================================

class TestParse:
    """Test parse() on valid input."""

    def test_integer(self) -> None:
        assert parse("100") == ScaledDecimal(100, 0)

    def test_fraction(self) -> None:
        assert parse("123.456") == ScaledDecimal(123456, 3)

    def test_leading_zero_fraction(self) -> None:
        assert parse("0.001") == ScaledDecimal(1, 3)

    def test_negative(self) -> None:
        assert parse("-0.5") == ScaledDecimal(-5, 1)
        assert parse("-12.75") == ScaledDecimal(-1275, 2)

    def test_trailing_zeros_keep_scale(self) -> None:
        """Parsing keeps the written scale; only formatting strips zeros."""
        assert parse("5.50") == ScaledDecimal(550, 2)

    def test_whitespace_is_trimmed(self) -> None:
        assert parse("  123.456  ") == ScaledDecimal(123456, 3)
        assert parse("\t7\n") == ScaledDecimal(7, 0)

    def test_scale_capped_at_seven_by_truncation(self) -> None:
        """Digits past the 7th are dropped, not rounded."""
        assert MAX_SCALE == 7
        assert parse("1.123456789") == ScaledDecimal(11234567, 7)
        assert parse("0.99999999") == ScaledDecimal(9999999, 7)
        assert parse("-0.00000009") == ScaledDecimal(0, 7)

    def test_large_values_keep_every_digit(self) -> None:
        parsed = parse("123456789012345678901234.5")
        assert parsed.magnitude == 1234567890123456789012345
        assert parsed.scale == 1

    def test_int_input(self) -> None:
        assert parse(42) == ScaledDecimal(42, 0)
        assert parse(-3) == ScaledDecimal(-3, 0)

    def test_decimal_input_uses_plain_notation(self) -> None:
        assert parse(Decimal("1E+2")) == ScaledDecimal(100, 0)
        assert parse(Decimal("0.25")) == ScaledDecimal(25, 2)

    def test_float_input(self) -> None:
        assert parse(0.1) == ScaledDecimal(1, 1)

    def test_scaled_decimal_passthrough(self) -> None:
        value = ScaledDecimal(15, 1)
        assert parse(value) is value


class TestParseRejects:
    """Test parse() failures raise InvalidDecimalFormat (AMT-DEC-001)."""

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "abc",
        "not-a-number",
        "1.2.3",
        "12.34.56",
        ".",
        "-",
        ".5",
        "5.",
        "-.5",
        "+1",
        "1e5",
        "1,000",
        "1 000",
        "--1",
        "١٢",  # non-ASCII digits
    ])
    def test_invalid_text(self, text: str) -> None:
        with pytest.raises(InvalidDecimalFormat):
            parse(text)

    def test_error_carries_code(self) -> None:
        with pytest.raises(InvalidDecimalFormat) as exc_info:
            parse("abc")
        assert exc_info.value.error_code == DecimalErrorCode.INVALID_FORMAT
        assert str(exc_info.value).startswith("[AMT-DEC-001]")

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse("abc")

    @pytest.mark.parametrize("value", [None, True, [1], 1.5e20, Decimal("NaN")])
    def test_unsupported_inputs(self, value) -> None:
        with pytest.raises(InvalidDecimalFormat):
            parse(value)


# =============================================================================
# Test ScaledDecimal
# =============================================================================

class TestScaledDecimal:
    """Test the value object itself."""

    def test_is_immutable(self) -> None:
        value = ScaledDecimal(1, 0)
        with pytest.raises(AttributeError):
            value.magnitude = 2

    def test_negative_scale_rejected(self) -> None:
        with pytest.raises(ValueError):
            ScaledDecimal(1, -1)

    def test_non_int_magnitude_rejected(self) -> None:
        with pytest.raises(TypeError):
            ScaledDecimal(1.5, 0)

    def test_rescale_up(self) -> None:
        assert ScaledDecimal(15, 1).rescale(7) == ScaledDecimal(15000000, 7)

    def test_rescale_down_refused(self) -> None:
        with pytest.raises(ValueError):
            ScaledDecimal(15, 1).rescale(0)

    def test_equality_is_by_representation(self) -> None:
        assert ScaledDecimal(550, 2) != ScaledDecimal(55, 1)
        assert compare(ScaledDecimal(550, 2), ScaledDecimal(55, 1)) == 0
        ma, mb, _ = align(ScaledDecimal(550, 2), ScaledDecimal(55, 1))
        assert ma == mb

    def test_str_is_canonical(self) -> None:
        assert str(ScaledDecimal(1230, 3)) == "1.23"

    def test_zero_checks(self) -> None:
        assert ScaledDecimal(0, 5).is_zero()
        assert not ScaledDecimal(-1, 5).is_zero()
        assert ScaledDecimal(-1, 5).is_negative()


# =============================================================================
# Test Alignment
# =============================================================================

class TestAlign:
    """Test scale alignment."""

    def test_aligns_to_max_scale(self) -> None:
        assert align(ScaledDecimal(55, 1), ScaledDecimal(550, 2)) == (550, 550, 2)

    def test_no_truncation(self) -> None:
        ma, mb, scale = align(ScaledDecimal(1, 0), ScaledDecimal(1, 7))
        assert (ma, mb, scale) == (10000000, 1, 7)


# =============================================================================
# Test Canonical Formatting
# =============================================================================

class TestFormatScaled:
    """Test canonical formatting."""

    def test_scale_zero(self) -> None:
        assert format_scaled(100, 0) == "100"
        assert format_scaled(-7, 0) == "-7"
        assert format_scaled(0, 0) == "0"

    def test_strips_trailing_zeros(self) -> None:
        assert format_scaled(1230, 3) == "1.23"

    def test_whole_number_has_no_point(self) -> None:
        assert format_scaled(1000, 3) == "1"
        assert format_scaled(1015000000, 7) == "101.5"

    def test_pads_leading_fraction_zeros(self) -> None:
        assert format_scaled(1, 7) == "0.0000001"
        assert format_scaled(105, 2) == "1.05"

    def test_negative_fraction_sign_on_whole(self) -> None:
        assert format_scaled(-5, 1) == "-0.5"
        assert format_scaled(-105, 2) == "-1.05"

    def test_zero_never_negative(self) -> None:
        assert format_scaled(0, 7) == "0"

    def test_negative_scale_rejected(self) -> None:
        with pytest.raises(ValueError):
            format_scaled(1, -1)
