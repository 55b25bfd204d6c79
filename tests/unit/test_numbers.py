"""Unit tests for numeric display helpers."""

from decimal import Decimal

import pytest

from viewrender.formatting._numbers import (
    add,
    calc_tab_index,
    decimal_display0,
    decimal_display2,
    decimal_display3,
    divide,
    float_display0,
    float_display2,
    float_display3,
    format2,
    format_commas,
    int_display0,
    int_to_time,
    multiply,
    plus_one,
    plus_one_zero_pad,
    precision_formatter,
    precision_formatter_float,
    scaled_display0,
    scaled_display2,
    scaled_display2_from_precision10,
    scaled_display3,
    subtract,
    zero_pad,
)


class TestFormatCommas:
    def test_inserts_thousands_separators(self) -> None:
        assert format_commas(Decimal("1234567.125"), 2) == "1,234,567.13"

    def test_rounds_half_up(self) -> None:
        assert format_commas(Decimal("0.125"), 2) == "0.13"
        assert format_commas(Decimal("2.5"), 0) == "3"

    def test_negative_values(self) -> None:
        assert format_commas(Decimal("-1234.5"), 0) == "-1,235"

    def test_pads_to_places(self) -> None:
        assert format_commas(Decimal(7), 3) == "7.000"

    @pytest.mark.parametrize(
        ("value", "places", "expected"),
        [
            (Decimal("-0.001"), 2, "0.00"),
            (Decimal("-0.4"), 0, "0"),
            (Decimal("-0"), 3, "0.000"),
        ],
    )
    def test_rounded_negative_zero_has_no_sign(
        self, value: Decimal, places: int, expected: str
    ) -> None:
        assert format_commas(value, places) == expected


class TestDecimalDisplay:
    def test_decimal_display0(self) -> None:
        assert decimal_display0(Decimal("1234.5")) == "1,235"

    def test_decimal_display2(self) -> None:
        assert decimal_display2(Decimal("1234.565")) == "1,234.57"

    def test_decimal_display3(self) -> None:
        assert decimal_display3(Decimal("0.0005")) == "0.001"

    def test_int_display0(self) -> None:
        assert int_display0(1234567) == "1,234,567"
        assert int_display0(-1000) == "-1,000"


class TestScaledDisplay:
    def test_scaled_display2(self) -> None:
        assert scaled_display2(123456) == "12.35"

    def test_scaled_display2_rounds_half_up(self) -> None:
        assert scaled_display2(1250) == "0.13"

    def test_scaled_display0(self) -> None:
        assert scaled_display0(123456789) == "12,346"

    def test_scaled_display3_negative(self) -> None:
        assert scaled_display3(-123456) == "-12.346"

    def test_scaled_display_zero(self) -> None:
        assert scaled_display2(0) == "0.00"

    def test_small_negative_shows_unsigned_zero(self) -> None:
        assert scaled_display2(-1) == "0.00"
        assert scaled_display0(-1) == "0"
        assert decimal_display0(Decimal("-0.4")) == "0"

    def test_scaled_display2_from_precision10(self) -> None:
        assert scaled_display2_from_precision10(12345678901234) == "1,234.57"


class TestFloatDisplay:
    def test_float_display0(self) -> None:
        assert float_display0(12345678.0) == "1,235"

    def test_float_display2(self) -> None:
        assert float_display2(123456.0) == "12.35"

    def test_float_display3(self) -> None:
        assert float_display3(10000.0) == "1.000"

    def test_format2(self) -> None:
        assert format2(3.14159) == "3.14"

    def test_small_negative_shows_unsigned_zero(self) -> None:
        assert float_display2(-1.0) == "0.00"
        assert format2(-0.001) == "0.00"


class TestPrecisionFormatter:
    def test_shifts_and_shows_decimals(self) -> None:
        assert precision_formatter(12345, 2) == "123.45"

    def test_zero_precision(self) -> None:
        assert precision_formatter(42, 0) == "42"

    def test_float_variant(self) -> None:
        assert precision_formatter_float(12345.0, 3) == "12.345"


class TestArithmetic:
    def test_plus_one(self) -> None:
        assert plus_one(0) == 1

    def test_zero_pad(self) -> None:
        assert zero_pad(4) == "04"
        assert zero_pad(12) == "12"

    def test_plus_one_zero_pad(self) -> None:
        assert plus_one_zero_pad(4) == "05"

    @pytest.mark.parametrize(
        ("func", "expected"),
        [(add, 9), (subtract, 5), (multiply, 14)],
    )
    def test_binary_operations(self, func: object, expected: int) -> None:
        assert func(7, 2) == expected  # type: ignore[operator]

    def test_divide_returns_float(self) -> None:
        assert divide(7, 2) == 3.5

    def test_divide_by_zero_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            _ = divide(1, 0)

    def test_calc_tab_index(self) -> None:
        assert calc_tab_index(2, 3, 10) == 23


class TestIntToTime:
    def test_pads_hours_and_minutes(self) -> None:
        assert int_to_time(835) == "08:35"

    def test_afternoon(self) -> None:
        assert int_to_time(1705) == "17:05"

    def test_midnight(self) -> None:
        assert int_to_time(0) == "00:00"
