"""Numeric display helpers.

Amounts are commonly stored as integers with a fixed number of implied
decimal places ("precision 4" means 123456 represents 12.3456). Display
rounding is half-up, and the integer part gets thousands separators.
"""

from decimal import ROUND_HALF_UP, Decimal

SCALE = 4
SCALE_PRECISION_10 = 10


def format_commas(value: Decimal, places: int) -> str:
    """Round `value` half-up to `places` and insert thousands separators.

    Examples:
        >>> format_commas(Decimal("1234567.125"), 2)
        '1,234,567.13'
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return f"{rounded:,f}"


def _scaled(number: int, scale: int) -> Decimal:
    return Decimal(number).scaleb(-scale)


def decimal_display0(value: Decimal) -> str:
    return format_commas(value, 0)


def decimal_display2(value: Decimal) -> str:
    return format_commas(value, 2)


def decimal_display3(value: Decimal) -> str:
    return format_commas(value, 3)


def int_display0(number: int) -> str:
    return f"{number:,d}"


def scaled_display0(number: int) -> str:
    """Integer at precision 4, shown with no decimals."""
    return format_commas(_scaled(number, SCALE), 0)


def scaled_display2(number: int) -> str:
    """Integer at precision 4, shown with two decimals."""
    return format_commas(_scaled(number, SCALE), 2)


def scaled_display3(number: int) -> str:
    """Integer at precision 4, shown with three decimals."""
    return format_commas(_scaled(number, SCALE), 3)


def scaled_display2_from_precision10(number: int) -> str:
    """Integer at precision 10, shown with two decimals."""
    return format_commas(_scaled(number, SCALE_PRECISION_10), 2)


def float_display0(number: float) -> str:
    """Float at precision 4, shown with no decimals."""
    return f"{number / 10**SCALE:z,.0f}"


def float_display2(number: float) -> str:
    return f"{number / 10**SCALE:z,.2f}"


def float_display3(number: float) -> str:
    return f"{number / 10**SCALE:z,.3f}"


def format2(number: float) -> str:
    return f"{number:z.2f}"


def precision_formatter(value: int, precision: int) -> str:
    """Shift `value` right by `precision` digits and show that many decimals.

    Examples:
        >>> precision_formatter(12345, 2)
        '123.45'
    """
    return f"{value / 10**precision:z.{precision}f}"


def precision_formatter_float(value: float, precision: int) -> str:
    return f"{value / 10**precision:z.{precision}f}"


def plus_one(value: int) -> int:
    return value + 1


def zero_pad(value: int) -> str:
    return f"{value:02d}"


def plus_one_zero_pad(value: int) -> str:
    return zero_pad(value + 1)


def add(a: int, b: int) -> int:
    return a + b


def subtract(a: int, b: int) -> int:
    return a - b


def multiply(a: int, b: int) -> int:
    return a * b


def divide(a: int, b: int) -> float:
    return a / b


def calc_tab_index(index: int, num: int, base: int) -> int:
    return index * base + num


def int_to_time(value: int) -> str:
    """Render an HHMM integer as an HTML time value (835 -> 08:35)."""
    hours, minutes = divmod(value, 100)
    return f"{hours:02d}:{minutes:02d}"


HELPERS = {
    "decimal_display0": decimal_display0,
    "decimal_display2": decimal_display2,
    "decimal_display3": decimal_display3,
    "int_display0": int_display0,
    "scaled_display0": scaled_display0,
    "scaled_display2": scaled_display2,
    "scaled_display3": scaled_display3,
    "scaled_display2_from_precision10": scaled_display2_from_precision10,
    "float_display0": float_display0,
    "float_display2": float_display2,
    "float_display3": float_display3,
    "format2": format2,
    "precision_formatter": precision_formatter,
    "precision_formatter_float": precision_formatter_float,
    "plus_one": plus_one,
    "plus_one_zero_pad": plus_one_zero_pad,
    "zero_pad": zero_pad,
    "add": add,
    "subtract": subtract,
    "multiply": multiply,
    "divide": divide,
    "calc_tab_index": calc_tab_index,
    "int_to_time": int_to_time,
}
