r"""Formatting helpers injected into every template.

Basic usage:
    from viewrender.formatting import build_registry

    registry = build_registry(timezone="America/New_York")
    registry["format_phone"]("2125551234")  # "(212) 555-1234"
    registry["scaled_display2"](123456)  # "12.35"

In markup every helper is available both as a filter and as a function:
    {{ order.total|scaled_display2 }}
    {{ format_date(order.placed, "UTC", "YYYY-MM-DD") }}
"""

from ._dates import Clock, DateFormatters, utc_now
from ._numbers import format_commas
from ._registry import FormatterRegistry, Helper, build_registry
from ._text import format_phone, make_dict, marshal, safe
from ._timezone import DEFAULT_TIMEZONE, DisplayTimezone, load_timezone

__all__ = [
    "DEFAULT_TIMEZONE",
    "Clock",
    "DateFormatters",
    "DisplayTimezone",
    "FormatterRegistry",
    "Helper",
    "build_registry",
    "format_commas",
    "format_phone",
    "load_timezone",
    "make_dict",
    "marshal",
    "safe",
    "utc_now",
]
