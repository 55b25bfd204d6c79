"""String and markup helpers."""

import re

import orjson
from markupsafe import Markup, escape

from viewrender.exceptions import InvalidArgumentError

PHONE_DIGITS = 10

_PHONE_PUNCTUATION = str.maketrans("", "", "() -,")
_WORD_START = re.compile(r"(?<!\w)\w")

# Same replacements Jinja2's |tojson applies, so output is safe inside <script>
_JSON_HTML_ESCAPES = {
    b"<": b"\\u003c",
    b">": b"\\u003e",
    b"&": b"\\u0026",
    b"'": b"\\u0027",
}


def format_phone(number: str) -> str:
    """Format a 10-digit phone number; any other length is returned unchanged.

    Examples:
        >>> format_phone("2125551234")
        '(212) 555-1234'
        >>> format_phone("555-1234")
        '555-1234'
    """
    if len(number) == PHONE_DIGITS:
        return f"({number[0:3]}) {number[3:6]}-{number[6:10]}"
    return number


def prep_phone(number: str) -> str:
    """Strip punctuation so the number can be used in a ``tel:`` link."""
    return number.translate(_PHONE_PUNCTUATION)


def first_initial(name: str) -> str:
    return name[0:1]


def dashes(level: int) -> str:
    """One em dash per level below the first (level 3 -> two dashes)."""
    return "\u2014" * max(level - 1, 0)


def to_uppercase(value: str) -> str:
    return value.upper()


def to_lowercase(value: str) -> str:
    return value.lower()


def to_title_case(value: str) -> str:
    """Capitalize the first letter of each word, leaving the rest untouched.

    Unlike ``str.title`` this does not lowercase the remainder of a word, so
    acronyms survive: ``"the NASA report"`` -> ``"The NASA Report"``.
    A word starts after any character that is not a letter, digit or
    underscore, so ``"o'neil"`` becomes ``"O'Neil"``.
    """
    return _WORD_START.sub(lambda m: m.group().upper(), value)


def new_line_to_br(value: str) -> Markup:
    """Escape `value` and turn newlines into ``<br />`` tags."""
    return escape(value).replace("\n", Markup("<br />"))


def marshal(value: object) -> Markup:
    """Serialize `value` as JSON that can be embedded in a page or script."""
    data = orjson.dumps(value)
    for raw, escaped in _JSON_HTML_ESCAPES.items():
        data = data.replace(raw, escaped)
    return Markup(data.decode())


def array_to_qs(key: str, values: list[str]) -> str:
    """Build ``&key=v1&key=v2`` from a list of values."""
    return "".join(f"&{key}={value}" for value in values)


def make_dict(*values: object) -> dict[str, object]:
    """Build a dict from alternating key/value arguments.

    Used from markup to pass several values into an included fragment:
    ``{% with args = make_dict("title", page.title, "rows", rows) %}``.

    Raises:
        InvalidArgumentError: If the argument count is odd or a key is not
            a string.
    """
    if len(values) % 2 != 0:
        msg = "make_dict requires an even number of arguments"
        raise InvalidArgumentError(msg)

    result: dict[str, object] = {}
    for key, value in zip(values[::2], values[1::2], strict=True):
        if not isinstance(key, str):
            msg = f"make_dict keys must be strings, got {type(key).__name__}"
            raise InvalidArgumentError(msg)
        result[key] = value
    return result


def safe(value: str) -> Markup:
    """Mark `value` as trusted HTML so autoescaping leaves it alone.

    This bypasses escaping entirely. Only pass strings whose content is
    already known to be safe, such as fragments rendered by the composer.
    It is the only bypass registered; there is no escape-named alias that
    skips escaping.
    """
    return Markup(value)  # noqa: S704


HELPERS = {
    "format_phone": format_phone,
    "prep_phone": prep_phone,
    "first_initial": first_initial,
    "dashes": dashes,
    "to_uppercase": to_uppercase,
    "to_lowercase": to_lowercase,
    "to_title_case": to_title_case,
    "new_line_to_br": new_line_to_br,
    "marshal": marshal,
    "array_to_qs": array_to_qs,
    "make_dict": make_dict,
    "safe": safe,
}
