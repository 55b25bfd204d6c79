"""Unit tests for string and markup helpers."""

import orjson
import pytest
from markupsafe import Markup

from viewrender.exceptions import InvalidArgumentError
from viewrender.formatting._text import (
    array_to_qs,
    dashes,
    first_initial,
    format_phone,
    make_dict,
    marshal,
    new_line_to_br,
    prep_phone,
    safe,
    to_lowercase,
    to_title_case,
    to_uppercase,
)


class TestFormatPhone:
    def test_formats_ten_digits(self) -> None:
        assert format_phone("2125551234") == "(212) 555-1234"

    @pytest.mark.parametrize("number", ["555-1234", "", "12125551234", "212555123"])
    def test_other_lengths_unchanged(self, number: str) -> None:
        assert format_phone(number) == number


class TestPrepPhone:
    def test_strips_punctuation(self) -> None:
        assert prep_phone("(212) 555-1234") == "2125551234"

    def test_strips_commas(self) -> None:
        assert prep_phone("212,555,1234") == "2125551234"


class TestSimpleText:
    def test_first_initial(self) -> None:
        assert first_initial("Ada") == "A"

    def test_first_initial_empty(self) -> None:
        assert first_initial("") == ""

    def test_case_helpers(self) -> None:
        assert to_uppercase("abc") == "ABC"
        assert to_lowercase("ABC") == "abc"

    def test_dashes_one_per_level_below_first(self) -> None:
        assert dashes(3) == "\u2014\u2014"
        assert dashes(1) == ""

    def test_dashes_below_one_is_empty(self) -> None:
        assert dashes(0) == ""


class TestToTitleCase:
    def test_capitalizes_each_word(self) -> None:
        assert to_title_case("hello wide world") == "Hello Wide World"

    def test_keeps_acronyms(self) -> None:
        assert to_title_case("the NASA report") == "The NASA Report"

    def test_preserves_whitespace(self) -> None:
        assert to_title_case("a\tb  c") == "A\tB  C"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("o'neil", "O'Neil"),
            ("jean-luc", "Jean-Luc"),
            ("(draft) memo", "(Draft) Memo"),
        ],
    )
    def test_words_start_after_punctuation(self, value: str, expected: str) -> None:
        assert to_title_case(value) == expected


class TestNewLineToBr:
    def test_converts_newlines(self) -> None:
        assert new_line_to_br("one\ntwo") == "one<br />two"

    def test_escapes_input(self) -> None:
        result = new_line_to_br("<b>\n&")

        assert result == "&lt;b&gt;<br />&amp;"
        assert isinstance(result, Markup)


class TestMarshal:
    def test_serializes_compact_json(self) -> None:
        assert marshal({"a": [1, 2], "b": None}) == '{"a":[1,2],"b":null}'

    def test_escapes_html_significant_characters(self) -> None:
        result = marshal({"a": "</script>&'"})

        assert all(char not in result for char in "<>&'")
        assert orjson.loads(result) == {"a": "</script>&'"}
        assert isinstance(result, Markup)


class TestArrayToQs:
    def test_repeats_key(self) -> None:
        assert array_to_qs("id", ["1", "2"]) == "&id=1&id=2"

    def test_empty(self) -> None:
        assert array_to_qs("id", []) == ""


class TestMakeDict:
    def test_pairs_arguments(self) -> None:
        assert make_dict("a", 1, "b", [2]) == {"a": 1, "b": [2]}

    def test_no_arguments(self) -> None:
        assert make_dict() == {}

    def test_odd_count_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="even number"):
            _ = make_dict("a", 1, "b")

    def test_non_string_key_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="must be strings"):
            _ = make_dict(1, "a")

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="even number"):
            _ = make_dict("a")


class TestSafe:
    def test_returns_markup(self) -> None:
        result = safe("<b>bold</b>")

        assert isinstance(result, Markup)
        assert str(result) == "<b>bold</b>"
