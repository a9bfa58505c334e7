"""
Tests for the general purpose parsers
"""

import pytest

from inkcomb import sequence
from inkcomb.general import (
    letters, digits, whitespace, newline, ws0, ws1,
    comma, period, colon, semicolon, plus, minus,
    in_parentheses, in_square_brackets, in_curly_brackets, in_angle_brackets,
    integer, float_number, quoted_string, unescape,
)


class TestBasics:

    @pytest.mark.parametrize("parser, src, value", [
        (letters, "abC12", "abC"),
        (digits, "0123a", "0123"),
        (whitespace, " \t\n x", " \t\n "),
        (newline, "\r\nx", "\r\n"),
        (newline, "\nx", "\n"),
        (comma, ",", ","),
        (period, ".", "."),
        (colon, ":", ":"),
        (semicolon, ";", ";"),
        (plus, "+", "+"),
        (minus, "-", "-"),
    ])
    def test_match(self, parser, src, value):
        assert parser.parse(src) == value

    def test_names_in_messages(self):
        assert digits.run("x").message == "Expected digits but got 'x' instead."

    def test_ws0(self):
        assert sequence(ws0, letters).parse("abc") == ["abc"]
        assert sequence(ws0, letters).parse("  abc") == ["abc"]

    def test_ws1(self):
        assert not sequence(ws1, letters).run("abc")
        assert sequence(ws1, letters).parse(" abc") == ["abc"]


class TestBrackets:

    @pytest.mark.parametrize("factory, src", [
        (in_parentheses, "(x)"),
        (in_square_brackets, "[x]"),
        (in_curly_brackets, "{x}"),
        (in_angle_brackets, "<x>"),
    ])
    def test_center(self, factory, src):
        assert factory(letters).parse(src) == "x"


class TestNumbers:

    @pytest.mark.parametrize("src, value", [
        ("42", 42),
        ("-7", -7),
        ("012", 12),
        ("0x1F", 31),
        ("0b101", 5),
        ("0o17", 15),
        ("-0x10", -16),
    ])
    def test_integer(self, src, value):
        assert integer.parse(src) == value

    @pytest.mark.parametrize("src, value", [
        ("1.5", 1.5),
        ("-2e3", -2000.0),
        (".5", 0.5),
        ("1.5e-1", 0.15),
    ])
    def test_float(self, src, value):
        assert float_number.parse(src) == value

    def test_float_needs_fraction_or_exponent(self):
        assert not float_number.run("12")


class TestQuotedString:

    @pytest.mark.parametrize("src, value", [
        (r'"abc"', "abc"),
        (r"'abc'", "abc"),
        (r'"a\nb"', "a\nb"),
        (r'"\u0041"', "A"),
        (r'"say \"hi\""', 'say "hi"'),
        (r"'it\'s'", "it's"),
    ])
    def test_unescaped(self, src, value):
        assert quoted_string.parse(src) == value

    def test_unterminated(self):
        r = quoted_string.run('"abc')
        assert not r
        assert r.message.startswith("Expected quoted string")

    def test_unknown_escape(self):
        assert unescape(r"\q") == "q"
