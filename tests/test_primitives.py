"""
Tests for the primitive parsers
"""

import re

import pytest

from inkcomb import literal, regex, end_of_input, ParseState, ErrorKind


class TestLiteral:
    """literal() matches exact text at the cursor"""

    @pytest.mark.parametrize("text, rest", [
        ("abc", "def"),
        ("func", ""),
        ("(", "42)"),
        ("", "anything"),
    ])
    def test_consumes_exactly_the_literal(self, text, rest):
        r = literal(text).run(text + rest)
        assert r
        assert r.value == text
        assert r.end == len(text)

    def test_mismatch_names_literal_and_preview(self):
        r = literal("def").run("class Foo(Base): pass")
        assert not r
        assert r.kind is ErrorKind.LITERAL_MISMATCH
        assert r.position == 0
        assert r.message == "Expected \"def\" but got 'class Foo(' instead."

    def test_mismatch_at_end_of_input(self):
        r = literal("x").run("")
        assert not r
        assert "end of input" in r.message

    def test_matches_from_cursor(self):
        assert (literal("a") & literal("b")).run("ab").value == ["a", "b"]

    def test_default_name_is_quoted(self):
        assert literal("func").name == '"func"'


class TestRegex:
    """regex() is anchored at the cursor"""

    def test_match(self):
        r = regex(r"[0-9]+").run("123abc")
        assert r.value == "123"
        assert r.end == 3

    def test_compiled_pattern(self):
        assert regex(re.compile(r"[a-z]+")).run("abc1").value == "abc"

    def test_flags(self):
        assert regex("abc", re.IGNORECASE).run("ABC").value == "ABC"

    def test_does_not_search_ahead(self):
        r = regex(r"[0-9]+").run("abc123")
        assert not r
        assert r.kind is ErrorKind.PATTERN_MISMATCH
        assert r.position == 0

    def test_anchored_mid_input(self):
        r = (literal("a") & regex(r"[0-9]+")).run("ab12")
        assert not r
        assert r.position == 1

    def test_caret_matches_at_cursor(self):
        assert (literal("a") & regex(r"^[0-9]+")).run("a12").value == ["a", "12"]

    def test_start_anchor_matches_at_cursor(self):
        r = (literal("a") & regex(r"\A[0-9]+")).run("a12")
        assert r.value == ["a", "12"]
        assert r.end == 3

    def test_caret_does_not_search_ahead(self):
        r = (literal("a") & regex(r"^[0-9]+")).run("ab12")
        assert not r
        assert r.position == 1

    def test_flags_with_compiled_pattern(self):
        with pytest.raises(ValueError):
            regex(re.compile("a"), re.IGNORECASE)

    def test_name(self):
        assert regex(r"[0-9]+").name == "regex([0-9]+)"


class TestEndOfInput:
    """end_of_input is zero-width and suppressed"""

    def test_empty_input(self):
        r = end_of_input.run("")
        assert r
        assert r.end == 0

    def test_trailing_input(self):
        r = end_of_input.run("abc")
        assert not r
        assert r.kind is ErrorKind.INCOMPLETE_CONSUMPTION
        assert "'abc'" in r.message

    def test_result_is_suppressed(self):
        assert (literal("ab") & end_of_input).run("ab").value == ["ab"]

    def test_suppress_flag(self):
        assert end_of_input.suppress_result


class TestErrorShortCircuit:
    """Failed states pass through every primitive unchanged"""

    @pytest.fixture
    def failed(self):
        return ParseState("abc").fail("boom", ErrorKind.LITERAL_MISMATCH)

    def test_literal(self, failed):
        assert literal("abc")(failed) is failed

    def test_regex(self, failed):
        assert regex(".*")(failed) is failed

    def test_end_of_input(self, failed):
        assert end_of_input(failed) is failed
