"""
General purpose parsers, built out of the primitives.
"""

from __future__ import annotations
from typing import Final

import re

import inkcomb.const as const
from inkcomb.main import Parser, regex, literal, ignore, between

letters: Final[Parser] = regex(const.LETTERS, name="letters")
digits: Final[Parser] = regex(const.DIGITS, name="digits")
whitespace: Final[Parser] = regex(const.WHITESPACE, name="whitespace")
newline: Final[Parser] = regex(const.NEWLINE, name="newline")

ws0: Final[Parser] = ignore(regex(r"\s*", name="optional whitespace"))
"""Zero or more whitespaces. The result is ignored."""
ws1: Final[Parser] = ignore(whitespace)
"""One or more whitespaces. The result is ignored."""

comma: Final[Parser] = literal(",")
period: Final[Parser] = literal(".")
colon: Final[Parser] = literal(":")
semicolon: Final[Parser] = literal(";")
plus: Final[Parser] = literal("+")
minus: Final[Parser] = literal("-")

in_parentheses = between("(", ")")
in_square_brackets = between("[", "]")
in_curly_brackets = between("{", "}")
in_angle_brackets = between("<", ">")


# numbers

def _to_int(text: str) -> int:
    negative = text.startswith("-")
    body = text[1:] if negative else text
    if body[:2].lower() in ("0b", "0o", "0x"):
        value = int(body, base=0)
    else:
        value = int(body)
    return -value if negative else value

integer: Final[Parser] = regex(
    r"-?(?:0[bB][01]+|0[oO][0-7]+|0[xX][0-9a-fA-F]+|[0-9]+)",
    name="integer",
).map(_to_int)
"""
An integer, as an `int`.

The base is interpreted from the prefix:
- `0b`: Binary
- `0o`: Octal
- `0x`: Hexadecimal
"""

float_number: Final[Parser] = regex(
    r"-?(?:[0-9]+(?:\.[0-9]+)?[eE][-+]?[0-9]+|[0-9]+\.[0-9]+|\.[0-9]+(?:[eE][-+]?[0-9]+)?)",
    name="float",
).map(float)
"""A number with a fractional part and/or an exponent, as a `float`."""


# quoted string

GENERAL_ESCAPES: Final[dict[str, str]] = {
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
}

_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)

def unescape(data: str) -> str:
    """Resolves backslash escapes. Unknown escapes are replaced by the escaped character."""
    def replace(m: re.Match[str]) -> str:
        sequence = m.group(1)
        if len(sequence) == 5:
            return chr(int(sequence[1:], base=16))
        return GENERAL_ESCAPES.get(sequence, sequence)
    return _ESCAPE.sub(replace, data)

quoted_string: Final[Parser] = regex(
    r'"(?:[^"\\]|\\.)*"' r"|'(?:[^'\\]|\\.)*'",
    re.DOTALL,
    name="quoted string",
).map(lambda s: unescape(s[1:-1]))
"""A single or double quoted string with backslash escapes. The result is the unescaped content."""
