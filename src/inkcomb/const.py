"""
General use constants.
"""

from __future__ import annotations
from typing import Final

PREVIEW_LENGTH: Final[int] = 10
"""How many characters of the remaining input failure messages show."""
EXCERPT_WIDTH: Final[int] = 20
"""How many characters around the error position `ParseError` shows on each side."""
DEFAULT_NAME: Final[str] = "parser"

LETTERS: Final[str] = r"[A-Za-z]+"
DIGITS: Final[str] = r"[0-9]+"
WHITESPACE: Final[str] = r"\s+"
NEWLINE: Final[str] = r"\r\n|\n|\r"
