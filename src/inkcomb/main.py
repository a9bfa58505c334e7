"""
The implementations of the main classes and the combinators.
"""

from __future__ import annotations
from typing import Any, Self, Literal, Final, Callable, Generic, TypeVar, Union
from collections.abc import Sequence
from dataclasses import dataclass, field

import enum
import logging
import re

import inkcomb.const as const


log = logging.getLogger("inkcomb")

debug: bool = False
"""
If `True` when a parser is constructed, the parser logs every attempt at the DEBUG level.

```
import logging
logging.basicConfig(level=logging.DEBUG)
import inkcomb.main
inkcomb.main.debug = True
```

Parsers that were already built (such as the ones in `inkcomb.general`) stay silent.
"""


_T = TypeVar("_T")


def line_of(src: str, pos: int) -> int:
    """1-based line number of the position."""
    return src.count("\n", 0, pos) + 1

def column_of(src: str, pos: int) -> int:
    """1-based column number of the position."""
    return pos - src.rfind("\n", 0, pos) # magically works even when it returns -1

def preview(src: str, pos: int) -> str:
    """What the failure messages show of the remaining input."""
    found = src[pos : pos + const.PREVIEW_LENGTH]
    return repr(found) if found else "end of input"


class Disposition(enum.Enum):
    """How an aggregating combinator treats a successful result."""
    KEEP = enum.auto()
    """Add the result to the list."""
    IGNORE = enum.auto()
    """Leave the result out."""
    SPLICE = enum.auto()
    """The result is a list, add its items one by one. Only produced by `&`."""

class ErrorKind(enum.Enum):
    LITERAL_MISMATCH = enum.auto()
    PATTERN_MISMATCH = enum.auto()
    ALTERNATIVES_EXHAUSTED = enum.auto()
    REPETITION_UNSATISFIED = enum.auto()
    INCOMPLETE_CONSUMPTION = enum.auto()


@dataclass(frozen=True, slots=True)
class ParseState:
    """
    An immutable snapshot of the parsing progress.

    Every parser takes one of these and returns a new one.

    Once `error` is set, the cursor and the result stay where the failure happened.
    """

    input: str = field(repr=False)
    """The string that's being parsed."""
    cursor: int = 0
    """How many characters have been consumed."""
    result: Any = None
    """The value produced by the last successful parser."""
    error: str | None = None
    """The failure message, or `None` if the state is successful."""
    kind: ErrorKind | None = None
    disposition: Disposition = Disposition.KEEP
    """Set by the parser that produced this state. Tells aggregators what to do with `result`."""

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def at_end(self) -> bool:
        return self.cursor == len(self.input)

    @property
    def line_number(self) -> int:
        return line_of(self.input, self.cursor)

    @property
    def column(self) -> int:
        return column_of(self.input, self.cursor)

    def advance(self, cursor: int, result: Any) -> ParseState:
        """A successful state at `cursor` holding `result`. Also clears the error and the disposition."""
        return ParseState(self.input, cursor, result)

    def with_result(self, result: Any) -> ParseState:
        """A successful state at the same position holding `result`."""
        return ParseState(self.input, self.cursor, result)

    def with_disposition(self, disposition: Disposition) -> ParseState:
        return ParseState(self.input, self.cursor, self.result, self.error, self.kind, disposition)

    def fail(self, msg: str, kind: ErrorKind) -> ParseState:
        """A failed state at the same position."""
        return ParseState(self.input, self.cursor, self.result, msg, kind)


@dataclass(frozen=True)
class Located(Generic[_T]):
    """
    A result value tagged with the line it was parsed on.

    `Parser.map()` fills in `line` when the mapping function returns a `Located` without one.

    ```
    number = digits.map(lambda s: Located(int(s)))
    number.parse("\\n\\n42")   # Located(value=42, line=3)
    ```
    """
    value: _T
    line: int | None = None

def _locate(value: Any, state: ParseState) -> Any:
    if isinstance(value, Located) and value.line is None:
        return Located(value.value, state.line_number)
    return value


def describe_position(src: str, pos: int) -> str:
    """Position, line, column and an excerpt of the line with a caret under the position."""
    pos = min(pos, len(src))
    # should still work with CRLF
    line = line_of(src, pos)
    column = column_of(src, pos)
    note = [f"At position {pos} (line {line}, column {column})"]

    # line_of() only counts "\n", so split on the same
    lines = src.split("\n")
    if len(lines) > line-1:
        line_str = lines[line-1].removesuffix("\r")
        index = column-1
        width = const.EXCERPT_WIDTH
        if len(line_str) >= index:
            if index <= width:
                note.append(f"{line_str[:width*2]}\n{' '*index}^")
            else:
                note.append(f"{line_str[index-width:index+width]}\n{' '*width}^")
    return "\n".join(note)

class ParseError(Exception):
    """
    The exception that's raised when the input doesn't match. (By `Parser.parse()` and `Failure.error()`)

    The combinators themselves never raise it, failures are passed along as `ParseState`s.
    """

    def __init__(self, src: str, pos: int, msg: str | None = None, kind: ErrorKind | None = None) -> None:
        """
        `src`: The string that was being parsed.
        `pos`: The position of the error.
        `msg`: The reason for the error.
        `kind`: The category of the error.
        """
        if msg is None:
            super().__init__()
        else:
            super().__init__(msg)
        self.src: str = src
        self.pos: int = pos
        self.msg: str | None = msg
        self.kind: ErrorKind | None = kind
        self.add_note(describe_position(src, pos))


@dataclass(frozen=True)
class Success(Generic[_T]):
    """
    Returned from `Parser.run()` when the parser matched.

    ```
    r = parser.run("...")
    if r:
        ... # `r` is a `Success`, `r.value` is the result
    else:
        ... # `r` is a `Failure`
    ```
    """
    value: _T
    end: int
    """The cursor position after the match."""

    @property
    def succeeded(self) -> Literal[True]:
        return True

    def __bool__(self) -> Literal[True]:
        return True

@dataclass(frozen=True)
class Failure:
    """
    Returned from `Parser.run()` when the parser didn't match. Can be converted into a `ParseError`.
    """
    message: str
    position: int
    kind: ErrorKind | None
    src: str = field(repr=False)

    @property
    def succeeded(self) -> Literal[False]:
        return False

    @property
    def line(self) -> int:
        return line_of(self.src, self.position)

    @property
    def column(self) -> int:
        return column_of(self.src, self.position)

    def error(self) -> ParseError:
        """Converts this to a ParseError."""
        return ParseError(self.src, self.position, self.message, self.kind)

    def __bool__(self) -> Literal[False]:
        return False

ParseResult = Union[Success[Any], Failure]


Transform = Callable[[ParseState], ParseState]

def _stamped(transform: Transform, disposition: Disposition) -> Transform:
    def stamped(state: ParseState) -> ParseState:
        next_state = transform(state)
        if next_state.is_error:
            return next_state
        return next_state.with_disposition(disposition)
    return stamped

def _traced(transform: Transform, name: str) -> Transform:
    def traced(state: ParseState) -> ParseState:
        log.debug("trying %s at %d", name, state.cursor)
        next_state = transform(state)
        if next_state.is_error:
            log.debug("failed %s at %d: %s", name, next_state.cursor, next_state.error)
        else:
            log.debug("matched %s, %d..%d", name, state.cursor, next_state.cursor)
        return next_state
    return traced


class Parser:
    """
    A parser. Wraps a function that takes a `ParseState` and returns the next one.

    Build them with the primitives and the combinators, then run them:
    ```
    number = regex(r"[0-9]+").map(int)
    numbers = number / ","

    r = numbers.run("1,2,3")
    if r:
        r.value     # [1, 2, 3]
    else:
        r.message
    ```

    Operators:
    - `a & b`: `a` followed by `b`. Chains flatten: `a & b & c` results in `[a, b, c]`.
    - `a | b`: `a`, or `b` if `a` fails.
    - `a / sep`: `sep_by(sep)(a)`
    - `a >> f`: `a.map(f)`
    - `-a`: `ignore(a)`
    - `+a`: `many(a)` (There's no operator for `many1()`, `++a` would be `many(many(a))`.)

    Strings and compiled regexes are accepted wherever a parser is expected.

    Parsers never change after construction. (Apart from `Forward.define()`, which can only be done once.) The same parser can be run any number of times, from any number of threads.
    """

    __slots__ = ("_source", "transform", "name", "suppress_result", "splice_result")

    def __init__(
        self,
        transform: Transform,
        name: str = const.DEFAULT_NAME,
        *,
        suppress_result: bool = False,
        splice_result: bool = False,
    ) -> None:
        """
        `transform`: The state transform function. Doesn't need to handle failed states, `__call__()` takes care of them.
        `name`: Used in failure messages.
        `suppress_result`: Successful results are left out by the aggregating combinators.
        `splice_result`: Successful results are lists that `&` flattens into its own list.
        """
        self._source: Final[Transform] = transform
        self.name: Final[str] = name
        self.suppress_result: Final[bool] = suppress_result
        self.splice_result: Final[bool] = splice_result

        if suppress_result:
            transform = _stamped(transform, Disposition.IGNORE)
        elif splice_result:
            transform = _stamped(transform, Disposition.SPLICE)
        if debug:
            transform = _traced(transform, name)
        self.transform: Final[Transform] = transform

    def __call__(self, state: ParseState) -> ParseState:
        """Applies the parser. Failed states are returned as-is."""
        if state.is_error:
            return state
        return self.transform(state)

    def run_state(self, src: str) -> ParseState:
        """Runs the parser from the start of the string and returns the final state."""
        return self(ParseState(src))

    def run(self, src: str) -> ParseResult:
        """
        Runs the parser from the start of the string.

        Doesn't require the whole input to be consumed. (Use `all_of()` or `& end_of_input` for that.)
        """
        state = self.run_state(src)
        if state.error is not None:
            log.debug("%s failed at %d: %s", self.name, state.cursor, state.error)
            return Failure(state.error, state.cursor, state.kind, src)
        return Success(state.result, state.cursor)

    def parse(self, src: str) -> Any:
        """Runs the parser and returns the result. Raises `ParseError` if it fails."""
        r = self.run(src)
        if not r:
            raise r.error()
        return r.value

    def named(self, name: str) -> Parser:
        """Creates a copy of this parser with the provided name."""
        return Parser(self._source, name, suppress_result=self.suppress_result, splice_result=self.splice_result)

    def map(self, f: Callable[[Any], Any]) -> Parser:
        """
        Replaces the result with `f(result)` if the parser succeeds.

        If `f` returns a `Located` without a line, the line of the match end is filled in.
        """
        def transform(state: ParseState) -> ParseState:
            next_state = self(state)
            if next_state.is_error:
                return next_state
            return next_state.with_result(_locate(f(next_state.result), next_state))
        return Parser(transform, self.name)

    def map_with_line(self, f: Callable[[Any, int], Any]) -> Parser:
        """Like `map()`, but `f` also gets the line number of the match end."""
        def transform(state: ParseState) -> ParseState:
            next_state = self(state)
            if next_state.is_error:
                return next_state
            return next_state.with_result(_locate(f(next_state.result, next_state.line_number), next_state))
        return Parser(transform, self.name)

    def located(self) -> Parser:
        """Wraps the result in a `Located`."""
        return self.map(Located)

    def map_error(self, f: Callable[[str, int], Any]) -> Parser:
        """
        Recovers from failure.

        If the parser fails, succeeds instead at the failure position, with `f(message, line_number)` as the result.

        ```
        missing = statement.map_error(lambda msg, line: MissingNode(msg, line))
        ```
        """
        def transform(state: ParseState) -> ParseState:
            next_state = self(state)
            if next_state.error is None:
                return next_state
            value = f(next_state.error, next_state.line_number)
            return next_state.advance(next_state.cursor, _locate(value, next_state))
        return Parser(transform, self.name)

    def chain(self, f: Callable[[Any], ParserLike]) -> Parser:
        """
        If the parser succeeds, runs the parser returned by `f(result)` from there.

        ```
        # "3:abc" style length prefixed strings
        sized = (digits & -colon).chain(lambda r: regex(f".{{{int(r[0])}}}"))
        ```
        """
        def transform(state: ParseState) -> ParseState:
            next_state = self(state)
            if next_state.is_error:
                return next_state
            return to_parser(f(next_state.result))(next_state)
        return Parser(transform, self.name)

    def ignore(self) -> Parser:
        """Same as `ignore(self)`"""
        return ignore(self)

    def __and__(self, other: ParserLike) -> Parser:
        if not is_parser_like(other):
            return NotImplemented
        return concat(self, other)

    def __rand__(self, other: ParserLike) -> Parser:
        if not is_parser_like(other):
            return NotImplemented
        return concat(other, self)

    def __or__(self, other: ParserLike) -> Parser:
        if not is_parser_like(other):
            return NotImplemented
        return either(self, other)

    def __ror__(self, other: ParserLike) -> Parser:
        if not is_parser_like(other):
            return NotImplemented
        return either(other, self)

    def __truediv__(self, separator: ParserLike) -> Parser:
        if not is_parser_like(separator):
            return NotImplemented
        return sep_by(separator)(self)

    def __rtruediv__(self, value: ParserLike) -> Parser:
        if not is_parser_like(value):
            return NotImplemented
        return sep_by(self)(value)

    def __rshift__(self, f: Callable[[Any], Any]) -> Parser:
        return self.map(f)

    def __neg__(self) -> Parser:
        return ignore(self)

    def __pos__(self) -> Parser:
        return many(self)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"


class Forward(Parser):
    """
    A parser that's defined later. Used for recursive grammars.

    ```
    expr = forward("expr")
    expr.define(digits | in_parentheses(expr))
    ```
    """

    __slots__ = ("_target",)

    def __init__(self, name: str = "forward") -> None:
        self._target: Parser | None = None
        super().__init__(self._delegate, name)

    def _delegate(self, state: ParseState) -> ParseState:
        if self._target is None:
            raise ValueError(f"The forward parser {self.name} was used before being defined.")
        return self._target(state)

    def define(self, parser: ParserLike) -> Self:
        """Sets the parser this one stands for. Can only be done once."""
        if self._target is not None:
            raise ValueError(f"The forward parser {self.name} is already defined.")
        self._target = to_parser(parser)
        return self

def forward(name: str = "forward") -> Forward:
    """Creates an undefined `Forward` parser."""
    return Forward(name)


ParserLike = Union[Parser, str, re.Pattern[str]]

def is_parser_like(value: object) -> bool:
    return isinstance(value, (Parser, str, re.Pattern))

def to_parser(value: ParserLike) -> Parser:
    """Strings become `literal()`s, compiled regexes become `regex()`es."""
    if isinstance(value, Parser):
        return value
    elif isinstance(value, str):
        return literal(value)
    elif isinstance(value, re.Pattern):
        return regex(value)
    else:
        raise TypeError(f"Expected a parser, a string or a compiled regex, got {type(value).__name__}.")

def to_parsers(values: Sequence[ParserLike]) -> tuple[Parser, ...]:
    return tuple(to_parser(value) for value in values)

def _names(parsers: Sequence[Parser]) -> str:
    return ", ".join(parser.name for parser in parsers)



def literal(text: str, name: str | None = None) -> Parser:
    """
    Matches the exact string. The result is the string.

    `name` defaults to the quoted string.
    """
    if name is None:
        name = f'"{text}"'
    def transform(state: ParseState) -> ParseState:
        if state.input.startswith(text, state.cursor):
            return state.advance(state.cursor + len(text), text)
        return state.fail(
            f"Expected {name} but got {preview(state.input, state.cursor)} instead.",
            ErrorKind.LITERAL_MISMATCH,
        )
    return Parser(transform, name)

def regex(pattern: str | re.Pattern[str], flags: int | re.RegexFlag = 0, name: str | None = None) -> Parser:
    """
    Matches the regex at the current position. The result is the matched string.

    The regex is only tried at the cursor, against the rest of the input. So `^` and `\\A` match at the cursor, and `^[0-9]+` is the same as `[0-9]+`.

    `flags` can only be used with string patterns. A compiled pattern already has its flags.
    """
    if isinstance(pattern, re.Pattern):
        if flags:
            raise ValueError("Flags can't be given with a compiled pattern, compile them into the pattern instead.")
        compiled = pattern
    else:
        compiled = re.compile(pattern, flags)
    if name is None:
        name = f"regex({compiled.pattern})"
    # only patterns that can refer to the start of the string need the slice
    anchored = "^" in compiled.pattern or "\\A" in compiled.pattern
    def transform(state: ParseState) -> ParseState:
        if anchored:
            m = compiled.match(state.input[state.cursor:])
            offset = state.cursor
        else:
            m = compiled.match(state.input, state.cursor)
            offset = 0
        if m is None:
            return state.fail(
                f"Expected {name} but got {preview(state.input, state.cursor)} instead.",
                ErrorKind.PATTERN_MISMATCH,
            )
        return state.advance(offset + m.end(), m.group())
    return Parser(transform, name)

def _end_of_input(state: ParseState) -> ParseState:
    if state.at_end:
        return state.with_result(None)
    return state.fail(
        f"Expected end of input but got {preview(state.input, state.cursor)}.",
        ErrorKind.INCOMPLETE_CONSUMPTION,
    )

end_of_input: Final[Parser] = Parser(_end_of_input, "end of input", suppress_result=True)
"""Matches nothing, but only at the end of the input. The result is ignored."""



def _collect(results: list[Any], state: ParseState) -> None:
    if state.disposition is Disposition.KEEP:
        results.append(state.result)
    elif state.disposition is Disposition.SPLICE:
        results.extend(state.result)

def sequence(*parsers: ParserLike) -> Parser:
    """
    All the given parsers must match in sequence for the parser to succeed.

    The result is the list of the results, without the ignored ones.
    """
    if len(parsers) <= 0:
        raise ValueError("At least one parser required.")
    new_parsers = to_parsers(parsers)
    def transform(state: ParseState) -> ParseState:
        results: list[Any] = []
        for parser in new_parsers:
            state = parser(state)
            if state.is_error:
                return state
            if state.disposition is not Disposition.IGNORE:
                results.append(state.result)
        return state.with_result(results)
    return Parser(transform, f"sequence({_names(new_parsers)})")

def concat(left: ParserLike, right: ParserLike) -> Parser:
    """
    `left & right`

    Like a two element `sequence()`, but results of other `&` parsers are flattened into the list.
    """
    return Concatenation(_operands(to_parser(left)) + _operands(to_parser(right)))

def _operands(parser: Parser) -> tuple[Parser, ...]:
    if isinstance(parser, Concatenation):
        return parser.parsers
    return (parser,)

class Concatenation(Parser):
    """
    The parser made by `&`.

    Concatenations given to `&` are merged into the new one's operands, so `a & b & c` is a single parser with three operands.
    Its results would have been spliced anyway.
    """

    __slots__ = ("parsers",)

    def __init__(self, parsers: tuple[Parser, ...]) -> None:
        self.parsers: Final[tuple[Parser, ...]] = parsers
        super().__init__(self._concat, " & ".join(parser.name for parser in parsers), splice_result=True)

    def _concat(self, state: ParseState) -> ParseState:
        results: list[Any] = []
        for parser in self.parsers:
            state = parser(state)
            if state.is_error:
                return state
            _collect(results, state)
        return state.with_result(results)

def ignore(parser: ParserLike) -> Parser:
    """Matches the parser, but aggregating combinators leave its result out."""
    new_parser = to_parser(parser)
    return Parser(new_parser, new_parser.name, suppress_result=True)

def choice(*parsers: ParserLike) -> Parser:
    """
    Attempts to match any of the parsers, in order, until one matches. If none match, fails.

    Every parser is tried from the same position.
    """
    if len(parsers) <= 0:
        raise ValueError("At least one parser required.")
    new_parsers = to_parsers(parsers)
    names = _names(new_parsers)
    def transform(state: ParseState) -> ParseState:
        for parser in new_parsers:
            next_state = parser(state)
            if not next_state.is_error:
                return next_state
        return state.fail(f"None of the alternatives matched: {names}.", ErrorKind.ALTERNATIVES_EXHAUSTED)
    return Parser(transform, f"choice({names})")

def either(left: ParserLike, right: ParserLike) -> Parser:
    """
    `left | right`

    The returned state is the one of the branch that matched, so it's treated exactly like that branch would be.
    """
    new_left, new_right = to_parser(left), to_parser(right)
    def transform(state: ParseState) -> ParseState:
        next_state = new_left(state)
        if not next_state.is_error:
            return next_state
        next_state = new_right(state)
        if not next_state.is_error:
            return next_state
        return state.fail(
            f"Neither {new_left.name} nor {new_right.name} matched.",
            ErrorKind.ALTERNATIVES_EXHAUSTED,
        )
    return Parser(transform, f"{new_left.name} | {new_right.name}")

def optional(parser: ParserLike) -> Parser:
    """If the parser fails, succeeds anyway without consuming, with `None` as the result."""
    new_parser = to_parser(parser)
    def transform(state: ParseState) -> ParseState:
        next_state = new_parser(state)
        if next_state.is_error:
            return state.with_result(None)
        return next_state
    return Parser(transform, f"optional({new_parser.name})")

def _repeat(parser: Parser, state: ParseState) -> tuple[ParseState, list[Any], int]:
    """Matches until the parser fails or stops consuming. Returns the last successful state, the kept results and the number of matches."""
    results: list[Any] = []
    count = 0
    while True:
        next_state = parser(state)
        if next_state.is_error:
            break
        count += 1
        if next_state.disposition is not Disposition.IGNORE:
            results.append(next_state.result)
        progressed = next_state.cursor != state.cursor
        state = next_state
        if not progressed:
            break
    return state, results, count

def many(parser: ParserLike) -> Parser:
    """
    Repeatedly matches the given parser until it fails. Never fails.

    The result is the list of the results.
    """
    new_parser = to_parser(parser)
    def transform(state: ParseState) -> ParseState:
        end_state, results, _ = _repeat(new_parser, state)
        return end_state.with_result(results)
    return Parser(transform, f"many({new_parser.name})")

def many1(parser: ParserLike) -> Parser:
    """Repeatedly matches the given parser until it fails. Succeeds if at least one iteration matches."""
    new_parser = to_parser(parser)
    def transform(state: ParseState) -> ParseState:
        end_state, results, count = _repeat(new_parser, state)
        if count == 0:
            return state.fail(f"Expected at least one {new_parser.name}.", ErrorKind.REPETITION_UNSATISFIED)
        return end_state.with_result(results)
    return Parser(transform, f"many1({new_parser.name})")

def between(left: ParserLike, right: ParserLike) -> Callable[[ParserLike], Parser]:
    """
    Factory for parsers that are surrounded by `left` and `right`. The result is the result of the parser in the middle.

    ```
    in_parentheses = between("(", ")")
    in_parentheses(digits).parse("(42)")    # "42"
    ```
    """
    new_left, new_right = to_parser(left), to_parser(right)
    def wrap(center: ParserLike) -> Parser:
        new_center = to_parser(center)
        def transform(state: ParseState) -> ParseState:
            center_state = new_center(new_left(state))
            end_state = new_right(center_state)
            if end_state.is_error:
                return end_state
            return end_state.with_result(center_state.result)
        return Parser(transform, f"{new_left.name}{new_center.name}{new_right.name}")
    return wrap

def _separated(value: Parser, separator: Parser, state: ParseState) -> tuple[ParseState, list[Any], int]:
    results: list[Any] = []
    count = 0
    while True:
        start = state.cursor
        value_state = value(state)
        if value_state.is_error:
            break
        count += 1
        if value_state.disposition is not Disposition.IGNORE:
            results.append(value_state.result)
        state = value_state
        separator_state = separator(state)
        if separator_state.is_error or separator_state.cursor == start:
            break
        # a separator that isn't followed by a value stays consumed
        state = separator_state
    return state, results, count

def sep_by(separator: ParserLike) -> Callable[[ParserLike], Parser]:
    """
    Factory for lists of values separated by `separator`. Never fails. The separators are left out of the result.

    ```
    sep_by(",")(digits).parse("1,2,3")    # ["1", "2", "3"]
    ```
    """
    new_separator = to_parser(separator)
    def wrap(value: ParserLike) -> Parser:
        new_value = to_parser(value)
        def transform(state: ParseState) -> ParseState:
            end_state, results, _ = _separated(new_value, new_separator, state)
            return end_state.with_result(results)
        return Parser(transform, f"{new_value.name} / {new_separator.name}")
    return wrap

def sep_by1(separator: ParserLike) -> Callable[[ParserLike], Parser]:
    """Same as `sep_by()`, but fails if there are no values."""
    new_separator = to_parser(separator)
    def wrap(value: ParserLike) -> Parser:
        new_value = to_parser(value)
        name = f"{new_value.name} / {new_separator.name}"
        def transform(state: ParseState) -> ParseState:
            end_state, results, count = _separated(new_value, new_separator, state)
            if count == 0:
                return state.fail(f"Expected at least one {new_value.name}.", ErrorKind.REPETITION_UNSATISFIED)
            return end_state.with_result(results)
        return Parser(transform, name)
    return wrap

def all_of(parser: ParserLike) -> Parser:
    """
    Matches the parser again and again until the end of the input. Fails as soon as one of the attempts fails.

    The result is the list of the results.
    """
    new_parser = to_parser(parser)
    def transform(state: ParseState) -> ParseState:
        results: list[Any] = []
        while True:
            next_state = new_parser(state)
            if next_state.is_error:
                return next_state
            if next_state.disposition is not Disposition.IGNORE:
                results.append(next_state.result)
            if next_state.at_end:
                return next_state.with_result(results)
            if next_state.cursor == state.cursor:
                return next_state.fail(
                    f"{new_parser.name} stopped consuming before the end of the input, at {preview(next_state.input, next_state.cursor)}.",
                    ErrorKind.INCOMPLETE_CONSUMPTION,
                )
            state = next_state
    return Parser(transform, f"all_of({new_parser.name})")
