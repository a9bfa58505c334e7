"""
Parser combinator library.

Parsers are built once by combining primitives, then run as many times as needed.

See the `inkcomb.general` module for general purpose parsers you can use as examples.

Defining parsers:
```
from inkcomb import *
from inkcomb.general import letters, digits, ws0, in_parentheses

name = letters
call = name & in_parentheses(digits / ("," & ws0))
program = all_of(call & -ws0)
```

Using parsers:
```
r = program.run("foo(1, 2) bar(3)")
if r:
    ... # `r` is a `Success`, the result is `r.value`
else:
    ... # `r` is a `Failure` with a `message` and a `position`

value = program.parse("foo(1, 2)")  # raises `ParseError` on failure
```

Recursive grammars:
```
expr = forward("expr")
expr.define(digits | in_parentheses(expr))
```
"""

import inkcomb.const as const
import inkcomb.main
from inkcomb.main import (
    Disposition,
    ErrorKind,
    ParseState,
    Located,
    ParseError,
    Success,
    Failure,
    ParseResult,
    Parser,
    Forward,
    Concatenation,
    forward,
    to_parser,
    literal,
    regex,
    end_of_input,
    sequence,
    concat,
    ignore,
    choice,
    either,
    optional,
    many,
    many1,
    between,
    sep_by,
    sep_by1,
    all_of,
)
import inkcomb.general as general
