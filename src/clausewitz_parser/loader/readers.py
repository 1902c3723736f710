# src/clausewitz_parser/loader/readers.py

"""
Primitive readers.

Every reader expects the stream to sit just after ``key =`` and consumes
exactly one value unit. When a reader rejects a value it still consumes it
whenever one is present, so a caller that catches ``MalformedValue`` can
carry on parsing the rest of the block.
"""

from __future__ import annotations

import re
from typing import Callable, List, TypeVar

from clausewitz_parser.core.exceptions import (
    MalformedValue,
    UnexpectedToken,
    UnterminatedBlock,
)

from .tokenizer import Token, TokenKind, TokenStream

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")


def describe(tok: Token) -> str:
    """Human-readable name for a token in error messages."""
    if tok.kind is TokenKind.EOF:
        return "end of input"
    return repr(tok.text)


# ---------------------------------------------------------------------------
# Bare runs
# ---------------------------------------------------------------------------

def continues_run(stream: TokenStream) -> bool:
    """
    True when the upcoming token extends the current run of scalars.

    A scalar belongs to the run unless it is followed by ``=`` or ``{``, in
    which case it is the key of the next statement.
    """
    if not stream.peek().is_scalar:
        return False
    return stream.peek(1).kind not in (TokenKind.ASSIGN, TokenKind.OPEN)


def read_scalar_run(stream: TokenStream) -> List[Token]:
    """Consume one scalar and every scalar that continues the run after it."""
    first = stream.peek()
    if not first.is_scalar:
        raise stream.error(UnexpectedToken, f"expected a value, found {describe(first)}")

    run = [stream.next_token()]
    while continues_run(stream):
        run.append(stream.next_token())
    return run


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def read_token(stream: TokenStream) -> Token:
    """Consume exactly one scalar token."""
    tok = stream.peek()
    if tok.is_scalar:
        return stream.next_token()

    if tok.kind is TokenKind.OPEN:
        discard_value(stream)
        raise stream.error(MalformedValue, "expected a scalar, found a block", tok)

    raise stream.error(MalformedValue, f"expected a scalar, found {describe(tok)}", tok)


def read_string(stream: TokenStream) -> str:
    return read_token(stream).value


def _convert(
    stream: TokenStream,
    tok: Token,
    pattern: "re.Pattern[str]",
    convert: Callable[[str], T],
    what: str,
) -> T:
    if not pattern.fullmatch(tok.value):
        raise stream.error(MalformedValue, f"expected {what}, found {tok.text!r}", tok)
    return convert(tok.value)


def read_int(stream: TokenStream) -> int:
    tok = read_token(stream)
    return _convert(stream, tok, _INT_RE, int, "an integer")


def read_float(stream: TokenStream) -> float:
    tok = read_token(stream)
    return _convert(stream, tok, _FLOAT_RE, float, "a number")


def read_bool(stream: TokenStream) -> bool:
    """Read ``yes`` / ``no``."""
    tok = read_token(stream)
    if tok.value == "yes":
        return True
    if tok.value == "no":
        return False
    raise stream.error(MalformedValue, f"expected yes or no, found {tok.text!r}", tok)


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def read_token_list(stream: TokenStream) -> List[Token]:
    """
    Read ``{ a b c }`` or a bare run ``a b c``.

    Anything other than scalars inside the braces is skipped to the closing
    brace and then reported as ``MalformedValue``.
    """
    if stream.peek().kind is not TokenKind.OPEN:
        return read_scalar_run(stream)

    open_tok = stream.next_token()
    items: List[Token] = []
    problem = None

    while True:
        tok = stream.peek()
        if tok.kind is TokenKind.CLOSE:
            stream.next_token()
            break
        if tok.kind is TokenKind.EOF:
            raise stream.error(UnterminatedBlock, "list is never closed", open_tok)

        if tok.is_scalar:
            items.append(stream.next_token())
            continue

        problem = problem or tok
        if tok.kind is TokenKind.OPEN:
            discard_value(stream)
        else:
            stream.next_token()

    if problem is not None:
        raise stream.error(
            MalformedValue, f"expected a list of scalars, found {describe(problem)}", problem
        )
    return items


def read_string_list(stream: TokenStream) -> List[str]:
    return [tok.value for tok in read_token_list(stream)]


def read_int_list(stream: TokenStream) -> List[int]:
    return [
        _convert(stream, tok, _INT_RE, int, "an integer")
        for tok in read_token_list(stream)
    ]


def read_float_list(stream: TokenStream) -> List[float]:
    return [
        _convert(stream, tok, _FLOAT_RE, float, "a number")
        for tok in read_token_list(stream)
    ]


# ---------------------------------------------------------------------------
# Discarding
# ---------------------------------------------------------------------------

def discard_value(stream: TokenStream) -> None:
    """
    Consume one value unit without interpreting it.

    A scalar or bare list is consumed as a run; a block is consumed up to
    and including its matching ``}``, however deeply it nests.
    """
    tok = stream.peek()

    if tok.kind is TokenKind.OPEN:
        open_tok = stream.next_token()
        outer = stream.depth - 1
        while stream.depth > outer:
            if stream.next_token().kind is TokenKind.EOF:
                raise stream.error(UnterminatedBlock, "block is never closed", open_tok)
        return

    read_scalar_run(stream)


def ignore_item(key: str, stream: TokenStream) -> None:
    """Handler form of ``discard_value``; the default fallback binding."""
    discard_value(stream)
