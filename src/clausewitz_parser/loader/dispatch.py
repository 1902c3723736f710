# src/clausewitz_parser/loader/dispatch.py

"""
Keyword/regex dispatch engine.

A BindingTable maps keys to handlers ``handler(key, stream)``; the engine
walks one block, resolves each key against the table and lets the handler
consume the value. Typical use from a domain reader:

    details = RelationDetails()
    table = BindingTable()
    table.register_keyword("attitude", lambda k, s: setattr(details, "attitude", read_string(s)))
    table.register_regex(".*", ignore_item)
    parse_with_bindings(stream, table)

Resolution order is fixed: exact keywords, then regexes in registration
order (full match), then the fallback. Unknown keys fall through to the
fallback, which discards their value by default.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Pattern, Tuple, Union

from clausewitz_parser.config import get_config
from clausewitz_parser.core.exceptions import (
    HandlerContractViolation,
    MalformedValue,
    UnexpectedToken,
    UnterminatedBlock,
)
from clausewitz_parser.logging import get_logger

from .readers import continues_run, describe, discard_value, ignore_item
from .tokenizer import Token, TokenKind, TokenStream

log = get_logger("dispatch")

Handler = Callable[[str, TokenStream], None]


class DispatchState(Enum):
    AWAITING_KEY = "awaiting_key"
    AWAITING_VALUE = "awaiting_value"
    DONE = "done"


class BindingTable:
    """
    Key matchers mapped to handlers for one block.

    The table is frozen as soon as a parse starts using it; registering a
    binding afterwards raises RuntimeError.
    """

    def __init__(self, fallback: Optional[Handler] = None) -> None:
        self._keywords: Dict[str, Handler] = {}
        self._patterns: List[Tuple[Pattern[str], Handler]] = []
        self._fallback: Handler = fallback or ignore_item
        self._frozen = False

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("binding table is in use and can no longer change")

    def register_keyword(self, key: str, handler: Handler) -> "BindingTable":
        self._check_mutable()
        self._keywords[key] = handler
        return self

    def register_regex(
        self,
        pattern: Union[str, Pattern[str]],
        handler: Handler,
    ) -> "BindingTable":
        self._check_mutable()
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        self._patterns.append((compiled, handler))
        return self

    def set_fallback(self, handler: Handler) -> "BindingTable":
        self._check_mutable()
        self._fallback = handler
        return self

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def resolve(self, key: str) -> Handler:
        handler = self._keywords.get(key)
        if handler is not None:
            return handler
        for pattern, handler in self._patterns:
            if pattern.fullmatch(key):
                return handler
        return self._fallback

    def __len__(self) -> int:
        return len(self._keywords) + len(self._patterns)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<BindingTable keywords={len(self._keywords)} regexes={len(self._patterns)}>"


def parse_with_bindings(
    stream: TokenStream,
    table: BindingTable,
    *,
    top_level: bool = False,
    require_assign: bool = False,
    check_contract: Optional[bool] = None,
) -> None:
    """
    Walk one block, handing each statement to its bound handler.

    Args:
        stream: Positioned at the block's ``{`` (the usual case inside a
            handler), or at the start of the document with `top_level`.
        table: Bindings for this block.
        top_level: Parse until end of input instead of a matching ``}``.
        require_assign: Reject keys not followed by ``=`` (a ``{`` is still
            accepted). Otherwise ``=`` is consumed when present.
        check_contract: Verify every handler consumed one value unit and
            left braces balanced. Defaults to the
            ``parser.check_handler_contract`` config flag.

    Raises:
        MalformedValue: the value is a scalar where a block was expected
            (the scalar is consumed).
        UnterminatedBlock: end of input before the matching ``}``.
        HandlerContractViolation: a handler consumed nothing, unbalanced
            the braces or read into the next statement.
    """
    if check_contract is None:
        check_contract = get_config().check_handler_contract

    table.freeze()

    open_tok: Optional[Token] = None
    if not top_level:
        first = stream.peek()
        if first.kind is not TokenKind.OPEN:
            if first.is_scalar:
                discard_value(stream)
                raise stream.error(
                    MalformedValue, f"expected a block, found {describe(first)}", first
                )
            raise stream.error(UnexpectedToken, f"expected a block, found {describe(first)}")
        open_tok = stream.next_token()

    state = DispatchState.AWAITING_KEY
    while state is not DispatchState.DONE:
        tok = stream.peek()

        if tok.kind is TokenKind.EOF:
            if open_tok is not None:
                raise stream.error(UnterminatedBlock, "block is never closed", open_tok)
            state = DispatchState.DONE
            continue

        if tok.kind is TokenKind.CLOSE:
            stream.next_token()
            if open_tok is not None:
                state = DispatchState.DONE
            else:
                log.warning(
                    "%s:%d: ignoring unmatched '}' at top level", stream.source, tok.line
                )
            continue

        if tok.kind is TokenKind.ASSIGN:
            raise stream.error(UnexpectedToken, "expected a key, found '='")

        if tok.kind is TokenKind.OPEN:
            # Anonymous block: dispatched under the empty key.
            key_tok, key = tok, ""
        else:
            key_tok = stream.next_token()
            key = key_tok.value

            following = stream.peek()
            if following.kind is TokenKind.ASSIGN:
                stream.next_token()
            elif following.kind in (TokenKind.CLOSE, TokenKind.EOF) or (
                following.is_scalar and not continues_run(stream)
            ):
                # Bare item: a terminator or the next statement's key follows.
                log.debug("%s:%d: bare item %r has no value", stream.source, key_tok.line, key)
                continue
            elif require_assign and following.kind is not TokenKind.OPEN:
                stream.push_key(key)
                exc = stream.error(
                    UnexpectedToken, f"expected '=' after {key!r}, found {describe(following)}"
                )
                stream.pop_key()
                raise exc

        state = DispatchState.AWAITING_VALUE
        _invoke(stream, table.resolve(key), key, key_tok, check_contract)
        state = DispatchState.AWAITING_KEY


def _invoke(
    stream: TokenStream,
    handler: Handler,
    key: str,
    key_tok: Token,
    check_contract: bool,
) -> None:
    consumed, depth = stream.consumed, stream.depth

    stream.push_key(key)
    try:
        handler(key, stream)
        if not check_contract:
            return
        if stream.consumed == consumed:
            raise stream.error(
                HandlerContractViolation, f"handler for {key!r} consumed no value", key_tok
            )
        if stream.depth != depth:
            raise stream.error(
                HandlerContractViolation,
                f"handler for {key!r} left braces unbalanced (depth {depth} -> {stream.depth})",
                key_tok,
            )
        if stream.peek().kind is TokenKind.ASSIGN:
            raise stream.error(
                HandlerContractViolation,
                f"handler for {key!r} consumed past the end of its value",
                key_tok,
            )
    finally:
        stream.pop_key()


class KeywordParser:
    """
    Reusable holder for a binding table plus the entry points that feed it.

        parser = KeywordParser()
        parser.register_keyword("government", on_government)
        parser.register_regex(".*", ignore_item)
        parser.parse_text(text)
    """

    def __init__(self, fallback: Optional[Handler] = None) -> None:
        self.table = BindingTable(fallback)

    def register_keyword(self, key: str, handler: Handler) -> "KeywordParser":
        self.table.register_keyword(key, handler)
        return self

    def register_regex(
        self,
        pattern: Union[str, Pattern[str]],
        handler: Handler,
    ) -> "KeywordParser":
        self.table.register_regex(pattern, handler)
        return self

    def parse_stream(self, stream: TokenStream, **kwargs) -> None:
        parse_with_bindings(stream, self.table, **kwargs)

    def parse_text(self, text: str, source: str = "<string>", **kwargs) -> None:
        stream = TokenStream(text, source=source)
        parse_with_bindings(stream, self.table, top_level=True, **kwargs)

    def parse_file(
        self,
        path: Union[str, Path],
        encoding: Optional[str] = None,
        **kwargs,
    ) -> None:
        stream = TokenStream.from_file(path, encoding=encoding)
        parse_with_bindings(stream, self.table, top_level=True, **kwargs)
