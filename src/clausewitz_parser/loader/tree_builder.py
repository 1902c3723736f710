# src/clausewitz_parser/loader/tree_builder.py

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from clausewitz_parser.core.exceptions import UnexpectedToken, UnterminatedBlock
from clausewitz_parser.logging import get_logger

from .object_node import ANONYMOUS, ObjectNode, Value
from .readers import describe, read_scalar_run
from .tokenizer import Token, TokenKind, TokenStream

log = get_logger("tree_builder")


def parse_block(
    stream: TokenStream,
    *,
    top_level: bool = False,
    key: str = ANONYMOUS,
    open_token: Optional[Token] = None,
) -> ObjectNode:
    """
    Build an ObjectNode from the statements of one block.

    The stream must sit just after the block's ``{`` (pass it as
    `open_token` for error locations), or at the start of the document when
    `top_level` is set. Returns once the matching ``}`` (or, for the
    document, end of input) has been consumed.

    Statement shapes:
        key = value      keyed statement
        key { ... }      keyed block without ``=``
        { ... }          anonymous block (key "")
        word             bare item (key "")

    Raises:
        UnterminatedBlock: end of input inside a nested block.
        UnexpectedToken: ``=`` where a key was expected, or a missing value.
    """
    node = ObjectNode(key=key, line=open_token.line if open_token else 1)

    while True:
        tok = stream.peek()

        if tok.kind is TokenKind.EOF:
            if not top_level:
                raise stream.error(
                    UnterminatedBlock, "block is never closed", open_token or tok
                )
            break

        if tok.kind is TokenKind.CLOSE:
            stream.next_token()
            if not top_level:
                break
            log.warning(
                "%s:%d: ignoring unmatched '}' at top level", stream.source, tok.line
            )
            continue

        if tok.kind is TokenKind.ASSIGN:
            raise stream.error(UnexpectedToken, "expected a key, found '='")

        if tok.kind is TokenKind.OPEN:
            node.add(ANONYMOUS, read_value(stream), tok.line)
            continue

        key_tok = stream.next_token()
        following = stream.peek().kind

        if following is TokenKind.ASSIGN:
            stream.next_token()
        elif following is not TokenKind.OPEN:
            node.add(ANONYMOUS, key_tok.value, key_tok.line)
            continue

        stream.push_key(key_tok.value)
        try:
            value = read_value(stream, key=key_tok.value)
        finally:
            stream.pop_key()
        node.add(key_tok.value, value, key_tok.line)

    node.close()
    return node


def read_value(stream: TokenStream, key: str = ANONYMOUS) -> Value:
    """
    Read the value of a statement whose ``=`` has been consumed.

    * ``{`` starts a nested block; a block holding only bare scalars is
      returned as a tuple (``{ A B C }``).
    * Otherwise a run of scalars is read: one scalar gives a str, two or
      more give a tuple (``cores = A B C``).
    """
    tok = stream.peek()

    if tok.kind is TokenKind.OPEN:
        open_tok = stream.next_token()
        return _collapse(parse_block(stream, key=key, open_token=open_tok))

    if not tok.is_scalar:
        raise stream.error(UnexpectedToken, f"expected a value, found {describe(tok)}")

    run = read_scalar_run(stream)
    if len(run) == 1:
        return run[0].value
    return tuple(t.value for t in run)


def _collapse(node: ObjectNode) -> Value:
    if len(node) and all(
        e.key == ANONYMOUS and isinstance(e.value, str) for e in node
    ):
        return tuple(e.value for e in node)
    return node


def read_object(stream: TokenStream, key: str = ANONYMOUS) -> ObjectNode:
    """
    Handler-friendly reader returning the next value as an ObjectNode.

    A list block or a scalar run is wrapped as bare items so callers always
    get a node back.
    """
    tok = stream.peek()
    if tok.kind is TokenKind.OPEN:
        open_tok = stream.next_token()
        return parse_block(stream, key=key, open_token=open_tok)

    node = ObjectNode(key=key, line=tok.line)
    value = read_value(stream, key=key)
    for item in (value,) if isinstance(value, str) else value:
        node.add(ANONYMOUS, item, tok.line)
    node.close()
    return node


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def build_tree(stream: TokenStream) -> ObjectNode:
    """
    Parse a whole document into its root ObjectNode.

    This is the main entry point of the loader pipeline:

        text -> TokenStream -> ObjectNode(root)
    """
    root = parse_block(stream, top_level=True)
    log.debug("%s: parsed %d top-level entries", stream.source, len(root))
    return root


def parse_text(text: str, source: str = "<string>") -> ObjectNode:
    return build_tree(TokenStream(text, source=source))


def parse_file(path: Union[str, Path], encoding: Optional[str] = None) -> ObjectNode:
    return build_tree(TokenStream.from_file(path, encoding=encoding))
