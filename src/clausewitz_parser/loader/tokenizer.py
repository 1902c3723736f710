# src/clausewitz_parser/loader/tokenizer.py

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Deque, Iterator, List, Optional, Type, TypeVar, Union

from clausewitz_parser.config import get_config
from clausewitz_parser.core.exceptions import ClausewitzError, UnterminatedQuote


class TokenKind(Enum):
    BAREWORD = "bareword"
    QUOTED = "quoted"
    NUMBER = "number"
    ASSIGN = "="
    OPEN = "{"
    CLOSE = "}"
    EOF = "eof"


SCALAR_KINDS = frozenset({TokenKind.BAREWORD, TokenKind.QUOTED, TokenKind.NUMBER})

# Besides whitespace, these characters end a bare word.
DELIMITERS = frozenset("={}#\"")

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")

# Quoted string body: only \" and \\ are escapes, any other backslash is literal.
_QUOTED_RE = re.compile(r'"((?:[^"\\]|\\["\\]|\\(?!["\\]))*)"')
_ESCAPE_RE = re.compile(r'\\(["\\])')

E = TypeVar("E", bound=ClausewitzError)


@dataclass(frozen=True)
class Token:
    """
    A single lexical unit of clausal text.

    Attributes:
        kind: Token classification.
        text: Raw source text (quotes included for quoted strings).
        value: Content between the quotes for quoted strings, raw text otherwise.
        line: 1-based line of the first character.
        column: 1-based column of the first character.
        start: Character offset of the first character.
        end: Character offset just past the last character.
    """
    kind: TokenKind
    text: str
    value: str
    line: int
    column: int
    start: int
    end: int

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<Token {self.kind.name} {self.text!r} L{self.line}:{self.column}>"


def _ends_word(ch: str) -> bool:
    return ch in DELIMITERS or ch.isspace()


def _classify_bare(text: str) -> TokenKind:
    return TokenKind.NUMBER if _NUMBER_RE.fullmatch(text) else TokenKind.BAREWORD


class TokenStream:
    """
    Cursor over clausal text producing Tokens on demand.

    The stream never backtracks past consumed input; ``peek`` fills a small
    lookahead buffer instead. Besides the tokens themselves it tracks what
    the dispatch engine needs to audit handlers:

        offset    end offset of the last consumed token
        consumed  number of tokens consumed so far
        depth     ``{`` consumed minus ``}`` consumed
        key_path  dotted path of keys currently being parsed
    """

    def __init__(self, text: str, source: str = "<string>") -> None:
        if text.startswith("\ufeff"):
            text = text[1:]
        self.text = text
        self.source = source

        self._pos = 0
        self._line = 1
        self._col = 1
        self._lookahead: Deque[Token] = deque()

        self.offset = 0
        self.consumed = 0
        self.depth = 0
        self._path: List[str] = []

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        encoding: Optional[str] = None,
    ) -> "TokenStream":
        """
        Read a whole file and return a stream over its contents.

        Raises:
            FileNotFoundError: if `path` does not exist.
        """
        file_path = Path(path)

        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        enc = encoding or get_config().encoding
        with file_path.open("r", encoding=enc, errors="replace") as f:
            text = f.read()

        return cls(text, source=str(file_path))

    # ------------------------------------------------------------------ #
    # Token access
    # ------------------------------------------------------------------ #

    def peek(self, n: int = 0) -> Token:
        """Return the n-th upcoming token without consuming it."""
        while len(self._lookahead) <= n:
            self._lookahead.append(self._scan())
        return self._lookahead[n]

    def next_token(self) -> Token:
        """Consume and return the next token. EOF is returned repeatedly."""
        tok = self._lookahead.popleft() if self._lookahead else self._scan()
        if tok.kind is TokenKind.EOF:
            return tok

        self.offset = tok.end
        self.consumed += 1
        if tok.kind is TokenKind.OPEN:
            self.depth += 1
        elif tok.kind is TokenKind.CLOSE:
            self.depth -= 1
        return tok

    def at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    # ------------------------------------------------------------------ #
    # Key path bookkeeping
    # ------------------------------------------------------------------ #

    @property
    def key_path(self) -> str:
        return ".".join(self._path)

    def push_key(self, key: str) -> None:
        self._path.append(key)

    def pop_key(self) -> None:
        if self._path:
            self._path.pop()

    def error(
        self,
        exc_type: Type[E],
        message: str,
        token: Optional[Token] = None,
    ) -> E:
        """Build an exception located at `token` (or the upcoming token)."""
        tok = token if token is not None else self.peek()
        return exc_type(
            message,
            source=self.source,
            line=tok.line,
            column=tok.column,
            key_path=self.key_path,
        )

    # ------------------------------------------------------------------ #
    # Scanner
    # ------------------------------------------------------------------ #

    def _advance(self, count: int = 1) -> None:
        for ch in self.text[self._pos:self._pos + count]:
            if ch == "\n":
                self._line += 1
                self._col = 1
            else:
                self._col += 1
        self._pos += count

    def _skip_blank(self) -> None:
        """Skip whitespace and ``#`` comments running to end of line."""
        text = self.text
        while self._pos < len(text):
            ch = text[self._pos]
            if ch.isspace():
                self._advance()
            elif ch == "#":
                newline = text.find("\n", self._pos)
                if newline == -1:
                    newline = len(text)
                self._advance(newline - self._pos)
            else:
                break

    def _scan(self) -> Token:
        self._skip_blank()

        start, line, column = self._pos, self._line, self._col
        if start >= len(self.text):
            return Token(TokenKind.EOF, "", "", line, column, start, start)

        ch = self.text[start]

        if ch in "={}":
            self._advance()
            kind = {
                "=": TokenKind.ASSIGN,
                "{": TokenKind.OPEN,
                "}": TokenKind.CLOSE,
            }[ch]
            return Token(kind, ch, ch, line, column, start, start + 1)

        if ch == '"':
            return self._scan_quoted(start, line, column)

        end = start
        while end < len(self.text) and not _ends_word(self.text[end]):
            end += 1
        self._advance(end - start)
        word = self.text[start:end]
        return Token(_classify_bare(word), word, word, line, column, start, end)

    def _scan_quoted(self, start: int, line: int, column: int) -> Token:
        match = _QUOTED_RE.match(self.text, start)
        if match:
            end = match.end()
            self._advance(end - start)
            return Token(
                TokenKind.QUOTED,
                match.group(0),
                _ESCAPE_RE.sub(r"\1", match.group(1)),
                line,
                column,
                start,
                end,
            )

        raise UnterminatedQuote(
            "quoted string is never closed",
            source=self.source,
            line=line,
            column=column,
            key_path=self.key_path,
        )


def next_token(stream: TokenStream) -> Token:
    """Consume and return the next token of `stream`."""
    return stream.next_token()


def tokenize(text: str, source: str = "<string>") -> Iterator[Token]:
    """
    Yield every token of `text`, ending with (and including) EOF.

    Raises:
        UnterminatedQuote: if a quoted string is never closed.
    """
    stream = TokenStream(text, source=source)
    while True:
        tok = stream.next_token()
        yield tok
        if tok.kind is TokenKind.EOF:
            return


def tokenize_file(
    path: Union[str, Path],
    encoding: Optional[str] = None,
) -> Iterator[Token]:
    """
    Yield Token objects for the whole file, ending with EOF.

    Raises:
        FileNotFoundError: if `path` does not exist.
        UnterminatedQuote: if a quoted string is never closed.
    """
    stream = TokenStream.from_file(path, encoding=encoding)
    while True:
        tok = stream.next_token()
        yield tok
        if tok.kind is TokenKind.EOF:
            return
