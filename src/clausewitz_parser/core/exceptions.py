from __future__ import annotations

from typing import Optional


class ClausewitzError(Exception):
    """
    Base error for everything raised while reading clausal text.

    Carries enough location context to point at the faulty statement:
    the source name, the 1-based line/column of the offending token and
    the dotted key path of the statement being parsed
    (e.g. ``history.1444.1.1.owner``).
    """

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        key_path: str = "",
    ) -> None:
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        self.key_path = key_path
        super().__init__(self._render())

    def _render(self) -> str:
        where = self.source or "<input>"
        if self.line is not None:
            where = f"{where}:{self.line}:{self.column or 0}"
        text = f"{where}: {self.message}"
        if self.key_path:
            text += f" (at {self.key_path})"
        return text


class ParseError(ClausewitzError):
    """Structural error; fatal to the current document."""


class UnterminatedQuote(ParseError):
    """A quoted string ran to the end of input without its closing quote."""


class UnterminatedBlock(ParseError):
    """End of input was reached while a ``}`` was still expected."""


class UnexpectedToken(ParseError):
    """A token appeared where the grammar does not allow it."""


class MalformedValue(ClausewitzError, ValueError):
    """
    A reader found a value of the wrong shape (e.g. text where a number is
    required). Callers may log and skip; the core only reports it.
    """


class HandlerContractViolation(ClausewitzError):
    """A bound handler did not consume exactly one value unit."""


class PipelineError(Exception):
    """Base exception for file-level parse failures."""


class ParseExecutionError(PipelineError):
    """Raised when parsing a whole file fails."""
