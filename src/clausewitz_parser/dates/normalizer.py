# src/clausewitz_parser/dates/normalizer.py

from __future__ import annotations

import re
from dataclasses import dataclass

from clausewitz_parser.core.exceptions import MalformedValue
from clausewitz_parser.loader.readers import read_token
from clausewitz_parser.loader.tokenizer import TokenStream


# YEAR.MONTH.DAY with an optional trailing hour (some saves write 1444.11.11.1).
_DATE_RE = re.compile(r"(-?\d+)\.(\d+)\.(\d+)(?:\.\d+)?")


@dataclass(frozen=True, order=True)
class GameDate:
    """Calendar date as written in save files (``1660.1.1``)."""

    year: int = 1
    month: int = 1
    day: int = 1

    def isoformat(self) -> str:
        sign = "-" if self.year < 0 else ""
        return f"{sign}{abs(self.year):04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return f"{self.year}.{self.month}.{self.day}"


def parse_date(text: str) -> GameDate:
    """
    Parse ``YEAR.MONTH.DAY``.

    Month and day are range-checked (1-12, 1-31); the game calendar has no
    leap years, so no further calendar validation is done.

    Raises:
        MalformedValue: if `text` is not a date.
    """
    match = _DATE_RE.fullmatch(text.strip())
    if not match:
        raise MalformedValue(f"expected a date (YEAR.MONTH.DAY), found {text!r}")

    year, month, day = (int(g) for g in match.groups())
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise MalformedValue(f"date out of range: {text!r}")

    return GameDate(year, month, day)


def read_date(stream: TokenStream) -> GameDate:
    """Reader for quoted or bare dates (``last_war = "1660.1.1"``)."""
    tok = read_token(stream)
    try:
        return parse_date(tok.value)
    except MalformedValue as exc:
        raise stream.error(MalformedValue, exc.message, tok) from None
