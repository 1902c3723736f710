# tests/test_dates.py

from __future__ import annotations

import pytest

from clausewitz_parser.core.exceptions import MalformedValue
from clausewitz_parser.dates.normalizer import GameDate, parse_date, read_date


def test_full_date():
    d = parse_date("1444.11.11")
    assert d == GameDate(1444, 11, 11)
    assert str(d) == "1444.11.11"
    assert d.isoformat() == "1444-11-11"


def test_hour_suffix_is_dropped():
    assert parse_date("1444.11.11.1") == GameDate(1444, 11, 11)


def test_negative_year():
    d = parse_date("-50.1.1")
    assert d.year == -50
    assert d.isoformat() == "-0050-01-01"


def test_dates_order_chronologically():
    assert parse_date("1444.11.11") < parse_date("1444.12.1") < parse_date("1660.1.1")
    assert GameDate() == GameDate(1, 1, 1)


@pytest.mark.parametrize("text", ["1444", "1444.11", "JAN 1444", "1444.13.1", "1444.1.32", ""])
def test_invalid_dates(text):
    with pytest.raises(MalformedValue):
        parse_date(text)


def test_read_date_quoted_and_bare(value_stream):
    assert read_date(value_stream('last_war = "1660.1.1"')) == GameDate(1660, 1, 1)
    assert read_date(value_stream("date = 1444.11.11")) == GameDate(1444, 11, 11)


def test_read_date_error_points_at_token(value_stream):
    stream = value_stream('last_war =\n  "soon" next = 1')
    with pytest.raises(MalformedValue) as info:
        read_date(stream)

    assert info.value.line == 2
    assert info.value.column == 3
    assert stream.peek().value == "next"
