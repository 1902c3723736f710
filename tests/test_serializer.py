# tests/test_serializer.py

from __future__ import annotations

import pytest

from clausewitz_parser.loader import ObjectNode, dump_node, parse_file, parse_text, quote
from clausewitz_parser.utils import sample_file_path


def test_quote_only_when_needed() -> None:
    assert quote("SWE") == "SWE"
    assert quote("1444.11.11") == "1444.11.11"
    assert quote("Kingdom of Sweden") == '"Kingdom of Sweden"'
    assert quote("") == '""'
    assert quote("a=b") == '"a=b"'


def test_dump_layout() -> None:
    root = parse_text('name = "New Sweden" cores = { A B } h = { owner = SWE } e = { }')
    assert dump_node(root) == (
        'name = "New Sweden"\n'
        "cores = { A B }\n"
        "h = {\n"
        "\towner = SWE\n"
        "}\n"
        "e = { }\n"
    )


@pytest.mark.parametrize("name", ["nested.txt", "country.txt", "provinces.txt"])
def test_round_trip_of_samples(name: str) -> None:
    original = parse_file(sample_file_path(name))
    reparsed = parse_text(dump_node(original))
    assert reparsed == original


def test_round_trip_keeps_anonymous_blocks_and_repeats() -> None:
    text = "core = A core = B armies = { { id = 1 } { id = 2 } } mixed = { X y = 1 }"
    original = parse_text(text)
    reparsed = parse_text(dump_node(original, indent="  "))
    assert reparsed == original
    assert reparsed.get_leaves("core") == ["A", "B"]


def test_dump_from_constructed_node() -> None:
    inner = ObjectNode.from_pairs([("owner", "SWE")], key="1444.1.1")
    root = ObjectNode.from_pairs([("history", ObjectNode.from_pairs([("1444.1.1", inner)]))])
    assert parse_text(dump_node(root)).find("history", "1444.1.1", "owner") == "SWE"


def test_quote_escapes_quotes_and_backslashes() -> None:
    assert quote('say "hi"') == r'"say \"hi\""'
    assert quote(r"C:\Games\my mod") == r'"C:\\Games\\my mod"'
    # Bare words never need escaping.
    assert quote(r"C:\Games") == r"C:\Games"


def test_round_trip_of_escaped_strings() -> None:
    original = parse_text(r'a = "x \"y\" z" b = "C:\Games\my mod" c = { "q\"1" }')
    assert original.get_leaf("a") == 'x "y" z'
    assert parse_text(dump_node(original)) == original
