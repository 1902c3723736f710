# tests/test_relations.py

from __future__ import annotations

import pytest

from clausewitz_parser.core.exceptions import MalformedValue
from clausewitz_parser.dates.normalizer import GameDate
from clausewitz_parser.loader import BindingTable, TokenStream, ignore_item, parse_with_bindings
from clausewitz_parser.readers import RelationDetails, read_relation_details, read_relations
from clausewitz_parser.utils import sample_file_path


def test_relation_details_full_block(value_stream) -> None:
    stream = value_stream(
        'SWE = { value = 42 military_access = yes last_send_diplomat = "1444.11.11" '
        "last_war = 1660.1.1 attitude = attitude_friendly trust = 50 } next = 1"
    )
    details = read_relation_details(stream)

    assert details == RelationDetails(
        value=42,
        military_access=True,
        last_send_diplomat=GameDate(1444, 11, 11),
        last_war=GameDate(1660, 1, 1),
        attitude="attitude_friendly",
    )
    assert stream.peek().value == "next"


def test_cached_sum_is_read_as_value(value_stream) -> None:
    details = read_relation_details(value_stream("DAN = { cached_sum = -85 }"))
    assert details.value == -85


def test_defaults_for_empty_block(value_stream) -> None:
    details = read_relation_details(value_stream("DAN = { }"))
    assert details == RelationDetails()
    assert details.last_war is None
    assert details.military_access is False


def test_military_access_presence_sets_flag(value_stream) -> None:
    # Only the key matters; the value itself is not interpreted.
    details = read_relation_details(value_stream("DAN = { military_access = no }"))
    assert details.military_access is True


def test_unknown_nested_fields_are_skipped(value_stream) -> None:
    stream = value_stream(
        "DAN = { spy_network = { level = 3 history = { 1500.1.1 = { x = 1 } } } value = 7 }"
    )
    assert read_relation_details(stream).value == 7


def test_bad_value_propagates(value_stream) -> None:
    with pytest.raises(MalformedValue):
        read_relation_details(value_stream("DAN = { value = lots }"))


def test_read_relations_maps_tags(value_stream) -> None:
    relations = read_relations(
        value_stream("active_relations = { DAN = { value = 1 } N01 = { value = 2 } junk = 3 }")
    )
    assert {tag: d.value for tag, d in relations.items()} == {"DAN": 1, "N01": 2}


def test_relations_from_sample_file() -> None:
    relations = {}

    def on_section(key: str, stream: TokenStream) -> None:
        relations.update(read_relations(stream))

    table = BindingTable()
    table.register_keyword("active_relations", on_section)
    table.register_regex(".*", ignore_item)

    stream = TokenStream.from_file(sample_file_path("country.txt"))
    parse_with_bindings(stream, table, top_level=True, check_contract=True)

    assert set(relations) == {"DAN", "NOR"}
    assert relations["DAN"].value == -85
    assert relations["DAN"].attitude == "attitude_rivalry"
    assert relations["DAN"].last_war == GameDate(1660, 1, 1)
    assert relations["NOR"].military_access is True
    assert relations["NOR"].last_send_diplomat == GameDate(1444, 11, 11)
