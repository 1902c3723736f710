# tests/test_tree_builder.py

from __future__ import annotations

import pytest

from clausewitz_parser.core.exceptions import UnexpectedToken, UnterminatedBlock
from clausewitz_parser.loader import (
    ANONYMOUS,
    ObjectNode,
    TokenStream,
    parse_block,
    parse_file,
    parse_text,
    read_object,
)
from clausewitz_parser.utils import sample_file_path


def test_parse_text_returns_root_node() -> None:
    root = parse_text("owner = SWE")
    assert isinstance(root, ObjectNode)
    assert root.items() == [("owner", "SWE")]
    assert root.closed


def test_repeated_keys_are_preserved_in_order() -> None:
    root = parse_text("a=1 a=2 a=3")
    assert len(root) == 3
    assert root.get_values("a") == ["1", "2", "3"]
    assert [e.key for e in root] == ["a", "a", "a"]


def test_bare_run_is_a_single_list_value() -> None:
    root = parse_text("cores = TAG1 TAG2 TAG3")
    assert len(root) == 1
    assert root.get_first("cores") == ("TAG1", "TAG2", "TAG3")


def test_bare_run_stops_before_next_key() -> None:
    root = parse_text("cores = A B C owner = SWE")
    assert root.items() == [("cores", ("A", "B", "C")), ("owner", "SWE")]


def test_single_scalar_followed_by_key_stays_scalar() -> None:
    root = parse_text("a = 1 b = 2")
    assert root.items() == [("a", "1"), ("b", "2")]


def test_scalar_before_keyed_block_is_not_swallowed() -> None:
    root = parse_text("a = x history { owner = SWE }")
    assert root.get_first("a") == "x"
    assert isinstance(root.get_first("history"), ObjectNode)


def test_brace_list_collapses_to_tuple() -> None:
    root = parse_text('flags = { flag_a "flag b" 3 }')
    assert root.get_first("flags") == ("flag_a", "flag b", "3")


def test_nested_blocks() -> None:
    root = parse_text("history = { 1444.1.1 = { owner = SWE controller = { tag = SWE } } }")
    history = root.get_node("history")
    assert history is not None
    assert history.key == "history"
    entry = history.get_node("1444.1.1")
    assert entry.get_leaf("owner") == "SWE"
    assert root.find("history", "1444.1.1", "controller", "tag") == "SWE"


def test_empty_block_is_a_node() -> None:
    root = parse_text("empty = { }")
    value = root.get_first("empty")
    assert isinstance(value, ObjectNode)
    assert len(value) == 0


def test_anonymous_blocks_and_bare_items() -> None:
    root = parse_text("armies = { { size = 1 } { size = 2 } } mixed = { A B c = 1 }")
    armies = root.get_node("armies")
    assert [n.get_leaf("size") for n in armies.get_nodes(ANONYMOUS)] == ["1", "2"]

    mixed = root.get_node("mixed")
    assert mixed.items() == [(ANONYMOUS, "A"), (ANONYMOUS, "B"), ("c", "1")]


def test_keyed_block_without_assign() -> None:
    root = parse_text("color { 10 20 30 } name = x")
    assert root.get_first("color") == ("10", "20", "30")
    assert root.get_leaf("name") == "x"


def test_comments_are_ignored() -> None:
    root = parse_text("# heading\na = 1 # note\n# b = 2\n")
    assert root.items() == [("a", "1")]


def test_stray_closing_brace_at_top_level_is_skipped() -> None:
    root = parse_text("a = 1 } b = 2")
    assert root.items() == [("a", "1"), ("b", "2")]


def test_unterminated_block_reports_key_path() -> None:
    text = "history = {\n 1444.1.1 = {\n  owner = SWE\n"
    with pytest.raises(UnterminatedBlock) as info:
        parse_text(text, source="province.txt")

    err = info.value
    assert err.key_path == "history.1444.1.1"
    assert err.source == "province.txt"
    assert err.line == 2


def test_error_inside_nested_statement_carries_full_path() -> None:
    with pytest.raises(UnexpectedToken) as info:
        parse_text("history = { 1444.1.1 = { owner = } }")
    assert info.value.key_path == "history.1444.1.1.owner"


def test_assign_where_key_expected_raises() -> None:
    with pytest.raises(UnexpectedToken):
        parse_text("= 5")


def test_parse_block_after_open_brace() -> None:
    stream = TokenStream("{ a = 1 } rest = 2")
    open_tok = stream.next_token()
    node = parse_block(stream, open_token=open_tok)
    assert node.items() == [("a", "1")]
    assert stream.peek().value == "rest"


def test_read_object_wraps_lists_as_bare_items() -> None:
    stream = TokenStream("x = { A B }")
    stream.next_token()
    stream.next_token()
    node = read_object(stream, key="x")
    assert node.key == "x"
    assert node.get_leaves(ANONYMOUS) == ["A", "B"]


def test_parse_file_sample() -> None:
    root = parse_file(sample_file_path("nested.txt"))

    assert root.get_leaf("version") == "1.30.6.0"
    assert root.get_leaf("date") == "1444.11.11"
    assert root.get_first("flags") == ("flag_a", "flag_b", "flag_c")
    assert root.get_first("cores") == ("TAG1", "TAG2", "TAG3")
    assert root.get_leaves("core") == ["SWE", "DAN", "NOR"]
    assert root.get_leaf("name") == "Kingdom of Sweden"
    assert root.find("history", "1500.6.1", "owner") == "DAN"
    armies = root.get_node("armies").get_nodes(ANONYMOUS)
    assert [a.get_leaf("name") for a in armies] == ["1st Army", "2nd Army"]
