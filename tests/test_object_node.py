# tests/test_object_node.py

from __future__ import annotations

import pytest

from clausewitz_parser.loader import ANONYMOUS, ObjectNode, parse_text


@pytest.fixture
def province() -> ObjectNode:
    return parse_text(
        """
        name = "Stockholm"
        core = SWE
        core = DAN
        cores = { SWE FIN }
        buildings = { marketplace = yes }
        history = { owner = SWE 1444.11.11 = { owner = DAN } }
        history = { owner = NOR }
        """
    )


def test_get_values_and_first(province: ObjectNode) -> None:
    assert province.get_values("core") == ["SWE", "DAN"]
    assert province.get_first("core") == "SWE"
    assert province.get_first("missing") is None
    assert province.get_first("missing", "x") == "x"


def test_get_leaf_skips_blocks(province: ObjectNode) -> None:
    assert province.get_leaf("name") == "Stockholm"
    assert province.get_leaf("history") is None
    assert province.get_leaves("core") == ["SWE", "DAN"]


def test_get_tokens_accepts_scalar_list_and_block() -> None:
    node = parse_text("a = X b = { Y Z } c = { W k = 1 }")
    assert node.get_tokens("a") == ["X"]
    assert node.get_tokens("b") == ["Y", "Z"]
    assert node.get_tokens("c") == ["W"]
    assert node.get_tokens("missing") == []


def test_get_nodes_returns_every_block(province: ObjectNode) -> None:
    histories = province.get_nodes("history")
    assert [h.get_leaf("owner") for h in histories] == ["SWE", "NOR"]
    assert province.get_node("history") is histories[0]
    assert province.get_node("name") is None


def test_find_follows_first_blocks(province: ObjectNode) -> None:
    assert province.find("history", "1444.11.11", "owner") == "DAN"
    assert province.find("history", "missing") is None
    assert province.find("name", "deeper") is None


def test_keys_contains_and_counts(province: ObjectNode) -> None:
    assert province.keys() == ["name", "core", "cores", "buildings", "history"]
    assert "core" in province
    assert "owner" not in province
    assert province.key_counts()["history"] == 2


def test_iter_subtree_and_depth(province: ObjectNode) -> None:
    nodes = list(province.iter_subtree())
    assert nodes[0] is province
    # root, buildings, two histories and the dated entry
    assert len(nodes) == 5
    assert province.depth() == 2
    assert ObjectNode().depth() == 0


def test_closed_node_rejects_new_entries(province: ObjectNode) -> None:
    assert province.closed
    with pytest.raises(RuntimeError):
        province.add("late", "1")


def test_from_pairs_builds_closed_node() -> None:
    node = ObjectNode.from_pairs([("a", "1"), (ANONYMOUS, "B")], key="x")
    assert node.key == "x"
    assert node.items() == [("a", "1"), ("", "B")]
    assert node.closed


def test_equality_ignores_line_numbers() -> None:
    assert parse_text("a = { b = 1 }") == parse_text("\n\na = {\n b = 1\n}")
    assert parse_text("a = 1") != parse_text("a = 2")


def test_to_data_is_lossless() -> None:
    node = parse_text("core = A core = B cores = { C D } h = { x = 1 }")
    assert node.to_data() == [
        ["core", "A"],
        ["core", "B"],
        ["cores", ["C", "D"]],
        ["h", [["x", "1"]]],
    ]


def test_to_dict_collects_repeated_keys() -> None:
    node = parse_text("core = A core = B owner = SWE h = { x = 1 }")
    assert node.to_dict() == {
        "core": ["A", "B"],
        "owner": "SWE",
        "h": {"x": "1"},
    }
