from __future__ import annotations

import re
from typing import Dict, Optional, Set

from clausewitz_parser.core.exceptions import MalformedValue
from clausewitz_parser.loader.object_node import ANONYMOUS, ObjectNode
from clausewitz_parser.logging import get_logger
from clausewitz_parser.readers.entities import ProvinceRecord

log = get_logger("province")

_PROVINCE_KEY_RE = re.compile(r"-?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")


def _leaf_float(node: ObjectNode, key: str) -> float:
    text = node.get_leaf(key)
    if text is None:
        return 0.0
    if not _FLOAT_RE.fullmatch(text):
        raise MalformedValue(f"{key}: expected a number, found {text!r}", key_path=f"{node.key}.{key}")
    return float(text)


def _member_names(value: Optional[ObjectNode]) -> Set[str]:
    """Keys of a ``{ fort_15th = yes }`` block plus any bare items in it."""
    if value is None:
        return set()
    names = {key for key in value.keys() if key != ANONYMOUS}
    names.update(value.get_leaves(ANONYMOUS))
    return names


def build_province(key: str, node: ObjectNode) -> ProvinceRecord:
    """
    Build a ProvinceRecord from a ``-12 = { ... }`` block of a save.

    PURE FUNCTION over the generic tree:
      - province number from the key (saves write it negated)
      - pre-1.12 saves: production copied from tax, ``manpower`` for
        ``base_manpower``
      - 1.23+ ``cores = { A B }`` list, or repeated pre-1.23 ``core = A``
    """
    if not _PROVINCE_KEY_RE.fullmatch(key):
        raise MalformedValue(f"not a province key: {key!r}", key_path=key)

    province = ProvinceRecord(number=abs(int(key)))
    province.name = node.get_leaf("name", "")
    province.owner = node.get_leaf("owner", "")
    province.trade_goods = node.get_leaf("trade_goods", "")
    province.in_hre = node.get_leaf("hre") == "yes"

    province.base_tax = _leaf_float(node, "base_tax")
    province.base_production = _leaf_float(node, "base_production")
    province.base_manpower = _leaf_float(node, "base_manpower")

    if province.base_production == 0.0 and province.base_tax > 0.0:
        province.base_production = province.base_tax
    if province.base_manpower == 0.0:
        province.base_manpower = _leaf_float(node, "manpower")

    if len(node.get_values("cores")) == 1:
        province.cores = node.get_tokens("cores")
    else:
        province.cores = node.get_leaves("core")

    province.buildings = _member_names(node.get_node("buildings"))
    projects = node.get_first("great_projects")
    if isinstance(projects, tuple):
        province.great_projects = set(projects)
    elif isinstance(projects, str):
        province.great_projects = {projects}
    else:
        province.great_projects = _member_names(projects)

    return province


def read_provinces(node: ObjectNode) -> Dict[int, ProvinceRecord]:
    """
    Build every province of a ``provinces = { ... }`` block.

    A province with a malformed field is logged and skipped; the rest of
    the block is still read.
    """
    provinces: Dict[int, ProvinceRecord] = {}

    for entry in node:
        if not isinstance(entry.value, ObjectNode):
            continue
        try:
            province = build_province(entry.key, entry.value)
        except MalformedValue as exc:
            log.warning("Skipping province %r: %s", entry.key, exc)
            continue
        provinces[province.number] = province

    return provinces
