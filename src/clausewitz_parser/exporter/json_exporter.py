"""
json_exporter.py
JSON exporter for parsed object trees.

This exporter:
- Converts ObjectNode trees and reader dataclasses to plain structures
- Keeps repeated keys (lossless mode keeps exact statement order too)
- Is deterministic
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any

from clausewitz_parser.dates.normalizer import GameDate
from clausewitz_parser.loader.object_node import ObjectNode
from clausewitz_parser.logging import get_logger

log = get_logger("json_exporter")


def to_json_compatible(obj: Any, *, lossless: bool = False) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - ObjectNode → list of [key, value] pairs (lossless) or dict
    - GameDate → "YYYY.M.D"
    - dataclasses → dict (recursively)
    - dict → dict, list / tuple / set → list (sets sorted)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if isinstance(obj, ObjectNode):
        return obj.to_data() if lossless else obj.to_dict()

    if isinstance(obj, GameDate):
        return str(obj)

    if is_dataclass(obj):
        return {
            f.name: to_json_compatible(getattr(obj, f.name), lossless=lossless)
            for f in fields(obj)
        }

    if isinstance(obj, dict):
        return {str(k): to_json_compatible(v, lossless=lossless) for k, v in obj.items()}

    if isinstance(obj, set):
        return sorted(to_json_compatible(v, lossless=lossless) for v in obj)

    if isinstance(obj, (list, tuple)):
        return [to_json_compatible(v, lossless=lossless) for v in obj]

    return str(obj)


def dumps(obj: Any, *, pretty: bool = False, lossless: bool = False) -> str:
    data = to_json_compatible(obj, lossless=lossless)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def export_tree_to_json(
    root: ObjectNode,
    output_path: str | Path,
    *,
    pretty: bool = True,
    lossless: bool = False,
) -> Path:
    """
    Write `root` to `output_path` as JSON, creating parent directories.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps(root, pretty=pretty, lossless=lossless), encoding="utf-8")
    log.info(f"Exported {len(root)} top-level entries to {path}")
    return path
