# src/clausewitz_parser/loader/serializer.py

"""
ObjectNode -> clausal text.

Re-parsing the output yields a structurally identical tree: same key
order, same nesting, same scalar/list/block classification. Comments and
the original layout are not reproduced. Lists are always written in braces
(``cores = { A B C }``) so a list never runs into the next statement.

Limitation: a bare item written directly after a scalar- or list-valued
statement is read back as part of that value, because the text has no way
to separate them.
"""

from __future__ import annotations

import re
from typing import List

from .object_node import ANONYMOUS, ObjectNode, Value

_BARE_SAFE = re.compile(r'[^\s={}#"]+')


def quote(text: str) -> str:
    """Return `text` as a bare word when possible, quoted otherwise."""
    if _BARE_SAFE.fullmatch(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def dump_value(value: Value, indent: str = "\t", level: int = 0) -> str:
    if isinstance(value, ObjectNode):
        if not len(value):
            return "{ }"
        inner = _dump_entries(value, indent, level + 1)
        return "{\n" + inner + indent * level + "}"
    if isinstance(value, tuple):
        return "{ " + " ".join(quote(v) for v in value) + " }"
    return quote(value)


def _dump_entries(node: ObjectNode, indent: str, level: int) -> str:
    lines: List[str] = []
    pad = indent * level
    for entry in node:
        rendered = dump_value(entry.value, indent, level)
        if entry.key == ANONYMOUS:
            lines.append(f"{pad}{rendered}\n")
        else:
            lines.append(f"{pad}{quote(entry.key)} = {rendered}\n")
    return "".join(lines)


def dump_node(node: ObjectNode, indent: str = "\t") -> str:
    """Render the statements of `node` as a document (no enclosing braces)."""
    return _dump_entries(node, indent, 0)
