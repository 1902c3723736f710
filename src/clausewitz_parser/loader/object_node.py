# src/clausewitz_parser/loader/object_node.py

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

# str for a scalar, tuple for a list of scalars, ObjectNode for a block.
Value = Union[str, Tuple[str, ...], "ObjectNode"]

# Key used for bare items and anonymous blocks.
ANONYMOUS = ""


@dataclass(frozen=True)
class Entry:
    """One ``key = value`` statement of a block."""

    key: str
    value: Value
    line: int = field(default=0, compare=False)


@dataclass
class ObjectNode:
    """
    Schema-free parse of one block.

    Attributes:
        key: Key the block was assigned to in its parent ("" for the root
            and for anonymous blocks).
        line: Line of the opening brace (or 1 for the root).

    Entries keep their original order and keys may repeat: ``core = A``
    followed by ``core = B`` yields two entries, both retrievable. The node
    accepts new entries until ``close()`` is called by the tree builder
    once its closing delimiter has been consumed.
    """

    key: str = ANONYMOUS
    line: int = field(default=0, compare=False)
    _entries: List[Entry] = field(default_factory=list, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False, compare=False)

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Tuple[str, Value]],
        key: str = ANONYMOUS,
    ) -> "ObjectNode":
        node = cls(key=key)
        for k, v in pairs:
            node.add(k, v)
        node.close()
        return node

    def add(self, key: str, value: Value, line: int = 0) -> None:
        if self._closed:
            raise RuntimeError(f"block {self.key!r} is closed; entries are read-only")
        self._entries.append(Entry(key, value, line))

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------ #
    # Core helpers
    # ------------------------------------------------------------------ #

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return any(e.key == key for e in self._entries)

    def keys(self) -> List[str]:
        """Distinct keys in first-seen order."""
        return list(dict.fromkeys(e.key for e in self._entries))

    def items(self) -> List[Tuple[str, Value]]:
        return [(e.key, e.value) for e in self._entries]

    def key_counts(self) -> Counter:
        return Counter(e.key for e in self._entries)

    # ------------------------------------------------------------------ #
    # Public query API
    # ------------------------------------------------------------------ #

    def get_values(self, key: str) -> List[Value]:
        """All values assigned to `key`, in order."""
        return [e.value for e in self._entries if e.key == key]

    def get_first(self, key: str, default: Optional[Value] = None) -> Optional[Value]:
        for e in self._entries:
            if e.key == key:
                return e.value
        return default

    def get_leaf(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """First scalar assigned to `key`."""
        for value in self.get_values(key):
            if isinstance(value, str):
                return value
        return default

    def get_leaves(self, key: str) -> List[str]:
        """Every scalar assigned to `key` (e.g. repeated ``core = TAG``)."""
        return [v for v in self.get_values(key) if isinstance(v, str)]

    def get_tokens(self, key: str) -> List[str]:
        """
        Scalars of the first list assigned to `key`.

        A lone scalar is returned as a one-element list; a block yields its
        bare items.
        """
        value = self.get_first(key)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, tuple):
            return list(value)
        return value.get_leaves(ANONYMOUS)

    def get_nodes(self, key: str) -> List["ObjectNode"]:
        return [v for v in self.get_values(key) if isinstance(v, ObjectNode)]

    def get_node(self, key: str) -> Optional["ObjectNode"]:
        nodes = self.get_nodes(key)
        return nodes[0] if nodes else None

    def find(self, *keys: str) -> Optional[Value]:
        """
        Follow the first block under each key and return the value of the
        last one, e.g. ``node.find("history", "1444.11.11", "owner")``.
        """
        current: Value = self
        for key in keys:
            if not isinstance(current, ObjectNode):
                return None
            found = current.get_first(key)
            if found is None:
                return None
            current = found
        return current

    def iter_subtree(self) -> Iterator["ObjectNode"]:
        """Yield this node and all nested nodes in depth-first order."""
        yield self
        for e in self._entries:
            if isinstance(e.value, ObjectNode):
                yield from e.value.iter_subtree()

    def depth(self) -> int:
        """Nesting depth below this node (0 for a node with no blocks)."""
        child_depths = [
            e.value.depth() + 1 for e in self._entries if isinstance(e.value, ObjectNode)
        ]
        return max(child_depths, default=0)

    # ------------------------------------------------------------------ #
    # Plain-data views
    # ------------------------------------------------------------------ #

    def to_data(self) -> List[List[Any]]:
        """Lossless nested ``[key, value]`` pairs (lists for list values)."""
        return [[e.key, _value_to_data(e.value, lossless=True)] for e in self._entries]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convenience mapping; keys that repeat collect their values in a list.

        Lossy: a repeated scalar key and a list value look alike.
        """
        result: Dict[str, Any] = {}
        counts = self.key_counts()
        for e in self._entries:
            value = _value_to_data(e.value, lossless=False)
            if counts[e.key] > 1:
                result.setdefault(e.key, []).append(value)
            else:
                result[e.key] = value
        return result

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<ObjectNode {self.key!r} entries={len(self._entries)}>"


def _value_to_data(value: Value, *, lossless: bool) -> Any:
    if isinstance(value, ObjectNode):
        return value.to_data() if lossless else value.to_dict()
    if isinstance(value, tuple):
        return list(value)
    return value
