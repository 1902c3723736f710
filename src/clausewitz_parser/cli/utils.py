from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console

from clausewitz_parser.core.exceptions import PipelineError
from clausewitz_parser.exporter import dumps
from clausewitz_parser.loader.object_node import ObjectNode
from clausewitz_parser.parser_core import ClausewitzParser

console = Console(stderr=True)


def load_tree(path: Path, *, verbose: bool = False) -> ObjectNode:
    """
    Parse `path` into its root ObjectNode.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()

    try:
        root = ClausewitzParser().run(path)
    except PipelineError as exc:
        fail(exc)

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Parsed {path.name} in {elapsed:.2f}s")

    return root


def fail(exc: Exception) -> NoReturn:
    """Report `exc` as one line on stderr and exit with status 1."""
    console.print(
        f"Error: {exc}", style="bold red", markup=False, highlight=False, soft_wrap=True
    )
    raise typer.Exit(1) from exc


def select_path(root: ObjectNode, path: str) -> ObjectNode:
    """Follow ``a/b/c`` (first block under each key) from `root`."""
    keys = [k for k in path.split("/") if k]
    found = root.find(*keys)
    if not isinstance(found, ObjectNode):
        raise typer.BadParameter(f"no block at {path!r}", param_hint="--path")
    return found


def write_json(
    data: Any,
    *,
    out: Path | None,
    pretty: bool,
    lossless: bool = False,
):
    """
    Write JSON to stdout or file.
    """
    write_text(dumps(data, pretty=pretty, lossless=lossless), out=out)


def write_text(payload: str, *, out: Path | None):
    if out:
        out.write_text(payload, encoding="utf-8")
    else:
        typer.echo(payload, nl=not payload.endswith("\n"))


@dataclass
class TreeStats:
    entries: int = 0
    blocks: int = 0
    lists: int = 0
    scalars: int = 0
    max_depth: int = 0
    top_keys: Counter = field(default_factory=Counter)


def tree_stats(root: ObjectNode) -> TreeStats:
    """Count statements by value shape across the whole tree."""
    stats = TreeStats(max_depth=root.depth(), top_keys=root.key_counts())

    for node in root.iter_subtree():
        for entry in node:
            stats.entries += 1
            if isinstance(entry.value, ObjectNode):
                stats.blocks += 1
            elif isinstance(entry.value, tuple):
                stats.lists += 1
            else:
                stats.scalars += 1

    return stats
