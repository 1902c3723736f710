from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from clausewitz_parser.cli.utils import load_tree, select_path, write_json, write_text
from clausewitz_parser.loader.serializer import dump_node

console = Console(stderr=True)


class ExportFormat(str, Enum):
    json = "json"
    text = "text"


def export_command(
    source: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    path: Optional[str] = typer.Option(
        None,
        "--path",
        "-p",
        help="Slash-separated keys of the block to export, e.g. provinces/-1",
    ),
    fmt: ExportFormat = typer.Option(
        ExportFormat.json,
        "--format",
        "-f",
        help="json, or text to re-emit clausal text",
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print JSON"),
    lossless: bool = typer.Option(
        False,
        "--lossless",
        help="Emit [key, value] pairs in file order instead of objects",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Report timings"),
):
    """
    Export a parsed file (or one block of it) to JSON or clausal text.
    """
    root = load_tree(source, verbose=verbose)
    node = select_path(root, path) if path else root

    if fmt is ExportFormat.text:
        write_text(dump_node(node), out=out)
    else:
        write_json(node, out=out, pretty=pretty, lossless=lossless)

    if verbose:
        console.log(f"Exported {len(node)} entries as {fmt.value}")
