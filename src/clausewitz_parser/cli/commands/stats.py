from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from clausewitz_parser.cli.utils import load_tree, tree_stats

console = Console()


def stats_command(
    source: Path = typer.Argument(..., exists=True, readable=True),
    top: int = typer.Option(
        10,
        "--top",
        help="Number of most frequent top-level keys to list",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a parsed file.
    """
    stats = tree_stats(load_tree(source, verbose=verbose))

    table = Table(title="Document Statistics")
    table.add_column("Measure", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Statements", str(stats.entries))
    table.add_row("Blocks", str(stats.blocks))
    table.add_row("Lists", str(stats.lists))
    table.add_row("Scalars", str(stats.scalars))
    table.add_row("Max depth", str(stats.max_depth))

    console.print(table)

    keys = Table(title="Top-level keys")
    keys.add_column("Key", style="bold")
    keys.add_column("Occurrences", justify="right")
    for key, count in stats.top_keys.most_common(top):
        keys.add_row(key or "(anonymous)", str(count))

    console.print(keys)
