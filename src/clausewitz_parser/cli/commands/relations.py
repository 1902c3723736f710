from __future__ import annotations

from pathlib import Path
from typing import Dict

import typer
from rich.console import Console
from rich.table import Table

from clausewitz_parser.cli.utils import fail
from clausewitz_parser.core.exceptions import PipelineError
from clausewitz_parser.loader.dispatch import BindingTable
from clausewitz_parser.loader.readers import ignore_item
from clausewitz_parser.loader.tokenizer import TokenStream
from clausewitz_parser.parser_core import ClausewitzParser
from clausewitz_parser.readers.entities import RelationDetails
from clausewitz_parser.readers.relations import read_relations

console = Console()


def relations_command(
    source: Path = typer.Argument(..., exists=True, readable=True),
    section: str = typer.Option(
        "active_relations",
        "--section",
        "-s",
        help="Top-level key holding the TAG = { ... } relation blocks",
    ),
):
    """
    List relationship records from a relations section.
    """
    relations: Dict[str, RelationDetails] = {}

    def on_section(key: str, stream: TokenStream) -> None:
        relations.update(read_relations(stream))

    table = BindingTable()
    table.register_keyword(section, on_section)
    table.register_regex(".*", ignore_item)

    try:
        ClausewitzParser().run_bindings(source, table)
    except PipelineError as exc:
        fail(exc)

    out = Table(title=f"Relations ({section})")
    out.add_column("Tag", style="bold")
    out.add_column("Value", justify="right")
    out.add_column("Military access")
    out.add_column("Last war")
    out.add_column("Attitude")

    for tag, details in sorted(relations.items()):
        out.add_row(
            tag,
            str(details.value),
            "yes" if details.military_access else "no",
            str(details.last_war) if details.last_war else "-",
            details.attitude or "-",
        )

    console.print(out)
