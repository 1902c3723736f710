from __future__ import annotations

import typer

from clausewitz_parser.cli.commands.export import export_command
from clausewitz_parser.cli.commands.relations import relations_command
from clausewitz_parser.cli.commands.stats import stats_command

app = typer.Typer(
    name="clausewitz",
    help="Parse, inspect and export clausal game files (saves, history, definitions)",
    add_completion=False,
    no_args_is_help=True,
)

app.command("export")(export_command)
app.command("stats")(stats_command)
app.command("relations")(relations_command)


def main():
    app()


if __name__ == "__main__":
    main()
