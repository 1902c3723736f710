"""
CLI command modules for clausewitz_parser.

Each command module defines a single Typer-compatible command function.
"""

from clausewitz_parser.cli.commands.export import export_command
from clausewitz_parser.cli.commands.relations import relations_command
from clausewitz_parser.cli.commands.stats import stats_command

__all__ = [
    "export_command",
    "relations_command",
    "stats_command",
]
