"""
Exporter package.

Re-exports the JSON export entry points used by the CLI.
"""

from __future__ import annotations

from .json_exporter import dumps, export_tree_to_json, to_json_compatible

__all__ = ["dumps", "export_tree_to_json", "to_json_compatible"]
