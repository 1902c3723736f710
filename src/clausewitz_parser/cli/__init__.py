"""
CLI package for clausewitz_parser.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from clausewitz_parser.cli.app import app, main

__all__ = [
    "app",
    "main",
]
