"""
parser_core.py
File-level parsing engine with full logging integration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from clausewitz_parser.config import get_config
from clausewitz_parser.core.exceptions import ClausewitzError, ParseExecutionError
from clausewitz_parser.loader.dispatch import BindingTable, parse_with_bindings
from clausewitz_parser.loader.object_node import ObjectNode
from clausewitz_parser.loader.tokenizer import TokenStream
from clausewitz_parser.loader.tree_builder import build_tree
from clausewitz_parser.logging import get_logger


class ClausewitzParser:
    """
    High-level parser:
      - loads file
      - builds the generic tree, or
      - drives a binding table over the whole document

    A failure surfaces as one ParseExecutionError naming the file and the
    location of the faulty statement.
    """

    def __init__(self, config=None):
        self.cfg = config if config is not None else get_config()
        self.log = get_logger("parser_core")

        self.stream: Optional[TokenStream] = None
        self.root: Optional[ObjectNode] = None

        self.log.debug("Parser engine initialized.")

    # ---------------------------------------------------------
    # Load file
    # ---------------------------------------------------------
    def load_file(self, path: Union[str, Path]) -> TokenStream:
        """Read the file into a fresh token stream."""
        self.log.info(f"Reading input: {path}")
        self.stream = TokenStream.from_file(path, encoding=self.cfg.encoding)

        if self.cfg.debug:
            self.log.debug(f"Read {len(self.stream.text)} characters from {path}")
        return self.stream

    # ---------------------------------------------------------
    # Generic tree / bound parse
    # ---------------------------------------------------------
    def run(self, input_path: Union[str, Path]) -> ObjectNode:
        """
        Full parse sequence.
        Returns: root ObjectNode
        """
        stream = self.load_file(input_path)

        try:
            self.root = build_tree(stream)
        except ClausewitzError as exc:
            self.log.error(f"Parse failed: {exc}")
            raise ParseExecutionError(f"Failed to parse {input_path}: {exc}") from exc

        self.log.info(f"Parsed {input_path}: {len(self.root)} top-level entries")
        return self.root

    def run_bindings(self, input_path: Union[str, Path], table: BindingTable) -> None:
        """Parse the whole file with `table` instead of building a tree."""
        stream = self.load_file(input_path)

        try:
            parse_with_bindings(
                stream,
                table,
                top_level=True,
                check_contract=self.cfg.check_handler_contract,
            )
        except ClausewitzError as exc:
            self.log.error(f"Parse failed: {exc}")
            raise ParseExecutionError(f"Failed to parse {input_path}: {exc}") from exc

        self.log.info(f"Parsed {input_path} with bindings")
