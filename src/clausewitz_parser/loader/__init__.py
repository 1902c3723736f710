# src/clausewitz_parser/loader/__init__.py

"""
Public interface for the clausal-text loader stack.

Intended usage from other parts of the project and tests:

    from clausewitz_parser.loader import (
        TokenStream,
        parse_text,
        BindingTable,
        parse_with_bindings,
        read_int,
        ignore_item,
    )
"""

from __future__ import annotations

from .dispatch import BindingTable, DispatchState, Handler, KeywordParser, parse_with_bindings
from .object_node import ANONYMOUS, Entry, ObjectNode, Value
from .readers import (
    discard_value,
    ignore_item,
    read_bool,
    read_float,
    read_float_list,
    read_int,
    read_int_list,
    read_string,
    read_string_list,
)
from .serializer import dump_node, dump_value, quote
from .tokenizer import Token, TokenKind, TokenStream, next_token, tokenize, tokenize_file
from .tree_builder import build_tree, parse_block, parse_file, parse_text, read_object, read_value


__all__ = [
    "ANONYMOUS",
    "BindingTable",
    "DispatchState",
    "Entry",
    "Handler",
    "KeywordParser",
    "ObjectNode",
    "Token",
    "TokenKind",
    "TokenStream",
    "Value",
    "build_tree",
    "discard_value",
    "dump_node",
    "dump_value",
    "ignore_item",
    "next_token",
    "parse_block",
    "parse_file",
    "parse_text",
    "parse_with_bindings",
    "quote",
    "read_bool",
    "read_float",
    "read_float_list",
    "read_int",
    "read_int_list",
    "read_object",
    "read_string",
    "read_string_list",
    "read_value",
    "tokenize",
    "tokenize_file",
]
