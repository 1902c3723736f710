from __future__ import annotations

from typing import Set

from clausewitz_parser.loader.dispatch import BindingTable, parse_with_bindings
from clausewitz_parser.loader.readers import ignore_item, read_string, read_string_list
from clausewitz_parser.loader.tokenizer import TokenStream
from clausewitz_parser.readers.entities import GovernmentSection


def read_reform_stack(stream: TokenStream) -> Set[str]:
    """
    Read a ``reform_stack = { reforms = { ... } history = { ... } }`` block
    and return the set of active reforms.
    """
    reforms: Set[str] = set()

    def on_reforms(key: str, s: TokenStream) -> None:
        reforms.update(read_string_list(s))

    table = BindingTable()
    table.register_keyword("reforms", on_reforms)
    table.register_regex(".*", ignore_item)

    parse_with_bindings(stream, table)
    return reforms


def read_government_section(stream: TokenStream) -> GovernmentSection:
    """
    Read a country's ``government = { government = ... reform_stack = {...} }``.
    """
    section = GovernmentSection()

    def on_government(key: str, s: TokenStream) -> None:
        section.government = read_string(s)

    def on_reform_stack(key: str, s: TokenStream) -> None:
        section.reforms = read_reform_stack(s)

    table = BindingTable()
    table.register_keyword("government", on_government)
    table.register_keyword("reform_stack", on_reform_stack)
    table.register_regex(".*", ignore_item)

    parse_with_bindings(stream, table)
    return section
