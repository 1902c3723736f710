from __future__ import annotations

from typing import Dict

from clausewitz_parser.dates.normalizer import read_date
from clausewitz_parser.loader.dispatch import BindingTable, parse_with_bindings
from clausewitz_parser.loader.readers import ignore_item, read_int, read_string
from clausewitz_parser.loader.tokenizer import TokenStream
from clausewitz_parser.readers.entities import RelationDetails

# Country tags: three upper-case letters or digits (SWE, D01, ...).
TAG_PATTERN = r"[A-Z0-9]{3}"


def read_relation_details(stream: TokenStream) -> RelationDetails:
    """
    Read one ``TAG = { ... }`` relationship block.

    Fields not listed here (trust, spy_network, ...) are discarded, so
    keys added by later game versions are tolerated.
    """
    details = RelationDetails()

    def on_value(key: str, s: TokenStream) -> None:
        details.value = read_int(s)

    def on_military_access(key: str, s: TokenStream) -> None:
        ignore_item(key, s)
        details.military_access = True

    def on_last_send_diplomat(key: str, s: TokenStream) -> None:
        details.last_send_diplomat = read_date(s)

    def on_last_war(key: str, s: TokenStream) -> None:
        details.last_war = read_date(s)

    def on_attitude(key: str, s: TokenStream) -> None:
        details.attitude = read_string(s)

    table = BindingTable()
    table.register_regex("value|cached_sum", on_value)
    table.register_keyword("military_access", on_military_access)
    table.register_keyword("last_send_diplomat", on_last_send_diplomat)
    table.register_keyword("last_war", on_last_war)
    table.register_keyword("attitude", on_attitude)
    table.register_regex(".*", ignore_item)

    parse_with_bindings(stream, table)
    return details


def read_relations(stream: TokenStream) -> Dict[str, RelationDetails]:
    """Read ``active_relations = { SWE = { ... } DAN = { ... } }``."""
    relations: Dict[str, RelationDetails] = {}

    def on_tag(key: str, s: TokenStream) -> None:
        relations[key] = read_relation_details(s)

    table = BindingTable()
    table.register_regex(TAG_PATTERN, on_tag)
    table.register_regex(".*", ignore_item)

    parse_with_bindings(stream, table)
    return relations
