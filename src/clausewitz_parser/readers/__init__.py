"""
Composite readers for save-file sections.

Each reader binds the handful of keys it needs and discards the rest, so
sections written by newer game versions still parse.
"""

from __future__ import annotations

from .entities import GovernmentSection, ProvinceRecord, RelationDetails
from .government import read_government_section, read_reform_stack
from .province import build_province, read_provinces
from .relations import read_relation_details, read_relations

__all__ = [
    "GovernmentSection",
    "ProvinceRecord",
    "RelationDetails",
    "build_province",
    "read_government_section",
    "read_provinces",
    "read_reform_stack",
    "read_relation_details",
    "read_relations",
]
