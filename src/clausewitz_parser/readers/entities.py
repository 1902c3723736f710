from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

from clausewitz_parser.dates.normalizer import GameDate


@dataclass(slots=True)
class RelationDetails:
    """
    One country's standing towards another (``active_relations.TAG``).

    `value` comes from ``value`` in older saves and ``cached_sum`` in newer
    ones; `military_access` is set by the mere presence of the key.
    """
    value: int = 0
    military_access: bool = False
    last_send_diplomat: Optional[GameDate] = None
    last_war: Optional[GameDate] = None
    attitude: str = ""


@dataclass(slots=True)
class GovernmentSection:
    government: str = ""
    reforms: Set[str] = field(default_factory=set)


@dataclass(slots=True)
class ProvinceRecord:
    """
    Province fields read from a save's ``provinces`` block.

    Tests/builders expect:
      - ProvinceRecord(number=1, name="Stockholm")
      - cores in file order, duplicates preserved
    """
    number: int
    name: str = ""
    owner: str = ""
    base_tax: float = 0.0
    base_production: float = 0.0
    base_manpower: float = 0.0
    cores: List[str] = field(default_factory=list)
    in_hre: bool = False
    trade_goods: str = ""
    buildings: Set[str] = field(default_factory=set)
    great_projects: Set[str] = field(default_factory=set)

    def has_building(self, building: str) -> bool:
        return building in self.buildings or building in self.great_projects

    def add_core(self, tag: str) -> None:
        self.cores.append(tag)

    def remove_core(self, tag: str) -> None:
        self.cores = [core for core in self.cores if core != tag]
