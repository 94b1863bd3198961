"""The tournament dataset: every entity slice the engine works on."""

# Ring Steward
# Copyright (C) 2025  Ring Steward developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament.category import Category
from ringsteward.models.tournament.mappings import (
    CategoryPoolMapping,
    PhysicalRingMapping,
)
from ringsteward.models.tournament.tournament_config import TournamentConfig


@dataclass
class TournamentDataset:
    """
    The complete, serializable state of one tournament.

    Attributes
    ----------
    competitors : list of Competitor
        Every registered competitor.
    categories : list of Category
        Judged groupings of competitors.
    category_pool_mappings : list of CategoryPoolMapping
        Pool to physical ring bindings written by ring assignment.
    physical_ring_mappings : list of PhysicalRingMapping
        Pool to physical ring display names written by the resource mapper.
    config : TournamentConfig
        Divisions, physical rings and other settings.
    """

    competitors: List[Competitor] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    category_pool_mappings: List[CategoryPoolMapping] = field(default_factory=list)
    physical_ring_mappings: List[PhysicalRingMapping] = field(default_factory=list)
    config: TournamentConfig = field(default_factory=TournamentConfig)

    def clone(self) -> "TournamentDataset":
        """Deep, independent copy of the dataset."""
        return copy.deepcopy(self)

    def get_competitor(self, competitor_id: str) -> Optional[Competitor]:
        for competitor in self.competitors:
            if competitor.id == competitor_id:
                return competitor
        return None

    def get_category(self, category_id: str) -> Optional[Category]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def categories_in(self, division: str, event_type: Optional[str] = None) -> List[Category]:
        """Categories of one division, optionally of one event type."""
        return [
            c
            for c in self.categories
            if c.division == division
            and (event_type is None or c.event_type == event_type)
        ]

    @property
    def divisions(self) -> List[str]:
        """Division names in configured order."""
        return [d.name for d in sorted(self.config.divisions, key=lambda d: d.order)]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize dataset to dictionary."""
        return {
            "competitors": [c.to_dict() for c in self.competitors],
            "categories": [c.to_dict() for c in self.categories],
            "category_pool_mappings": [m.to_dict() for m in self.category_pool_mappings],
            "physical_ring_mappings": [m.to_dict() for m in self.physical_ring_mappings],
            "config": self.config.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentDataset":
        """Deserialize dataset from dictionary.

        The older key names ``cohorts`` and ``cohortRingMappings`` are read
        as aliases of ``categories`` and ``physical_ring_mappings``.
        """
        categories = data.get("categories", data.get("cohorts", []))
        physical = data.get(
            "physical_ring_mappings",
            data.get("physicalRingMappings", data.get("cohortRingMappings", [])),
        )
        pool_mappings = data.get(
            "category_pool_mappings", data.get("categoryPoolMappings", [])
        )
        return cls(
            competitors=[Competitor.from_dict(c) for c in data.get("competitors", [])],
            categories=[Category.from_dict(c) for c in categories],
            category_pool_mappings=[CategoryPoolMapping.from_dict(m) for m in pool_mappings],
            physical_ring_mappings=[PhysicalRingMapping.from_dict(m) for m in physical],
            config=TournamentConfig.from_dict(data.get("config", {})),
        )
