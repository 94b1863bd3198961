"""TournamentConfig data class."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ringsteward.constants import (
    DEFAULT_DIVISION_ORDER,
    DEFAULT_DIVISIONS,
    DEFAULT_HISTORY_DEPTH,
    PHYSICAL_RING_PREFIX,
    RING_COLOR_MAP,
)


@dataclass
class Division:
    """Top-level bracket scoping categories.

    Attributes
    ----------
    name : str
        Division name, e.g. ``"Black Belt"``.
    order : int
        Sort position when divisions are listed.
    num_rings : int
        Physical rings configured for this division.
    abbreviation : str or None
        Short designator such as ``"BLKB"``.
    """

    name: str
    order: int = DEFAULT_DIVISION_ORDER
    num_rings: int = 2
    abbreviation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize division to dictionary."""
        return {
            "name": self.name,
            "order": self.order,
            "num_rings": self.num_rings,
            "abbreviation": self.abbreviation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Division":
        """Deserialize division from dictionary."""
        return cls(
            name=data["name"],
            order=data.get("order", DEFAULT_DIVISION_ORDER),
            num_rings=data.get("num_rings", data.get("numRings", 2)),
            abbreviation=data.get("abbreviation"),
        )


@dataclass
class PhysicalRing:
    """A named, colored real-world competition area."""

    id: str
    name: str
    color: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize physical ring to dictionary."""
        return {"id": self.id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhysicalRing":
        """Deserialize physical ring from dictionary."""
        return cls(id=data["id"], name=data.get("name", data["id"]), color=data.get("color", ""))


def default_physical_ring(number: int) -> PhysicalRing:
    """Physical ring ``PR<number>`` with its standard color."""
    return PhysicalRing(
        id=f"{PHYSICAL_RING_PREFIX}{number}",
        name=f"Ring {number}",
        color=RING_COLOR_MAP.get(number, ""),
    )


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    divisions : list of Division
        Configured divisions with their ring counts.
    physical_rings : list of PhysicalRing
        Physical rings available at the venue. When empty, rings ``PR1..PRn``
        are synthesized per division.
    school_abbreviations : dict of str to str
        Short names for schools, used by printouts.
    history_depth : int
        Maximum number of undo snapshots kept.
    """

    name: str = "Untitled Tournament"
    divisions: List[Division] = field(
        default_factory=lambda: [Division.from_dict(d) for d in DEFAULT_DIVISIONS]
    )
    physical_rings: List[PhysicalRing] = field(default_factory=list)
    school_abbreviations: Dict[str, str] = field(default_factory=dict)
    history_depth: int = DEFAULT_HISTORY_DEPTH

    def get_division(self, name: str) -> Optional[Division]:
        """Look up a division by name."""
        for division in self.divisions:
            if division.name == name:
                return division
        return None

    def division_order(self, name: str) -> int:
        """Sort key for a division name; unknown divisions sort last."""
        division = self.get_division(name)
        return division.order if division else DEFAULT_DIVISION_ORDER

    def ring_count(self, division: str) -> int:
        """Number of physical rings configured for a division."""
        found = self.get_division(division)
        return found.num_rings if found else 0

    def venue_ring_count(self) -> int:
        """Rings at the venue: the configured rings, else the largest division's count."""
        if self.physical_rings:
            return len(self.physical_rings)
        return max((d.num_rings for d in self.divisions), default=0)

    def resources_for_division(self, division: str) -> List[PhysicalRing]:
        """Physical rings a division's categories may be assigned to."""
        count = self.ring_count(division)
        if self.physical_rings:
            return list(self.physical_rings[:count])
        return [default_physical_ring(i) for i in range(1, count + 1)]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "divisions": [d.to_dict() for d in self.divisions],
            "physical_rings": [r.to_dict() for r in self.physical_rings],
            "school_abbreviations": dict(self.school_abbreviations),
            "history_depth": self.history_depth,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        config = cls(
            name=data.get("name", "Untitled Tournament"),
            physical_rings=[
                PhysicalRing.from_dict(r)
                for r in data.get("physical_rings", data.get("physicalRings", []))
            ],
            school_abbreviations=dict(
                data.get("school_abbreviations", data.get("schoolAbbreviations", {}))
            ),
            history_depth=data.get("history_depth", DEFAULT_HISTORY_DEPTH),
        )
        if "divisions" in data:
            config.divisions = [Division.from_dict(d) for d in data["divisions"]]
        return config
