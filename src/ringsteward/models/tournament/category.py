"""Category data class."""

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
from typing import Any, Dict, List

from ringsteward.constants import DEFAULT_NUM_POOLS, GENDER_MIXED, OPEN_MAX_AGE
from ringsteward.type_hints import FORMS, EventType, Gender
from ringsteward.utils.validation import pool_label


@dataclass
class Category:
    """A judged grouping of competitors within a division and event type.

    Attributes
    ----------
    id : str
        Unique category identifier.
    name : str
        Display name, e.g. ``"Mixed 8-10"``.
    division : str
        Division the category belongs to.
    event_type : str
        ``"forms"`` or ``"sparring"``.
    gender : str
        Demographic filter: ``"male"``, ``"female"`` or ``"mixed"``.
    min_age, max_age : int
        Inclusive age range of the filter.
    competitor_ids : list of str
        Member competitor ids.
    num_pools : int
        Number of physical rings the category requires.
    """

    id: str
    name: str
    division: str
    event_type: EventType = FORMS
    gender: Gender = GENDER_MIXED
    min_age: int = 0
    max_age: int = OPEN_MAX_AGE
    competitor_ids: List[str] = field(default_factory=list)
    num_pools: int = DEFAULT_NUM_POOLS

    @property
    def pool_labels(self) -> List[str]:
        """Labels of every pool in order: P1..Pn."""
        return [pool_label(i) for i in range(1, self.num_pools + 1)]

    def pool_name(self, pool: str) -> str:
        """Ring display name for one of this category's pools."""
        return f"{self.name}_{pool}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize category to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "division": self.division,
            "event_type": self.event_type,
            "gender": self.gender,
            "min_age": self.min_age,
            "max_age": self.max_age,
            "competitor_ids": list(self.competitor_ids),
            "num_pools": self.num_pools,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        """Deserialize category from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            division=data["division"],
            event_type=data.get("event_type", data.get("type", FORMS)),
            gender=str(data.get("gender", GENDER_MIXED)).lower(),
            min_age=data.get("min_age", 0),
            max_age=data.get("max_age", OPEN_MAX_AGE),
            competitor_ids=list(data.get("competitor_ids", [])),
            num_pools=data.get("num_pools", DEFAULT_NUM_POOLS),
        )
