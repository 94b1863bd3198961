"""A competitor entered in one or both events of a tournament."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ringsteward.type_hints import FORMS, SPARRING, AltRing, EventType


@dataclass
class EventParticipation:
    """
    A competitor's entry in one event type.

    Attributes
    ----------
    division : str or None
        Effective division for this event. ``None`` means not competing.
    competing : bool
        Whether the competitor takes part in this event.
    category_id : str or None
        Category the competitor has been grouped into.
    pool : str or None
        Pool label within the category (``"P1"``, ``"P2"``...). Only
        meaningful while ``category_id`` is set.
    rank_order : int or None
        Running order within the pool.
    alt_ring : str
        Sparring only: ``'a'`` or ``'b'`` splits a pool into two alternate
        rings, ``''`` means no split.
    last_category_id : str or None
        Category held before the last withdrawal, for reinstatement.
    last_pool : str or None
        Pool held before the last withdrawal, for reinstatement.
    """

    division: Optional[str] = None
    competing: bool = False
    category_id: Optional[str] = None
    pool: Optional[str] = None
    rank_order: Optional[int] = None
    alt_ring: AltRing = ""
    last_category_id: Optional[str] = None
    last_pool: Optional[str] = None

    @property
    def is_placed(self) -> bool:
        """Competing with both a category and a pool."""
        return bool(self.competing and self.category_id and self.pool)


@dataclass
class Competitor:
    """
    Canonical, mutable competitor entity.

    The identifier is assigned once at import time; every later change is an
    update of fields on the same identity. Assignment functions never mutate
    a competitor they were given: they return updated copies via
    :meth:`with_participation`.

    Attributes
    ----------
    id : str
        Stable unique identifier.
    first_name, last_name : str
        Name parts.
    age : int
        Age in years. The roster's "18 and up" marker is stored as 18.
    gender : str
        Gender as recorded on the roster (e.g. ``"Male"``).
    height_feet, height_inches : int
        Height, used to order sparring pools.
    school : str
        Affiliation.
    branch : str or None
        Optional branch of the school.
    forms : EventParticipation
        Forms entry.
    sparring : EventParticipation
        Sparring entry.

    Examples
    --------
    Creating a competitor::

        competitor = Competitor(
            id="c-001",
            first_name="Ana",
            last_name="Lopez",
            age=9,
            gender="Female",
            forms=EventParticipation(division="Beginner", competing=True),
        )
    """

    id: str
    first_name: str
    last_name: str
    age: int
    gender: str = ""
    height_feet: int = 0
    height_inches: int = 0
    school: str = ""
    branch: Optional[str] = None

    forms: EventParticipation = field(default_factory=EventParticipation)
    sparring: EventParticipation = field(default_factory=EventParticipation)

    @property
    def name(self) -> str:
        """Full display name."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def total_height_inches(self) -> int:
        """Height in inches."""
        return self.height_feet * 12 + self.height_inches

    @property
    def affiliation(self) -> str:
        """School key, including the branch when there is one."""
        return f"{self.school}-{self.branch}" if self.branch else self.school

    def participation(self, event_type: EventType) -> EventParticipation:
        """Return the entry for ``"forms"`` or ``"sparring"``."""
        if event_type == FORMS:
            return self.forms
        if event_type == SPARRING:
            return self.sparring
        raise ValueError(f"Unknown event type: {event_type}")

    def with_participation(self, event_type: EventType, **changes) -> "Competitor":
        """Return a copy with fields of one event entry replaced."""
        updated = replace(self.participation(event_type), **changes)
        if event_type == FORMS:
            return replace(self, forms=updated, sparring=replace(self.sparring))
        return replace(self, forms=replace(self.forms), sparring=updated)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize competitor to a flat dictionary."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "age": self.age,
            "gender": self.gender,
            "height_feet": self.height_feet,
            "height_inches": self.height_inches,
            "school": self.school,
            "branch": self.branch,
            "forms_division": self.forms.division,
            "competing_forms": self.forms.competing,
            "forms_category_id": self.forms.category_id,
            "forms_pool": self.forms.pool,
            "forms_rank_order": self.forms.rank_order,
            "last_forms_category_id": self.forms.last_category_id,
            "last_forms_pool": self.forms.last_pool,
            "sparring_division": self.sparring.division,
            "competing_sparring": self.sparring.competing,
            "sparring_category_id": self.sparring.category_id,
            "sparring_pool": self.sparring.pool,
            "sparring_rank_order": self.sparring.rank_order,
            "sparring_alt_ring": self.sparring.alt_ring,
            "last_sparring_category_id": self.sparring.last_category_id,
            "last_sparring_pool": self.sparring.last_pool,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Competitor":
        """Deserialize competitor from a flat dictionary."""
        return cls(
            id=str(data["id"]),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            age=int(data.get("age", 0)),
            gender=data.get("gender", ""),
            height_feet=int(data.get("height_feet", 0)),
            height_inches=int(data.get("height_inches", 0)),
            school=data.get("school", ""),
            branch=data.get("branch"),
            forms=EventParticipation(
                division=data.get("forms_division"),
                competing=data.get("competing_forms", False),
                category_id=data.get("forms_category_id"),
                pool=data.get("forms_pool"),
                rank_order=data.get("forms_rank_order"),
                last_category_id=data.get("last_forms_category_id"),
                last_pool=data.get("last_forms_pool"),
            ),
            sparring=EventParticipation(
                division=data.get("sparring_division"),
                competing=data.get("competing_sparring", False),
                category_id=data.get("sparring_category_id"),
                pool=data.get("sparring_pool"),
                rank_order=data.get("sparring_rank_order"),
                alt_ring=data.get("sparring_alt_ring") or "",
                last_category_id=data.get("last_sparring_category_id"),
                last_pool=data.get("last_sparring_pool"),
            ),
        )
