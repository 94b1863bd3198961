"""Data classes binding category pools to physical rings."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass
class CategoryPoolMapping:
    """Binds one pool of one category to the physical ring it was assigned.

    Written by ring assignment and cross-event mapping, read by ring
    computation.

    Attributes
    ----------
    division : str
        Division of the category.
    category_id : str
        Category identifier.
    pool : str
        Pool label, e.g. ``"P1"``.
    physical_ring_id : str
        Identifier of the physical ring, e.g. ``"PR2"``.
    """

    division: str
    category_id: str
    pool: str
    physical_ring_id: str

    @property
    def key(self) -> Tuple[str, str]:
        """Lookup key: (category_id, pool)."""
        return (self.category_id, self.pool)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize mapping to dictionary."""
        return {
            "division": self.division,
            "category_id": self.category_id,
            "pool": self.pool,
            "physical_ring_id": self.physical_ring_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryPoolMapping":
        """Deserialize mapping from dictionary."""
        return cls(
            division=data.get("division", ""),
            category_id=data.get("category_id", data.get("categoryId")),
            pool=data["pool"],
            physical_ring_id=data.get("physical_ring_id", data.get("physicalRingId")),
        )


@dataclass
class PhysicalRingMapping:
    """Binds a ``(category name, pool)`` pair to a physical ring display name.

    Several mappings may share one physical ring name when pools outnumber
    the rings (``PR1a``/``PR1b``).

    Attributes
    ----------
    category_name : str
        Category display name.
    pool : str
        Pool label.
    physical_ring_name : str
        Physical ring label, e.g. ``"PR1a"``. Editable by the operator.
    division : str
        Division the pool belongs to; auto-assign replaces one division at a time.
    order : int
        Position in the division's age-ordered list.
    color : str
        Hex color of the physical ring.
    """

    category_name: str
    pool: str
    physical_ring_name: str
    division: str = ""
    order: int = 0
    color: str = ""

    @property
    def key(self) -> Tuple[str, str]:
        """Composite key: (category_name, pool)."""
        return (self.category_name, self.pool)

    @property
    def category_pool_name(self) -> str:
        """Ring display name the mapping applies to."""
        return f"{self.category_name}_{self.pool}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize mapping to dictionary."""
        return {
            "category_name": self.category_name,
            "pool": self.pool,
            "physical_ring_name": self.physical_ring_name,
            "division": self.division,
            "order": self.order,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhysicalRingMapping":
        """Deserialize mapping from dictionary.

        Older files store only ``categoryPoolName`` (``"<Category>_<Pool>"``).
        """
        category_name = data.get("category_name")
        pool = data.get("pool")
        if category_name is None or pool is None:
            category_name, pool = split_category_pool_name(
                data.get("categoryPoolName") or data.get("cohortRingName", "")
            )
        return cls(
            category_name=category_name,
            pool=pool or "",
            physical_ring_name=data.get(
                "physical_ring_name", data.get("physicalRingName", "")
            ),
            division=data.get("division", ""),
            order=data.get("order", 0),
            color=data.get("color", ""),
        )


def split_category_pool_name(name: str) -> Tuple[str, Optional[str]]:
    """Split ``"<Category>_<Pool>"`` into its parts."""
    category_name, sep, pool = name.rpartition("_")
    if not sep:
        return name, None
    return category_name, pool
