"""Map category pools onto a limited number of physical rings.

When there are more pools than physical rings, consecutive pools share a ring
in pairs and are told apart by an ``a``/``b`` suffix (``PR1a``, ``PR1b``).
"""

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

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ringsteward.constants import (
    OVERFLOW_SUFFIXES,
    PHYSICAL_RING_PREFIX,
    RING_COLOR_MAP,
)
from ringsteward.exceptions import CapacityException
from ringsteward.models.tournament import (
    Category,
    CompetitionRing,
    PhysicalRingMapping,
)
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)

PHYSICAL_RING_NAME_PATTERN = re.compile(r"PR(\d+)", re.IGNORECASE)

# Colors that need white text drawn on them
DARK_BACKGROUNDS = ("#000000", "#0000ff", "#8441be")


@dataclass(frozen=True)
class PoolUnit:
    """One pool waiting for a physical ring.

    Attributes
    ----------
    category_name : str
        Category display name.
    pool : str
        Pool label.
    division : str
        Division of the category.
    min_age : int
        Lower age bound of the category, used for ordering.
    competitor_count : int
        Members of the pool.
    """

    category_name: str
    pool: str
    division: str = ""
    min_age: int = 0
    competitor_count: int = 0

    @property
    def name(self) -> str:
        return f"{self.category_name}_{self.pool}"


def ring_number(physical_ring_name: str) -> Optional[int]:
    """Ring number of a physical ring label, ignoring any suffix."""
    match = PHYSICAL_RING_NAME_PATTERN.search(physical_ring_name or "")
    return int(match.group(1)) if match else None


def ring_color(physical_ring_name: str) -> str:
    """Hex color of a physical ring label such as ``PR5a``."""
    number = ring_number(physical_ring_name)
    return RING_COLOR_MAP.get(number, "") if number is not None else ""


def foreground_color(background: str) -> str:
    """Text color readable on a ring color."""
    return "#ffffff" if background.lower() in DARK_BACKGROUNDS else "#000000"


def build_pool_units(
    rings: Sequence[CompetitionRing],
    categories: Sequence[Category],
    division: Optional[str] = None,
) -> List[PoolUnit]:
    """Collect the pools of a division, youngest categories first.

    Rings are deduplicated by name so a forms ring and its sparring twin
    count once. Units are sorted by category minimum age, then name.
    """
    categories_by_id = {c.id: c for c in categories}
    units = {}
    for ring in rings:
        if division is not None and ring.division != division:
            continue
        category = categories_by_id.get(ring.category_id)
        if category is None:
            continue
        unit = PoolUnit(
            category_name=category.name,
            pool=ring.pool,
            division=ring.division,
            min_age=category.min_age,
            competitor_count=ring.size,
        )
        units.setdefault(unit.name, unit)
    return sorted(units.values(), key=lambda u: (u.min_age, u.name))


def auto_assign_physical_rings(
    pool_units: Sequence[PoolUnit], resource_count: int
) -> List[PhysicalRingMapping]:
    """Give every pool unit a physical ring label.

    With no more units than rings, unit *i* gets ``PR{i+1}``. Otherwise
    units are paired: pair ``i // 2`` goes to ring ``pair % resource_count``
    and the two units of a pair get suffixes ``a`` and ``b``. Beyond twice
    the ring count the pattern cycles and labels repeat.

    Args:
        pool_units: Units in the order they should run
        resource_count: Number of physical rings

    Returns:
        One mapping per unit, in unit order

    Raises:
        CapacityException: If units exist but no ring does
    """
    if not pool_units:
        return []
    if resource_count < 1:
        raise CapacityException(
            f"{len(pool_units)} pool(s) need a physical ring, none available",
            required=1,
            available=resource_count,
        )

    count = len(pool_units)
    if count > 2 * resource_count:
        logger.warning(
            f"{count} pools exceed twice the {resource_count} physical ring(s); "
            f"ring labels will repeat"
        )

    mappings = []
    for i, unit in enumerate(pool_units):
        if count <= resource_count:
            number = i + 1
            label = f"{PHYSICAL_RING_PREFIX}{number}"
        else:
            number = (i // 2) % resource_count + 1
            label = f"{PHYSICAL_RING_PREFIX}{number}{OVERFLOW_SUFFIXES[i % 2]}"
        mappings.append(
            PhysicalRingMapping(
                category_name=unit.category_name,
                pool=unit.pool,
                physical_ring_name=label,
                division=unit.division,
                order=i,
                color=RING_COLOR_MAP.get(number, ""),
            )
        )
    logger.info(f"Mapped {count} pool(s) onto {resource_count} physical ring(s)")
    return mappings


def merge_division_mappings(
    existing: Sequence[PhysicalRingMapping],
    new: Sequence[PhysicalRingMapping],
    division: Optional[str],
) -> List[PhysicalRingMapping]:
    """Replace one division's mappings, keeping every other division's."""
    if division is None:
        return list(new)
    kept = [m for m in existing if m.division != division]
    return kept + list(new)
