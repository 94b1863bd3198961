"""Distribute a category's competitors across its pools.

Competitors are sorted by age and dealt round-robin over the category's
pools, so every pool spans the category's full age range.
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

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ringsteward.exceptions import CapacityException
from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import (
    Category,
    CategoryPoolMapping,
    CompetitionRing,
    PhysicalRing,
    ring_id,
)
from ringsteward.type_hints import EventType, Resources
from ringsteward.utils import setup_logger
from ringsteward.utils.validation import pool_label

logger = setup_logger(__name__)


@dataclass
class AssignmentResult:
    """Outcome of a ring assignment.

    Attributes
    ----------
    updated_competitors : list of Competitor
        The full competitor list; assigned competitors are new copies.
    rings : list of CompetitionRing
        One ring per pool, including pools left empty.
    """

    updated_competitors: List[Competitor]
    rings: List[CompetitionRing] = field(default_factory=list)

    def pool_mappings(self) -> List[CategoryPoolMapping]:
        """Pool to physical ring bindings for every produced ring."""
        return pool_mappings_from_rings(self.rings)


def pool_mappings_from_rings(rings: Sequence[CompetitionRing]) -> List[CategoryPoolMapping]:
    return [
        CategoryPoolMapping(
            division=ring.division,
            category_id=ring.category_id,
            pool=ring.pool,
            physical_ring_id=ring.physical_ring_id,
        )
        for ring in rings
    ]


def assign_rings(
    category: Category,
    competitors: Sequence[Competitor],
    available_resources: Sequence[PhysicalRing],
    event_type: Optional[EventType] = None,
) -> AssignmentResult:
    """Assign every member of a category to one of its pools.

    Members are sorted ascending by age (ties keep input order) and member
    *i* goes to pool ``i % num_pools``. Pool *k* is bound to the *k*-th
    available resource and yields one ring, empty when the category has
    fewer members than pools. Re-running recomputes from scratch. The input
    competitors are never modified.

    Args:
        category: Category to distribute
        competitors: All competitors; non-members are returned untouched
        available_resources: Physical rings, in preference order
        event_type: Event to assign; defaults to the category's event type

    Returns:
        AssignmentResult with the updated list and the produced rings

    Raises:
        CapacityException: If fewer resources than pools are available
    """
    event_type = event_type or category.event_type
    member_ids = set(category.competitor_ids)
    members = [c for c in competitors if c.id in member_ids]

    if not members:
        logger.debug(f"Category {category.name} has no members, nothing to assign")
        return AssignmentResult(updated_competitors=list(competitors))

    num_pools = category.num_pools
    if len(available_resources) < num_pools:
        raise CapacityException(
            f"Category {category.name} needs {num_pools} ring(s), "
            f"only {len(available_resources)} available",
            required=num_pools,
            available=len(available_resources),
        )

    resources = list(available_resources[:num_pools])
    by_pool: Dict[int, List[Competitor]] = {k: [] for k in range(num_pools)}
    # sorted() is stable, equal ages keep roster order
    for index, competitor in enumerate(sorted(members, key=lambda c: c.age)):
        by_pool[index % num_pools].append(competitor)

    updated: Dict[str, Competitor] = {}
    rings = []
    for k, resource in enumerate(resources):
        pool = pool_label(k + 1)
        pool_members = by_pool[k]
        rings.append(
            CompetitionRing(
                id=ring_id(event_type, category.id, pool),
                division=category.division,
                category_id=category.id,
                pool=pool,
                physical_ring_id=resource.id,
                event_type=event_type,
                competitor_ids=tuple(c.id for c in pool_members),
                name=category.pool_name(pool),
            )
        )
        for competitor in pool_members:
            updated[competitor.id] = competitor.with_participation(
                event_type, category_id=category.id, pool=pool
            )

    logger.info(
        f"Assigned {len(members)} competitor(s) of {category.name} "
        f"to {len(rings)} pool(s)"
    )
    return AssignmentResult(
        updated_competitors=[updated.get(c.id, c) for c in competitors],
        rings=rings,
    )


def assign_rings_for_all_categories(
    categories: Sequence[Category],
    competitors: Sequence[Competitor],
    resources: Resources,
    event_type: EventType,
    division: Optional[str] = None,
) -> AssignmentResult:
    """Assign every category of one event type, threading the competitor list.

    Args:
        categories: Candidate categories
        competitors: All competitors
        resources: Physical rings, or a callable returning them for a division
        event_type: Only categories of this event type are assigned
        division: Restrict to one division

    Returns:
        Combined AssignmentResult

    Raises:
        CapacityException: If any category lacks resources; nothing is returned
    """
    current = list(competitors)
    rings: List[CompetitionRing] = []
    for category in categories:
        if category.event_type != event_type:
            continue
        if division is not None and category.division != division:
            continue
        available = resources(category.division) if callable(resources) else resources
        result = assign_rings(category, current, available, event_type)
        current = result.updated_competitors
        rings.extend(result.rings)
    return AssignmentResult(updated_competitors=current, rings=rings)
