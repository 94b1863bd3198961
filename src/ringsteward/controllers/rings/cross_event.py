"""Keep sparring placement aligned with forms placement.

A competitor who spars is put in the sparring pool that shares the physical
ring of their forms pool, so they never have to change rings between events.
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
from typing import Dict, List, Sequence, Tuple

from ringsteward.controllers.rings.ring_assignment import pool_mappings_from_rings
from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import (
    Category,
    CategoryPoolMapping,
    CompetitionRing,
    ring_id,
)
from ringsteward.type_hints import FORMS, SPARRING
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)

# Event suffixes stripped from a forms ring name to name its sparring twin
EVENT_NAME_SUFFIXES = (" Forms", " Sparring")


@dataclass
class CrossEventResult:
    """Outcome of mapping sparring onto forms placement.

    Attributes
    ----------
    updated_competitors : list of Competitor
        The full competitor list; mapped competitors are new copies.
    secondary_rings : list of CompetitionRing
        One sparring ring per ``(sparring category, forms pool)`` group.
    """

    updated_competitors: List[Competitor]
    secondary_rings: List[CompetitionRing] = field(default_factory=list)

    def pool_mappings(self) -> List[CategoryPoolMapping]:
        return pool_mappings_from_rings(self.secondary_rings)


@dataclass
class _Group:
    physical_ring_id: str
    ring_name: str
    member_ids: List[str] = field(default_factory=list)


def strip_event_suffix(name: str) -> str:
    for suffix in EVENT_NAME_SUFFIXES:
        name = name.replace(suffix, "", 1)
    return name


def is_unassigned_secondary(competitor: Competitor) -> bool:
    """Competes in sparring but cannot be mapped onto a forms pool."""
    return competitor.sparring.competing and not (
        competitor.sparring.category_id and competitor.forms.pool
    )


def count_unassigned_secondary(competitors: Sequence[Competitor]) -> int:
    """Number of sparring competitors the mapping has to leave out.

    These lack a sparring category or a forms pool. Callers surface the count
    as a warning; the mapping itself skips them silently.
    """
    return sum(1 for c in competitors if is_unassigned_secondary(c))


def map_secondary_to_primary(
    categories: Sequence[Category],
    competitors: Sequence[Competitor],
    primary_rings: Sequence[CompetitionRing],
) -> CrossEventResult:
    """Place sparring competitors in the physical ring of their forms pool.

    Only rings of forms categories are considered. Members competing in
    sparring with a sparring category are grouped by
    ``(sparring category, forms pool)``; each group becomes one sparring
    ring on the forms ring's physical ring and each member's sparring pool
    becomes their forms pool.

    Args:
        categories: All categories
        competitors: All competitors
        primary_rings: Forms rings, usually from ring assignment or computation

    Returns:
        CrossEventResult with the updated list and the sparring rings
    """
    categories_by_id = {c.id: c for c in categories}
    forms_category_ids = {c.id for c in categories if c.event_type == FORMS}
    competitors_by_id = {c.id: c for c in competitors}

    groups: Dict[Tuple[str, str], _Group] = {}
    for forms_ring in primary_rings:
        if forms_ring.category_id not in forms_category_ids:
            continue
        for competitor_id in forms_ring.competitor_ids:
            competitor = competitors_by_id.get(competitor_id)
            if competitor is None or not competitor.sparring.competing:
                continue
            sparring_category_id = competitor.sparring.category_id
            forms_pool = competitor.forms.pool
            if not sparring_category_id or not forms_pool:
                continue

            key = (sparring_category_id, forms_pool)
            group = groups.get(key)
            if group is None:
                group = groups[key] = _Group(
                    physical_ring_id=forms_ring.physical_ring_id,
                    ring_name=strip_event_suffix(forms_ring.name),
                )
            elif group.physical_ring_id != forms_ring.physical_ring_id:
                logger.warning(
                    f"Sparring pool {forms_pool} of category {sparring_category_id} "
                    f"spans physical rings {group.physical_ring_id} and "
                    f"{forms_ring.physical_ring_id}; keeping {group.physical_ring_id}"
                )
            group.member_ids.append(competitor_id)

    updated: Dict[str, Competitor] = {}
    secondary_rings = []
    for (sparring_category_id, pool), group in groups.items():
        category = categories_by_id.get(sparring_category_id)
        if category is None:
            logger.warning(
                f"Sparring category {sparring_category_id} not found, "
                f"skipping {len(group.member_ids)} competitor(s)"
            )
            continue
        secondary_rings.append(
            CompetitionRing(
                id=ring_id(SPARRING, sparring_category_id, pool),
                division=category.division,
                category_id=sparring_category_id,
                pool=pool,
                physical_ring_id=group.physical_ring_id,
                event_type=SPARRING,
                competitor_ids=tuple(group.member_ids),
                name=group.ring_name or category.pool_name(pool),
            )
        )
        for competitor_id in group.member_ids:
            competitor = competitors_by_id[competitor_id]
            updated[competitor_id] = competitor.with_participation(SPARRING, pool=pool)

    unassigned = count_unassigned_secondary(competitors)
    if unassigned:
        logger.debug(f"{unassigned} sparring competitor(s) could not be mapped")
    logger.info(
        f"Mapped {len(updated)} sparring competitor(s) into "
        f"{len(secondary_rings)} ring(s)"
    )
    return CrossEventResult(
        updated_competitors=[updated.get(c.id, c) for c in competitors],
        secondary_rings=secondary_rings,
    )
