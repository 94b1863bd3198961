"""Derive competition rings from competitor assignments.

Competitors are the single source of truth for ring membership: rings are
recomputed from their category and pool fields whenever they are needed.
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

from typing import Dict, List, Sequence, Tuple

from ringsteward.constants import UNASSIGNED_RING
from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import (
    Category,
    CategoryPoolMapping,
    CompetitionRing,
    ring_id,
)
from ringsteward.type_hints import FORMS, SPARRING
from ringsteward.utils import setup_logger
from ringsteward.utils.validation import parse_pool_number

logger = setup_logger(__name__)

EVENT_ORDER = {FORMS: 0, SPARRING: 1}


def compute_rings(
    competitors: Sequence[Competitor],
    categories: Sequence[Category],
    pool_mappings: Sequence[CategoryPoolMapping],
) -> List[CompetitionRing]:
    """Group placed competitors into competition rings.

    A competitor belongs to the ring ``(event, category_id, pool)`` of each
    event they compete in with both a category and a pool set. Rings whose
    category no longer exists are skipped with a warning. The physical ring
    comes from the matching :class:`CategoryPoolMapping`, or ``"unassigned"``.

    Args:
        competitors: All competitors
        categories: All categories
        pool_mappings: Pool to physical ring bindings

    Returns:
        Rings ordered by event (forms first), category order and pool
        number; members in competitor order
    """
    groups: Dict[Tuple[str, str, str], List[str]] = {}
    for competitor in competitors:
        for event_type in (FORMS, SPARRING):
            entry = competitor.participation(event_type)
            if not entry.is_placed:
                continue
            key = (event_type, entry.category_id, entry.pool)
            groups.setdefault(key, []).append(competitor.id)

    categories_by_id = {c.id: c for c in categories}
    category_order = {c.id: i for i, c in enumerate(categories)}
    physical_by_pool = {m.key: m.physical_ring_id for m in pool_mappings}

    rings = []
    for (event_type, category_id, pool), member_ids in groups.items():
        category = categories_by_id.get(category_id)
        if category is None:
            logger.warning(
                f"Category {category_id} not found, skipping {len(member_ids)} "
                f"{event_type} competitor(s) in pool {pool}"
            )
            continue
        rings.append(
            CompetitionRing(
                id=ring_id(event_type, category_id, pool),
                division=category.division,
                category_id=category_id,
                pool=pool,
                physical_ring_id=physical_by_pool.get(
                    (category_id, pool), UNASSIGNED_RING
                ),
                event_type=event_type,
                competitor_ids=tuple(member_ids),
                name=category.pool_name(pool),
            )
        )

    rings.sort(
        key=lambda r: (
            EVENT_ORDER[r.event_type],
            category_order[r.category_id],
            parse_pool_number(r.pool) or 0,
            r.pool,
        )
    )
    logger.debug(f"Computed {len(rings)} rings from {len(competitors)} competitors")
    return rings


def competitors_in_pool(
    competitors: Sequence[Competitor], category_id: str, pool: str, event_type: str
) -> List[Competitor]:
    """Competing members of one pool of one category."""
    result = []
    for competitor in competitors:
        entry = competitor.participation(event_type)
        if entry.competing and entry.category_id == category_id and entry.pool == pool:
            result.append(competitor)
    return result
