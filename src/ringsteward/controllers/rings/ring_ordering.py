"""Running order within a pool.

Forms pools spread competitors of the same school apart. Sparring pools run
shortest to tallest so neighbouring bouts are evenly matched.
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

from typing import Dict, List, Sequence

from ringsteward.constants import RANK_ORDER_STEP
from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import CompetitionRing
from ringsteward.type_hints import FORMS, SPARRING, EventType
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def name_hash(first_name: str, last_name: str) -> int:
    """Deterministic 32-bit hash of a competitor's lowercased full name.

    Used only to shuffle competitors of one school reproducibly.
    """
    value = 0
    for char in f"{first_name}{last_name}".lower():
        value = _to_int32(_to_int32(value << 5) - value + ord(char))
    return abs(value)


def _pool_members(
    competitors: Sequence[Competitor], category_id: str, pool: str, event_type: EventType
) -> List[Competitor]:
    return [
        c
        for c in competitors
        if c.participation(event_type).category_id == category_id
        and c.participation(event_type).pool == pool
    ]


def _apply_ranks(
    competitors: Sequence[Competitor], ordered: Sequence[Competitor], event_type: EventType
) -> List[Competitor]:
    ranked = {
        c.id: c.with_participation(event_type, rank_order=(i + 1) * RANK_ORDER_STEP)
        for i, c in enumerate(ordered)
    }
    return [ranked.get(c.id, c) for c in competitors]


def spread_schools(members: Sequence[Competitor]) -> List[Competitor]:
    """Interleave schools so teammates do not perform back to back.

    Within each school competitors are ordered by name hash and given the
    fraction ``(index + 1) / school size``; everyone is then sorted by that
    fraction. If the first three (or the first two) share a school, the
    last of them is swapped with the first competitor from another school.
    """
    by_school: Dict[str, List[Competitor]] = {}
    for competitor in members:
        by_school.setdefault(competitor.affiliation, []).append(competitor)

    with_fraction = []
    for school_members in by_school.values():
        ordered = sorted(school_members, key=lambda c: name_hash(c.first_name, c.last_name))
        for index, competitor in enumerate(ordered):
            with_fraction.append(((index + 1) / len(ordered), competitor))
    with_fraction.sort(key=lambda item: item[0])
    result = [competitor for _, competitor in with_fraction]

    if len(result) >= 3:
        schools = [c.affiliation for c in result[:3]]
        if schools[0] == schools[1] == schools[2]:
            _swap_into(result, 2, schools[0])
        elif schools[0] == schools[1]:
            _swap_into(result, 1, schools[0])
    return result


def _swap_into(result: List[Competitor], position: int, school: str) -> None:
    """Swap ``result[position]`` with the first later competitor not from ``school``."""
    for i in range(position + 1, len(result)):
        if result[i].affiliation != school:
            result[position], result[i] = result[i], result[position]
            return


def order_forms_pool(
    competitors: Sequence[Competitor], category_id: str, pool: str
) -> List[Competitor]:
    """Assign forms rank orders ``10, 20, 30...`` to one pool, spreading schools.

    Returns:
        The full competitor list with the pool's members replaced by copies
    """
    members = _pool_members(competitors, category_id, pool, FORMS)
    if not members:
        return list(competitors)
    logger.debug(f"Ordering forms pool {category_id}/{pool} ({len(members)} competitors)")
    return _apply_ranks(competitors, spread_schools(members), FORMS)


def order_sparring_pool(
    competitors: Sequence[Competitor], category_id: str, pool: str
) -> List[Competitor]:
    """Assign sparring rank orders to one pool, shortest first."""
    members = _pool_members(competitors, category_id, pool, SPARRING)
    if not members:
        return list(competitors)
    logger.debug(
        f"Ordering sparring pool {category_id}/{pool} ({len(members)} competitors)"
    )
    ordered = sorted(members, key=lambda c: c.total_height_inches)
    return _apply_ranks(competitors, ordered, SPARRING)


def order_rings(
    competitors: Sequence[Competitor], rings: Sequence[CompetitionRing]
) -> List[Competitor]:
    """Order every given ring according to its event type."""
    current = list(competitors)
    for ring in rings:
        if ring.event_type == FORMS:
            current = order_forms_pool(current, ring.category_id, ring.pool)
        else:
            current = order_sparring_pool(current, ring.category_id, ring.pool)
    logger.info(f"Ordered {len(rings)} ring(s)")
    return current
