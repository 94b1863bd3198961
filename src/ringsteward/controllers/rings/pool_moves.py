"""Manual pool changes for single competitors.

Every move renumbers the running order of the pool that was left and of the
pool that was entered. All functions return a new competitor list and leave
the given one untouched; an unknown competitor id returns the list as-is.
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

from typing import Any, Dict, List, Optional, Sequence

from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import Category
from ringsteward.type_hints import FORMS, SPARRING, EventType, WithdrawScope
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)


def _find(competitors: Sequence[Competitor], competitor_id: str) -> Optional[Competitor]:
    for competitor in competitors:
        if competitor.id == competitor_id:
            return competitor
    return None


def _replace(
    competitors: Sequence[Competitor], competitor_id: str, event_type: EventType, **changes
) -> List[Competitor]:
    return [
        c.with_participation(event_type, **changes) if c.id == competitor_id else c
        for c in competitors
    ]


def _rank_key(competitor: Competitor, event_type: EventType) -> int:
    return competitor.participation(event_type).rank_order or 0


def move_to_pool(
    competitors: Sequence[Competitor],
    competitor_id: str,
    event_type: EventType,
    category_id: Optional[str],
    pool: Optional[str],
) -> List[Competitor]:
    """Move one competitor to another pool, or out of any pool.

    The moved competitor takes position 1 of the new pool and the existing
    members shift down; the pool that was left closes its gap.

    Args:
        competitors: All competitors
        competitor_id: Competitor to move
        event_type: Event whose placement changes
        category_id: Target category, ``None`` to clear
        pool: Target pool, ``None`` to clear

    Returns:
        Updated competitor list
    """
    competitor = _find(competitors, competitor_id)
    if competitor is None:
        logger.warning(f"Competitor {competitor_id} not found, nothing moved")
        return list(competitors)

    entry = competitor.participation(event_type)
    old_category_id, old_pool = entry.category_id, entry.pool
    if old_category_id == category_id and old_pool == pool:
        return list(competitors)

    updates: Dict[str, Dict[str, Any]] = {
        competitor_id: {
            "category_id": category_id,
            "pool": pool,
            "rank_order": 1 if pool else None,
        }
    }

    def pool_members(cat_id: str, pool_label: str) -> List[Competitor]:
        members = [
            c
            for c in competitors
            if c.id != competitor_id
            and c.participation(event_type).category_id == cat_id
            and c.participation(event_type).pool == pool_label
        ]
        return sorted(members, key=lambda c: _rank_key(c, event_type))

    if old_category_id and old_pool:
        for index, member in enumerate(pool_members(old_category_id, old_pool)):
            updates.setdefault(member.id, {})["rank_order"] = index + 1

    if category_id and pool:
        for index, member in enumerate(pool_members(category_id, pool)):
            updates.setdefault(member.id, {})["rank_order"] = index + 2

    logger.debug(
        f"Moved {competitor.name} ({event_type}) from {old_category_id}/{old_pool} "
        f"to {category_id}/{pool}"
    )
    return [
        c.with_participation(event_type, **updates[c.id]) if c.id in updates else c
        for c in competitors
    ]


def withdraw(
    competitors: Sequence[Competitor], competitor_id: str, scope: WithdrawScope
) -> List[Competitor]:
    """Withdraw a competitor from forms, sparring or both.

    The current category and pool are remembered so the competitor can be
    reinstated later. Sparring withdrawal also clears the alternate ring.
    """
    if _find(competitors, competitor_id) is None:
        logger.warning(f"Competitor {competitor_id} not found, nothing withdrawn")
        return list(competitors)

    result = list(competitors)
    events = (FORMS, SPARRING) if scope == "both" else (scope,)
    for event_type in events:
        entry = _find(result, competitor_id).participation(event_type)
        result = _replace(
            result,
            competitor_id,
            event_type,
            last_category_id=entry.category_id,
            last_pool=entry.pool,
        )
        result = move_to_pool(result, competitor_id, event_type, None, None)
        changes: Dict[str, Any] = {"division": None, "competing": False}
        if event_type == SPARRING:
            changes["alt_ring"] = ""
        result = _replace(result, competitor_id, event_type, **changes)
    logger.info(f"Withdrew competitor {competitor_id} from {scope}")
    return result


def reinstate(
    competitors: Sequence[Competitor],
    competitor_id: str,
    event_type: EventType,
    division: str,
    categories: Sequence[Category],
) -> List[Competitor]:
    """Put a withdrawn competitor back in the pool they last held.

    When the remembered category no longer exists, or nothing was
    remembered, only the division and competing flag are restored.
    """
    competitor = _find(competitors, competitor_id)
    if competitor is None:
        logger.warning(f"Competitor {competitor_id} not found, nothing reinstated")
        return list(competitors)

    entry = competitor.participation(event_type)
    category_ids = {c.id for c in categories}
    result = list(competitors)
    if entry.last_category_id in category_ids and entry.last_pool:
        result = move_to_pool(
            result, competitor_id, event_type, entry.last_category_id, entry.last_pool
        )
    else:
        logger.debug(f"No saved {event_type} pool for {competitor.name}")

    logger.info(f"Reinstated {competitor.name} in {event_type} ({division})")
    return _replace(result, competitor_id, event_type, division=division, competing=True)


def copy_sparring_from_forms(
    competitors: Sequence[Competitor], competitor_id: str
) -> List[Competitor]:
    """One-time copy of a competitor's forms placement to sparring.

    The sparring division and competing flag follow forms as well. Nothing
    happens when the competitor has no forms placement.
    """
    competitor = _find(competitors, competitor_id)
    if competitor is None:
        logger.warning(f"Competitor {competitor_id} not found, nothing copied")
        return list(competitors)
    if not competitor.forms.category_id or not competitor.forms.pool:
        return list(competitors)

    result = move_to_pool(
        competitors,
        competitor_id,
        SPARRING,
        competitor.forms.category_id,
        competitor.forms.pool,
    )
    return _replace(
        result,
        competitor_id,
        SPARRING,
        division=competitor.forms.division,
        competing=competitor.forms.competing,
    )
