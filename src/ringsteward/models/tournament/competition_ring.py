"""Derived competition ring."""

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
from typing import Tuple

from ringsteward.type_hints import EventType


def ring_id(event_type: str, category_id: str, pool: str) -> str:
    """Stable identifier of the ring for one pool of one category."""
    return f"{event_type}-{category_id}-{pool}"


@dataclass(frozen=True)
class CompetitionRing:
    """Competitors of one category sharing one pool.

    Rings are never stored. They are recomputed from competitor, category and
    mapping state whenever they are read.

    Attributes
    ----------
    id : str
        ``"<event>-<category id>-<pool>"``.
    division : str
        Division of the category.
    category_id : str
        Category identifier.
    pool : str
        Pool label.
    physical_ring_id : str
        Physical ring bound to the pool, or ``"unassigned"``.
    event_type : str
        ``"forms"`` or ``"sparring"``.
    competitor_ids : tuple of str
        Members of the ring.
    name : str
        ``"<CategoryName>_<PoolLabel>"``.
    """

    id: str
    division: str
    category_id: str
    pool: str
    physical_ring_id: str
    event_type: EventType
    competitor_ids: Tuple[str, ...]
    name: str

    @property
    def size(self) -> int:
        """Number of competitors in the ring."""
        return len(self.competitor_ids)
