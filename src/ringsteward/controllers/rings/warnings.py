"""Non-fatal problems an operator should look at before the event."""

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
from typing import List, Optional, Sequence

from ringsteward.controllers.rings.cross_event import count_unassigned_secondary
from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import TournamentDataset
from ringsteward.type_hints import FORMS
from ringsteward.utils import setup_logger

logger = setup_logger(__name__)

UNASSIGNED_SPARRING = "unassigned_sparring"
POOL_CAPACITY = "pool_capacity"


@dataclass(frozen=True)
class ValidationWarning:
    """A warning surfaced to the operator. Not an exception.

    Attributes
    ----------
    kind : str
        ``"unassigned_sparring"`` or ``"pool_capacity"``.
    message : str
        Human-readable explanation.
    division : str or None
        Division concerned, if any.
    count : int
        Number of competitors or pools involved.
    """

    kind: str
    message: str
    division: Optional[str] = None
    count: int = 0


def unassigned_sparring_warning(
    competitors: Sequence[Competitor],
) -> Optional[ValidationWarning]:
    """Warn about sparring competitors without a sparring category or forms pool."""
    count = count_unassigned_secondary(competitors)
    if not count:
        return None
    return ValidationWarning(
        kind=UNASSIGNED_SPARRING,
        message=(
            f"{count} competitor(s) compete in sparring but have no sparring "
            f"category or forms pool and were not placed"
        ),
        count=count,
    )


def pool_capacity_warnings(dataset: TournamentDataset) -> List[ValidationWarning]:
    """Warn about divisions whose forms pools outnumber their physical rings."""
    warnings = []
    for division in dataset.divisions:
        demand = sum(c.num_pools for c in dataset.categories_in(division, FORMS))
        available = dataset.config.ring_count(division)
        if demand > available:
            warnings.append(
                ValidationWarning(
                    kind=POOL_CAPACITY,
                    message=(
                        f"Division {division} needs {demand} forms pool(s) "
                        f"but has {available} physical ring(s)"
                    ),
                    division=division,
                    count=demand - available,
                )
            )
    return warnings


def collect_warnings(dataset: TournamentDataset) -> List[ValidationWarning]:
    """Every warning that applies to the dataset."""
    warnings = pool_capacity_warnings(dataset)
    sparring = unassigned_sparring_warning(dataset.competitors)
    if sparring is not None:
        warnings.append(sparring)
    for warning in warnings:
        logger.warning(warning.message)
    return warnings
