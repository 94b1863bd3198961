"""Group competitors into categories by division, gender and age."""

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

import math
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ringsteward.constants import (
    ADULT_AGE,
    DEFAULT_NUM_POOLS,
    GENDER_FEMALE,
    GENDER_MALE,
    GENDER_MIXED,
    OPEN_MAX_AGE,
)
from ringsteward.exceptions import InvalidCategoryException
from ringsteward.models.competitor import Competitor
from ringsteward.models.tournament import Category
from ringsteward.type_hints import FORMS, EventType, Gender
from ringsteward.utils import setup_logger
from ringsteward.utils.validation import validate_num_pools

logger = setup_logger(__name__)

# Competitors per pool before another pool is needed
POOL_SIZE = 10


@dataclass
class CategoryDefinition:
    """Filter describing which competitors form a category.

    Attributes
    ----------
    division : str
        Division to draw from.
    gender : str
        ``"male"``, ``"female"`` or ``"mixed"``.
    min_age, max_age : int
        Inclusive age range.
    num_pools : int
        Pools the resulting category gets.
    """

    division: str
    gender: Gender = GENDER_MIXED
    min_age: int = 0
    max_age: int = OPEN_MAX_AGE
    num_pools: int = DEFAULT_NUM_POOLS

    @property
    def display_name(self) -> str:
        if self.max_age == OPEN_MAX_AGE:
            return f"{self.gender.capitalize()} {self.min_age}+"
        return f"{self.gender.capitalize()} {self.min_age}-{self.max_age}"

    def matches(self, competitor: Competitor, event_type: EventType) -> bool:
        entry = competitor.participation(event_type)
        if not entry.competing or entry.division != self.division:
            return False
        if not self.min_age <= competitor.age <= self.max_age:
            return False
        return self.gender == GENDER_MIXED or competitor.gender.lower() == self.gender


def pools_needed(count: int) -> int:
    """Pools a category of ``count`` competitors needs, ten per pool."""
    if count <= POOL_SIZE:
        return 1
    return math.ceil(count / POOL_SIZE)


def build_categories(
    competitors: Sequence[Competitor],
    definitions: Sequence[CategoryDefinition],
    event_type: EventType = FORMS,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> List[Category]:
    """Create one category per definition that matches at least one competitor.

    Raises:
        InvalidCategoryException: If a definition has an invalid pool count
    """
    categories = []
    for definition in definitions:
        check = validate_num_pools(definition.num_pools)
        if not check.is_valid:
            raise InvalidCategoryException(check.error_message)
        members = [c for c in competitors if definition.matches(c, event_type)]
        if not members:
            logger.debug(f"No competitors match {definition.display_name}, skipped")
            continue
        categories.append(
            Category(
                id=id_factory(),
                name=definition.display_name,
                division=definition.division,
                event_type=event_type,
                gender=definition.gender,
                min_age=definition.min_age,
                max_age=definition.max_age,
                competitor_ids=[c.id for c in members],
                num_pools=definition.num_pools,
            )
        )
    logger.info(f"Built {len(categories)} {event_type} categories")
    return categories


def suggest_definitions(
    competitors: Sequence[Competitor], division: Optional[str] = None
) -> List[CategoryDefinition]:
    """Propose definitions splitting each division by gender and youth/adult."""
    if division is not None:
        divisions = [division]
    else:
        divisions = []
        for competitor in competitors:
            for value in (competitor.forms.division, competitor.sparring.division):
                if value and value not in divisions:
                    divisions.append(value)

    definitions = []
    for div in divisions:
        in_division = [
            c for c in competitors if div in (c.forms.division, c.sparring.division)
        ]
        for gender in (GENDER_MALE, GENDER_FEMALE):
            group = [c for c in in_division if c.gender.lower() == gender]
            if not group:
                continue
            youth = [c.age for c in group if c.age < ADULT_AGE]
            adults = [c.age for c in group if c.age >= ADULT_AGE]
            if youth and adults:
                definitions.append(
                    CategoryDefinition(div, gender, min(youth), ADULT_AGE - 1, pools_needed(len(youth)))
                )
                definitions.append(
                    CategoryDefinition(div, gender, ADULT_AGE, max(adults), pools_needed(len(adults)))
                )
            else:
                ages = youth or adults
                definitions.append(
                    CategoryDefinition(div, gender, min(ages), max(ages), pools_needed(len(ages)))
                )
    return definitions


def apply_category_ids(
    competitors: Sequence[Competitor], categories: Sequence[Category], event_type: EventType
) -> List[Competitor]:
    """Point every category member's event entry at its category."""
    owner = {}
    for category in categories:
        for competitor_id in category.competitor_ids:
            owner.setdefault(competitor_id, category.id)
    return [
        c.with_participation(event_type, category_id=owner[c.id]) if c.id in owner else c
        for c in competitors
    ]
