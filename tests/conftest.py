import pytest

from ringsteward.models.competitor import Competitor, EventParticipation
from ringsteward.models.tournament import (
    Category,
    Division,
    PhysicalRing,
    TournamentConfig,
    TournamentDataset,
    default_physical_ring,
)
from ringsteward.tournament import Tournament


def build_competitor(
    competitor_id,
    age,
    first_name=None,
    last_name="Tester",
    school="Dragon Dojo",
    branch=None,
    gender="Male",
    height=(4, 6),
    forms_division="Beginner",
    sparring_division=None,
    forms_category_id=None,
    forms_pool=None,
    sparring_category_id=None,
    sparring_pool=None,
):
    return Competitor(
        id=competitor_id,
        first_name=first_name or f"Kid{competitor_id}",
        last_name=last_name,
        age=age,
        gender=gender,
        height_feet=height[0],
        height_inches=height[1],
        school=school,
        branch=branch,
        forms=EventParticipation(
            division=forms_division,
            competing=forms_division is not None,
            category_id=forms_category_id,
            pool=forms_pool,
        ),
        sparring=EventParticipation(
            division=sparring_division,
            competing=sparring_division is not None,
            category_id=sparring_category_id,
            pool=sparring_pool,
        ),
    )


@pytest.fixture
def make_competitor():
    return build_competitor


@pytest.fixture
def seven_competitors():
    """Seven forms competitors given out of age order."""
    ages = [12, 9, 14, 10, 13, 11, 10]
    return [build_competitor(f"c{i}", age) for i, age in enumerate(ages)]


@pytest.fixture
def three_pool_category(seven_competitors):
    return Category(
        id="cat-forms",
        name="Mixed 8-14",
        division="Beginner",
        event_type="forms",
        competitor_ids=[c.id for c in seven_competitors],
        num_pools=3,
    )


@pytest.fixture
def resources():
    return [default_physical_ring(n) for n in range(1, 4)]


@pytest.fixture
def config():
    return TournamentConfig(
        name="Spring Open",
        divisions=[
            Division(name="Beginner", order=1, num_rings=3),
            Division(name="Black Belt", order=2, num_rings=1),
        ],
    )


@pytest.fixture
def tournament(seven_competitors, three_pool_category, config):
    """Tournament with seven beginners who also spar, and a sparring category."""
    competitors = [
        build_competitor(
            c.id, c.age, sparring_division="Beginner", sparring_category_id="cat-spar"
        )
        for c in seven_competitors
    ]
    sparring = Category(
        id="cat-spar",
        name="Mixed Sparring 8-14",
        division="Beginner",
        event_type="sparring",
        competitor_ids=[c.id for c in competitors],
        num_pools=3,
    )
    dataset = TournamentDataset(
        competitors=competitors,
        categories=[three_pool_category, sparring],
        config=config,
    )
    return Tournament(dataset)


@pytest.fixture
def physical_rings():
    return [PhysicalRing(id=f"PR{n}", name=f"Ring {n}") for n in range(1, 3)]
