import itertools

import pytest

from ringsteward.controllers.rings import (
    CategoryDefinition,
    apply_category_ids,
    build_categories,
    pools_needed,
    suggest_definitions,
)
from ringsteward.exceptions import InvalidCategoryException


@pytest.fixture
def roster(make_competitor):
    return [
        make_competitor("m1", 8, gender="Male"),
        make_competitor("m2", 11, gender="Male"),
        make_competitor("f1", 9, gender="Female"),
        make_competitor("f2", 25, gender="Female"),
        make_competitor("bb", 30, gender="Male", forms_division="Black Belt"),
    ]


def _ids():
    counter = itertools.count(1)
    return lambda: f"cat-{next(counter)}"


@pytest.mark.parametrize("count,expected", [(0, 1), (10, 1), (11, 2), (25, 3)])
def test_pools_needed(count, expected):
    assert pools_needed(count) == expected


def test_display_name():
    assert CategoryDefinition("Beginner", "male", 8, 12).display_name == "Male 8-12"
    assert CategoryDefinition("Beginner", "mixed", 18).display_name == "Mixed 18+"


def test_build_categories_filters_by_division_gender_and_age(roster):
    definitions = [
        CategoryDefinition("Beginner", "male", 6, 12),
        CategoryDefinition("Beginner", "mixed", 6, 12, num_pools=2),
    ]

    categories = build_categories(roster, definitions, id_factory=_ids())

    assert [c.id for c in categories] == ["cat-1", "cat-2"]
    assert categories[0].competitor_ids == ["m1", "m2"]
    assert categories[1].competitor_ids == ["m1", "m2", "f1"]
    assert categories[1].num_pools == 2
    assert categories[1].name == "Mixed 6-12"


def test_definition_without_members_is_skipped(roster):
    definitions = [CategoryDefinition("Beginner", "female", 40, 50)]

    assert build_categories(roster, definitions) == []


def test_invalid_pool_count_raises(roster):
    with pytest.raises(InvalidCategoryException):
        build_categories(roster, [CategoryDefinition("Beginner", num_pools=11)])


def test_sparring_categories_use_sparring_division(make_competitor):
    sparrer = make_competitor("s", 10, forms_division=None, sparring_division="Beginner")

    categories = build_categories(
        [sparrer], [CategoryDefinition("Beginner", min_age=6, max_age=12)], "sparring"
    )

    assert categories[0].event_type == "sparring"
    assert categories[0].competitor_ids == ["s"]


def test_suggest_splits_youth_and_adults(roster):
    definitions = suggest_definitions(roster, "Beginner")

    assert [(d.gender, d.min_age, d.max_age) for d in definitions] == [
        ("male", 8, 11),
        ("female", 9, 17),
        ("female", 18, 25),
    ]


def test_suggest_covers_every_division(roster):
    divisions = {d.division for d in suggest_definitions(roster)}

    assert divisions == {"Beginner", "Black Belt"}


def test_apply_category_ids(roster):
    categories = build_categories(
        roster, [CategoryDefinition("Beginner", "male", 6, 12)], id_factory=_ids()
    )

    result = apply_category_ids(roster, categories, "forms")

    assert [c.forms.category_id for c in result] == ["cat-1", "cat-1", None, None, None]
    assert roster[0].forms.category_id is None
