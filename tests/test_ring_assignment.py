import pytest

from ringsteward.controllers.rings import (
    assign_rings,
    assign_rings_for_all_categories,
)
from ringsteward.exceptions import CapacityException
from ringsteward.models.tournament import Category, default_physical_ring


def _ages_by_pool(result):
    by_id = {c.id: c for c in result.updated_competitors}
    return {
        ring.pool: [by_id[cid].age for cid in ring.competitor_ids] for ring in result.rings
    }


def test_seven_competitors_over_three_pools(seven_competitors, three_pool_category, resources):
    result = assign_rings(three_pool_category, seven_competitors, resources)

    assert _ages_by_pool(result) == {
        "P1": [9, 11, 14],
        "P2": [10, 12],
        "P3": [10, 13],
    }
    assert [r.name for r in result.rings] == ["Mixed 8-14_P1", "Mixed 8-14_P2", "Mixed 8-14_P3"]
    assert [r.physical_ring_id for r in result.rings] == ["PR1", "PR2", "PR3"]


def test_ties_keep_input_order(seven_competitors, three_pool_category, resources):
    result = assign_rings(three_pool_category, seven_competitors, resources)
    pools = {c.id: c.forms.pool for c in result.updated_competitors}

    # c3 and c6 are both 10; c3 comes first in the roster
    assert pools["c3"] == "P2"
    assert pools["c6"] == "P3"


def test_assignment_sets_category_and_pool(seven_competitors, three_pool_category, resources):
    result = assign_rings(three_pool_category, seven_competitors, resources)

    for competitor in result.updated_competitors:
        assert competitor.forms.category_id == "cat-forms"
        assert competitor.forms.pool in {"P1", "P2", "P3"}


def test_inputs_are_not_mutated(seven_competitors, three_pool_category, resources):
    assign_rings(three_pool_category, seven_competitors, resources)

    assert all(c.forms.pool is None for c in seven_competitors)
    assert all(c.forms.category_id is None for c in seven_competitors)


def test_non_members_untouched(seven_competitors, three_pool_category, resources, make_competitor):
    outsider = make_competitor("x1", 30)
    competitors = seven_competitors + [outsider]

    result = assign_rings(three_pool_category, competitors, resources)

    assert result.updated_competitors[-1] is outsider
    assert len(result.updated_competitors) == 8


def test_capacity_error_when_too_few_resources(seven_competitors, three_pool_category):
    two_rings = [default_physical_ring(1), default_physical_ring(2)]

    with pytest.raises(CapacityException) as exc_info:
        assign_rings(three_pool_category, seven_competitors, two_rings)

    assert exc_info.value.required == 3
    assert exc_info.value.available == 2
    assert exc_info.value.shortfall == 1
    assert all(c.forms.pool is None for c in seven_competitors)


def test_empty_category_is_a_no_op(seven_competitors, resources):
    empty = Category(id="empty", name="Empty", division="Beginner", num_pools=2)

    result = assign_rings(empty, seven_competitors, resources)

    assert result.rings == []
    assert result.updated_competitors == seven_competitors


def test_every_resource_yields_a_ring(make_competitor, resources):
    competitors = [make_competitor("a", 9), make_competitor("b", 11)]
    category = Category(
        id="small", name="Mixed", division="Beginner",
        competitor_ids=["a", "b"], num_pools=3,
    )

    result = assign_rings(category, competitors, resources)

    assert [r.name for r in result.rings] == ["Mixed_P1", "Mixed_P2", "Mixed_P3"]
    assert result.rings[2].competitor_ids == ()
    assert [m.pool for m in result.pool_mappings()] == ["P1", "P2", "P3"]


def test_pool_sizes_are_balanced(make_competitor, resources):
    competitors = [make_competitor(f"c{i}", 8 + i % 5) for i in range(20)]
    category = Category(
        id="big",
        name="Big",
        division="Beginner",
        competitor_ids=[c.id for c in competitors],
        num_pools=3,
    )

    result = assign_rings(category, competitors, resources)
    sizes = sorted(ring.size for ring in result.rings)

    assert sizes[-1] - sizes[0] <= 1
    assert sum(sizes) == 20


def test_rerun_is_deterministic(seven_competitors, three_pool_category, resources):
    first = assign_rings(three_pool_category, seven_competitors, resources)
    second = assign_rings(three_pool_category, first.updated_competitors, resources)

    assert [r.competitor_ids for r in first.rings] == [r.competitor_ids for r in second.rings]


def test_pool_mappings_follow_rings(seven_competitors, three_pool_category, resources):
    result = assign_rings(three_pool_category, seven_competitors, resources)
    mappings = result.pool_mappings()

    assert [(m.category_id, m.pool, m.physical_ring_id) for m in mappings] == [
        ("cat-forms", "P1", "PR1"),
        ("cat-forms", "P2", "PR2"),
        ("cat-forms", "P3", "PR3"),
    ]


def test_all_categories_threads_competitors(make_competitor):
    young = [make_competitor(f"y{i}", 6 + i) for i in range(4)]
    black = [make_competitor(f"b{i}", 20 + i, forms_division="Black Belt") for i in range(3)]
    categories = [
        Category(id="young", name="Young", division="Beginner",
                 competitor_ids=[c.id for c in young], num_pools=2),
        Category(id="black", name="Adults", division="Black Belt",
                 competitor_ids=[c.id for c in black], num_pools=1),
        Category(id="spar", name="Spar", division="Beginner", event_type="sparring",
                 competitor_ids=[c.id for c in young], num_pools=1),
    ]
    per_division = {
        "Beginner": [default_physical_ring(1), default_physical_ring(2)],
        "Black Belt": [default_physical_ring(3)],
    }

    result = assign_rings_for_all_categories(
        categories, young + black, per_division.get, "forms"
    )

    assert {r.category_id for r in result.rings} == {"young", "black"}
    adult_ring = [r for r in result.rings if r.category_id == "black"][0]
    assert adult_ring.physical_ring_id == "PR3"
    assert all(c.forms.pool for c in result.updated_competitors)


def test_all_categories_filters_division(make_competitor, resources):
    young = [make_competitor(f"y{i}", 6 + i) for i in range(4)]
    black = [make_competitor(f"b{i}", 20 + i, forms_division="Black Belt") for i in range(3)]
    categories = [
        Category(id="young", name="Young", division="Beginner",
                 competitor_ids=[c.id for c in young], num_pools=1),
        Category(id="black", name="Adults", division="Black Belt",
                 competitor_ids=[c.id for c in black], num_pools=1),
    ]

    result = assign_rings_for_all_categories(
        categories, young + black, resources, "forms", division="Black Belt"
    )

    assert [r.category_id for r in result.rings] == ["black"]
    assert all(c.forms.pool is None for c in result.updated_competitors if c.id.startswith("y"))
