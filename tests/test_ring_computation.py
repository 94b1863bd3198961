from ringsteward.controllers.rings import competitors_in_pool, compute_rings
from ringsteward.models.tournament import Category, CategoryPoolMapping


def test_groups_by_event_category_and_pool(make_competitor):
    competitors = [
        make_competitor("a", 8, forms_category_id="f", forms_pool="P1"),
        make_competitor("b", 9, forms_category_id="f", forms_pool="P2"),
        make_competitor("c", 10, forms_category_id="f", forms_pool="P1",
                        sparring_division="Beginner", sparring_category_id="s",
                        sparring_pool="P1"),
    ]
    categories = [
        Category(id="f", name="Kids", division="Beginner"),
        Category(id="s", name="Kids Sparring", division="Beginner", event_type="sparring"),
    ]

    rings = compute_rings(competitors, categories, [])

    assert [(r.id, r.competitor_ids) for r in rings] == [
        ("forms-f-P1", ("a", "c")),
        ("forms-f-P2", ("b",)),
        ("sparring-s-P1", ("c",)),
    ]
    assert rings[0].name == "Kids_P1"
    assert rings[2].event_type == "sparring"


def test_rings_follow_category_and_pool_order(make_competitor):
    competitors = [
        make_competitor("a", 8, forms_category_id="g", forms_pool="P1"),
        make_competitor("b", 9, forms_category_id="f", forms_pool="P10"),
        make_competitor("c", 10, forms_category_id="f", forms_pool="P2"),
        make_competitor("d", 11, forms_category_id="f", forms_pool="P1"),
    ]
    categories = [
        Category(id="f", name="Kids", division="Beginner", num_pools=10),
        Category(id="g", name="Teens", division="Beginner"),
    ]

    rings = compute_rings(competitors, categories, [])

    assert [r.name for r in rings] == ["Kids_P1", "Kids_P2", "Kids_P10", "Teens_P1"]


def test_physical_ring_from_pool_mapping(make_competitor):
    competitors = [
        make_competitor("a", 8, forms_category_id="f", forms_pool="P1"),
        make_competitor("b", 9, forms_category_id="f", forms_pool="P2"),
    ]
    categories = [Category(id="f", name="Kids", division="Beginner", num_pools=2)]
    mappings = [CategoryPoolMapping("Beginner", "f", "P1", "PR7")]

    rings = compute_rings(competitors, categories, mappings)
    physical = {r.pool: r.physical_ring_id for r in rings}

    assert physical == {"P1": "PR7", "P2": "unassigned"}


def test_missing_category_is_skipped(make_competitor):
    competitors = [
        make_competitor("a", 8, forms_category_id="gone", forms_pool="P1"),
        make_competitor("b", 9, forms_category_id="f", forms_pool="P1"),
    ]
    categories = [Category(id="f", name="Kids", division="Beginner")]

    rings = compute_rings(competitors, categories, [])

    assert [r.category_id for r in rings] == ["f"]


def test_unplaced_and_withdrawn_competitors_are_left_out(make_competitor):
    withdrawn = make_competitor("w", 9, forms_division=None,
                                forms_category_id="f", forms_pool="P1")
    unplaced = make_competitor("u", 10, forms_category_id="f")
    placed = make_competitor("p", 11, forms_category_id="f", forms_pool="P1")
    categories = [Category(id="f", name="Kids", division="Beginner")]

    rings = compute_rings([withdrawn, unplaced, placed], categories, [])

    assert len(rings) == 1
    assert rings[0].competitor_ids == ("p",)


def test_empty_input_gives_no_rings():
    assert compute_rings([], [], []) == []


def test_competitors_in_pool(make_competitor):
    competitors = [
        make_competitor("a", 8, forms_category_id="f", forms_pool="P1"),
        make_competitor("b", 9, forms_category_id="f", forms_pool="P2"),
        make_competitor("c", 10, forms_category_id="f", forms_pool="P1"),
    ]

    members = competitors_in_pool(competitors, "f", "P1", "forms")

    assert [c.id for c in members] == ["a", "c"]
