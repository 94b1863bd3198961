import pytest

from ringsteward.controllers.rings import (
    PoolUnit,
    auto_assign_physical_rings,
    build_pool_units,
    merge_division_mappings,
    ring_color,
)
from ringsteward.exceptions import CapacityException
from ringsteward.models.tournament import Category, CompetitionRing, PhysicalRingMapping


def _units(count, division="Beginner"):
    return [PoolUnit(category_name=f"Cat{i}", pool="P1", division=division) for i in range(count)]


def _labels(mappings):
    return [m.physical_ring_name for m in mappings]


def test_fewer_units_than_rings_use_plain_labels():
    assert _labels(auto_assign_physical_rings(_units(3), 4)) == ["PR1", "PR2", "PR3"]


def test_equal_units_and_rings():
    assert _labels(auto_assign_physical_rings(_units(2), 2)) == ["PR1", "PR2"]


def test_five_units_on_two_rings():
    labels = _labels(auto_assign_physical_rings(_units(5), 2))

    assert labels == ["PR1a", "PR1b", "PR2a", "PR2b", "PR1a"]


def test_three_units_on_two_rings():
    assert _labels(auto_assign_physical_rings(_units(3), 2)) == ["PR1a", "PR1b", "PR2a"]


def test_heavy_oversubscription_never_uses_more_suffixes():
    labels = _labels(auto_assign_physical_rings(_units(9), 2))

    assert all(label[-1] in "ab" for label in labels)
    assert {label[:-1] for label in labels} == {"PR1", "PR2"}


def test_no_rings_raises():
    with pytest.raises(CapacityException):
        auto_assign_physical_rings(_units(2), 0)


def test_no_units_no_rings_is_fine():
    assert auto_assign_physical_rings([], 0) == []


def test_mappings_carry_order_and_color():
    mappings = auto_assign_physical_rings(_units(3), 2)

    assert [m.order for m in mappings] == [0, 1, 2]
    assert mappings[0].color == "#ff0000"
    assert mappings[2].color == "#ffa500"


def test_ring_color_ignores_suffix():
    assert ring_color("PR5a") == "#0000ff"
    assert ring_color("PR5") == "#0000ff"
    assert ring_color("Main hall") == ""


def test_build_pool_units_sorted_by_age_then_name():
    categories = [
        Category(id="old", name="Adults", division="Beginner", min_age=18),
        Category(id="young", name="Kids", division="Beginner", min_age=6),
        Category(id="bb", name="Black", division="Black Belt", min_age=6),
    ]

    def ring(category_id, pool, division="Beginner", name=None):
        return CompetitionRing(
            id=f"forms-{category_id}-{pool}", division=division, category_id=category_id,
            pool=pool, physical_ring_id="unassigned", event_type="forms",
            competitor_ids=("x",), name=name or f"{category_id}_{pool}",
        )

    rings = [ring("old", "P1"), ring("young", "P2"), ring("young", "P1"), ring("bb", "P1", "Black Belt")]

    units = build_pool_units(rings, categories, "Beginner")

    assert [u.name for u in units] == ["Kids_P1", "Kids_P2", "Adults_P1"]


def test_merge_keeps_other_divisions():
    existing = [
        PhysicalRingMapping("Kids", "P1", "PR1", division="Beginner"),
        PhysicalRingMapping("Adults", "P1", "PR1", division="Black Belt"),
    ]
    new = [PhysicalRingMapping("Kids", "P1", "PR2", division="Beginner")]

    merged = merge_division_mappings(existing, new, "Beginner")

    assert [(m.category_name, m.physical_ring_name) for m in merged] == [
        ("Adults", "PR1"),
        ("Kids", "PR2"),
    ]
