from ringsteward.controllers.rings import (
    name_hash,
    order_forms_pool,
    order_rings,
    order_sparring_pool,
    spread_schools,
)
from ringsteward.models.tournament import CompetitionRing


def test_name_hash_is_deterministic_and_case_insensitive():
    assert name_hash("Ana", "Lopez") == name_hash("ana", "LOPEZ")
    assert name_hash("Ana", "Lopez") == name_hash("Ana", "Lopez")
    assert name_hash("Ana", "Lopez") != name_hash("Ben", "Lopez")


def test_name_hash_matches_known_values():
    # 'a' -> 97, 'ab' -> 97 * 31 + 98
    assert name_hash("a", "") == 97
    assert name_hash("a", "b") == 3105


def test_name_hash_stays_in_32_bits():
    value = name_hash("Maximilian-Alexander", "Von Hohenzollern-Sigmaringen")

    assert 0 <= value <= 2 ** 31


def test_spread_schools_interleaves(make_competitor):
    members = [make_competitor(f"d{i}", 9, school="Dragon") for i in range(3)]
    members += [make_competitor(f"t{i}", 9, school="Tiger") for i in range(3)]

    ordered = spread_schools(members)
    schools = [c.school for c in ordered]

    assert sorted(schools) == ["Dragon"] * 3 + ["Tiger"] * 3
    assert all(schools[i] != schools[i + 1] for i in range(len(schools) - 1))


def test_spread_schools_breaks_up_opening_teammates(make_competitor):
    members = [make_competitor(f"d{i}", 9, school="Dragon") for i in range(4)]
    members.append(make_competitor("t0", 9, school="Tiger"))

    ordered = spread_schools(members)

    assert len({c.school for c in ordered[:3]}) == 2


def test_branch_counts_as_a_separate_school(make_competitor):
    north = make_competitor("n", 9, school="Dragon", branch="North")
    south = make_competitor("s", 9, school="Dragon", branch="South")

    assert north.affiliation != south.affiliation
    assert len(spread_schools([north, south])) == 2


def test_forms_ranks_step_by_ten(make_competitor):
    competitors = [
        make_competitor(f"c{i}", 9, school=school, forms_category_id="f", forms_pool="P1")
        for i, school in enumerate(["A", "B", "C"])
    ]
    outsider = make_competitor("x", 9, forms_category_id="f", forms_pool="P2")

    result = order_forms_pool(competitors + [outsider], "f", "P1")

    assert sorted(c.forms.rank_order for c in result[:3]) == [10, 20, 30]
    assert result[3] is outsider


def test_forms_order_ignores_roster_order_within_a_school(make_competitor):
    competitors = [
        make_competitor(f"c{i}", 9, forms_category_id="f", forms_pool="P1")
        for i in range(6)
    ]

    first = order_forms_pool(competitors, "f", "P1")
    second = order_forms_pool(list(reversed(competitors)), "f", "P1")

    ranks = lambda result: {c.id: c.forms.rank_order for c in result}
    assert ranks(first) == ranks(second)


def test_sparring_ordered_by_height(make_competitor):
    competitors = [
        make_competitor("tall", 12, height=(5, 2), sparring_division="Beginner",
                        sparring_category_id="s", sparring_pool="P1"),
        make_competitor("short", 12, height=(4, 1), sparring_division="Beginner",
                        sparring_category_id="s", sparring_pool="P1"),
        make_competitor("mid", 12, height=(4, 11), sparring_division="Beginner",
                        sparring_category_id="s", sparring_pool="P1"),
    ]

    result = order_sparring_pool(competitors, "s", "P1")
    ranks = {c.id: c.sparring.rank_order for c in result}

    assert ranks == {"short": 10, "mid": 20, "tall": 30}


def test_empty_pool_changes_nothing(make_competitor):
    competitors = [make_competitor("a", 9)]

    assert order_forms_pool(competitors, "f", "P1") == competitors


def test_order_rings_handles_both_events(make_competitor):
    competitors = [
        make_competitor("a", 9, forms_category_id="f", forms_pool="P1",
                        sparring_division="Beginner", sparring_category_id="s",
                        sparring_pool="P1"),
    ]
    rings = [
        CompetitionRing("forms-f-P1", "Beginner", "f", "P1", "PR1", "forms", ("a",), "F_P1"),
        CompetitionRing("sparring-s-P1", "Beginner", "s", "P1", "PR1", "sparring", ("a",), "S_P1"),
    ]

    result = order_rings(competitors, rings)

    assert result[0].forms.rank_order == 10
    assert result[0].sparring.rank_order == 10
    assert competitors[0].forms.rank_order is None
