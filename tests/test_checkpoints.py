import pytest

from ringsteward.controllers.history import CheckpointManager, diff_datasets
from ringsteward.models.tournament import Category, Checkpoint, TournamentDataset


@pytest.fixture
def dataset(make_competitor):
    competitors = [
        make_competitor("a", 9, forms_category_id="f", forms_pool="P1",
                        sparring_division="Beginner", sparring_category_id="s",
                        sparring_pool="P1"),
        make_competitor("b", 10, forms_category_id="f", forms_pool="P2"),
    ]
    categories = [
        Category(id="f", name="Kids", division="Beginner", num_pools=2),
        Category(id="s", name="Kids Sparring", division="Beginner",
                 event_type="sparring", num_pools=2),
    ]
    return TournamentDataset(competitors=competitors, categories=categories)


@pytest.fixture
def manager():
    return CheckpointManager()


def test_create_snapshot_is_independent(manager, dataset):
    checkpoint = manager.create(dataset, "Before lunch")
    dataset.competitors[0].first_name = "Changed"

    assert checkpoint.name == "Before lunch"
    assert checkpoint.dataset.competitors[0].first_name == "Kida"
    assert len(manager) == 1


def test_default_name_uses_timestamp(manager, dataset):
    checkpoint = manager.create(dataset)

    assert checkpoint.name.startswith("Checkpoint ")
    assert checkpoint.timestamp.strftime("%Y") in checkpoint.name


def test_checkpoints_are_frozen(manager, dataset):
    checkpoint = manager.create(dataset)

    with pytest.raises(AttributeError):
        checkpoint.name = "Other"


def test_no_changes_gives_empty_diff(manager, dataset):
    checkpoint = manager.create(dataset)

    diff = manager.diff(checkpoint.id, dataset)

    assert diff.is_empty
    assert diff.rings_affected == set()


def test_diff_reports_added_and_removed(manager, dataset, make_competitor):
    checkpoint = manager.create(dataset)
    dataset.competitors.pop(1)
    dataset.competitors.append(make_competitor("c", 11, forms_category_id="f", forms_pool="P1"))

    diff = manager.diff(checkpoint.id, dataset)

    assert [c.id for c in diff.added] == ["c"]
    assert [c.id for c in diff.removed] == ["b"]
    assert diff.rings_affected == {"Kids_P1", "Kids_P2"}


def test_diff_reports_field_changes(manager, dataset):
    checkpoint = manager.create(dataset)
    dataset.competitors[1].forms.pool = "P1"
    dataset.competitors[1].school = "Tiger Den"

    diff = manager.diff(checkpoint.id, dataset)
    changes = {c.field: (c.old_value, c.new_value) for c in diff.changes_for("b")}

    assert changes == {
        "forms_pool": ("P2", "P1"),
        "school": ("Dragon Dojo", "Tiger Den"),
    }
    assert diff.rings_affected == {"Kids_P1", "Kids_P2"}


def test_non_ring_change_affects_no_ring(manager, dataset):
    checkpoint = manager.create(dataset)
    dataset.competitors[0].age = 10

    diff = manager.diff(checkpoint.id, dataset)

    assert len(diff.modified) == 1
    assert diff.rings_affected == set()


def test_alt_ring_change_names_alternate_ring(manager, dataset):
    checkpoint = manager.create(dataset)
    dataset.competitors[0].sparring.alt_ring = "b"

    diff = manager.diff(checkpoint.id, dataset)

    assert diff.rings_affected == {"Kids Sparring_P1", "Kids Sparring_P1_b"}


def test_diff_leaves_both_sides_alone(dataset):
    before = dataset.clone()
    after = dataset.clone()
    after.competitors[0].forms.pool = "P2"

    diff_datasets(before, after)

    assert before.competitors[0].forms.pool == "P1"
    assert after.competitors[0].forms.pool == "P2"


def test_unknown_checkpoint(manager, dataset):
    assert manager.diff("missing", dataset) is None
    assert manager.load("missing") is None
    assert manager.rename("missing", "x") is False
    assert manager.delete("missing") is False


def test_load_returns_a_copy(manager, dataset):
    checkpoint = manager.create(dataset)

    loaded = manager.load(checkpoint.id)
    loaded.competitors.clear()

    assert len(manager.get(checkpoint.id).dataset.competitors) == 2
    assert len(manager.load(checkpoint.id).competitors) == 2


def test_rename_and_delete(manager, dataset):
    first = manager.create(dataset, "First")
    second = manager.create(dataset, "Second")

    assert manager.rename(first.id, "Renamed") is True
    assert [c.name for c in manager.checkpoints] == ["Renamed", "Second"]
    assert manager.get(first.id).timestamp == first.timestamp

    assert manager.delete(first.id) is True
    assert [c.id for c in manager.checkpoints] == [second.id]


def test_serialization_round_trip(manager, dataset):
    checkpoint = manager.create(dataset, "Saved")

    restored = CheckpointManager.from_dict(manager.to_dict())
    copy = restored.get(checkpoint.id)

    assert copy.name == "Saved"
    assert copy.timestamp == checkpoint.timestamp
    assert [c.id for c in copy.dataset.competitors] == ["a", "b"]


def test_legacy_state_key_is_read(dataset):
    data = {
        "id": "cp1",
        "name": "Old",
        "timestamp": "2024-03-01T10:00:00",
        "state": dataset.to_dict(),
    }

    checkpoint = Checkpoint.from_dict(data)

    assert checkpoint.dataset.get_competitor("a") is not None
