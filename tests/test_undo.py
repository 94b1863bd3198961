from ringsteward.controllers.history import UndoManager
from ringsteward.models.tournament import TournamentDataset


def _dataset(make_competitor, *ids):
    return TournamentDataset(competitors=[make_competitor(i, 9) for i in ids])


def _ids(dataset):
    return [c.id for c in dataset.competitors]


def test_undo_then_redo(make_competitor):
    history = UndoManager()
    before = _dataset(make_competitor, "a")
    after = _dataset(make_competitor, "a", "b")

    history.record(before)
    restored = history.undo(after)

    assert _ids(restored) == ["a"]
    assert history.can_redo
    assert _ids(history.redo(restored)) == ["a", "b"]
    assert history.can_undo
    assert not history.can_redo


def test_nothing_to_undo_or_redo(make_competitor):
    history = UndoManager()
    current = _dataset(make_competitor, "a")

    assert history.undo(current) is None
    assert history.redo(current) is None
    assert not history.can_undo


def test_recording_clears_redo(make_competitor):
    history = UndoManager()
    history.record(_dataset(make_competitor, "a"))
    history.undo(_dataset(make_competitor, "a", "b"))

    history.record(_dataset(make_competitor, "a", "c"))

    assert not history.can_redo


def test_snapshots_are_copies(make_competitor):
    history = UndoManager()
    dataset = _dataset(make_competitor, "a")

    history.record(dataset)
    dataset.competitors.append(make_competitor("b", 9))

    assert _ids(history.undo(dataset)) == ["a"]


def test_depth_is_bounded(make_competitor):
    history = UndoManager(depth=2)
    for name in ("a", "b", "c"):
        history.record(_dataset(make_competitor, name))

    current = _dataset(make_competitor, "d")
    first = history.undo(current)
    second = history.undo(first)

    assert _ids(first) == ["c"]
    assert _ids(second) == ["b"]
    assert history.undo(second) is None


def test_clear(make_competitor):
    history = UndoManager()
    history.record(_dataset(make_competitor, "a"))

    history.clear()

    assert not history.can_undo
    assert not history.can_redo


def test_resize_keeps_newest_snapshots(make_competitor):
    history = UndoManager(depth=5)
    for name in ("a", "b", "c"):
        history.record(_dataset(make_competitor, name))

    history.resize(1)

    assert _ids(history.undo(_dataset(make_competitor, "d"))) == ["c"]
    assert not history.can_undo
