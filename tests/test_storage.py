import json

import pytest

from ringsteward.exceptions import FileLoadException, FileSaveException
from ringsteward.storage import load_tournament, save_tournament, with_extension


def test_save_and_load(tmp_path, tournament):
    tournament.assign_rings("forms")
    tournament.auto_assign_physical_rings("Beginner")
    tournament.create_checkpoint("Morning")

    path = save_tournament(tournament, tmp_path / "spring")
    loaded = load_tournament(path)

    assert path.suffix == ".json"
    assert [c.to_dict() for c in loaded.competitors] == [c.to_dict() for c in tournament.competitors]
    assert loaded.dataset.physical_ring_mappings == tournament.dataset.physical_ring_mappings
    assert loaded.rings == tournament.rings
    assert [c.name for c in loaded.checkpoints] == ["Morning"]


def test_saved_file_is_indented_json(tmp_path, tournament):
    path = save_tournament(tournament, tmp_path / "t.json")

    text = path.read_text(encoding="utf-8")

    assert text.startswith("{\n    ")
    assert set(json.loads(text)) == {"dataset", "checkpoints"}


def test_with_extension_keeps_existing_suffix(tmp_path):
    assert with_extension(tmp_path / "a.json").name == "a.json"
    assert with_extension(tmp_path / "a").name == "a.json"


def test_load_legacy_dataset_file(tmp_path):
    data = {
        "competitors": [
            {
                "id": "a",
                "first_name": "Ana",
                "last_name": "Lopez",
                "age": 9,
                "forms_division": "Beginner",
                "competing_forms": True,
                "forms_category_id": "k",
                "forms_pool": "P1",
            }
        ],
        "cohorts": [{"id": "k", "name": "Kids", "division": "Beginner"}],
        "cohortRingMappings": [{"cohortRingName": "Kids_P1", "physicalRingName": "PR2a"}],
    }
    path = tmp_path / "old.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    loaded = load_tournament(path)

    assert loaded.get_category("k").name == "Kids"
    assert loaded.get_physical_ring_name("Kids", "P1") == "PR2a"
    assert [r.name for r in loaded.rings] == ["Kids_P1"]
    assert loaded.checkpoints == []


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileLoadException):
        load_tournament(tmp_path / "missing.json")


def test_load_malformed_file_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(FileLoadException):
        load_tournament(path)


def test_save_to_missing_directory_raises(tmp_path, tournament):
    with pytest.raises(FileSaveException):
        save_tournament(tournament, tmp_path / "nope" / "t.json")
