from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from stationsync.exceptions import PersistenceError
from stationsync.state.persistence import JsonFileStorage


def _state() -> dict:
    return {
        "محطة الشمال": [{"savedAt": "2024-01-02T00:00:00Z", "level": 2.5}],
        "B": [],
        "A": [{"savedAt": "2024-01-01T00:00:00Z", "pumps": [1, 2]}],
    }


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "stations.json")

    storage.save(_state())
    loaded = storage.load()

    assert loaded == _state()
    assert list(loaded) == list(_state())


def test_missing_file_loads_empty(tmp_path: Path) -> None:
    assert JsonFileStorage(tmp_path / "absent.json").load() == {}


def test_corrupt_file_loads_empty_with_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "stations.json"
    path.write_text('{"A": [', encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="stationsync.state.persistence"):
        assert JsonFileStorage(path).load() == {}

    assert any("starting empty" in record.getMessage() for record in caplog.records)


@pytest.mark.parametrize("content", ["[]", '"text"', '{"A": {"savedAt": "x"}}'])
def test_wrong_shape_loads_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "stations.json"
    path.write_text(content, encoding="utf-8")

    assert JsonFileStorage(path).load() == {}


def test_read_raises_on_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "stations.json"
    path.write_text("not json", encoding="utf-8")

    with pytest.raises(PersistenceError) as excinfo:
        JsonFileStorage(path).read()

    assert excinfo.value.path == path


def test_non_object_records_are_dropped(tmp_path: Path) -> None:
    path = tmp_path / "stations.json"
    path.write_text(json.dumps({"A": [{"savedAt": "2024-01-01T00:00:00Z"}, "junk", 3]}), encoding="utf-8")

    assert JsonFileStorage(path).load() == {"A": [{"savedAt": "2024-01-01T00:00:00Z"}]}


def test_save_creates_parent_directory(tmp_path: Path) -> None:
    path = tmp_path / "data" / "nested" / "stations.json"

    JsonFileStorage(path).save({"A": []})

    assert json.loads(path.read_text(encoding="utf-8")) == {"A": []}


def test_atomic_save_leaves_no_temp_file(tmp_path: Path) -> None:
    path = tmp_path / "stations.json"
    storage = JsonFileStorage(path)

    storage.save({"A": []})
    storage.save({"B": []})

    assert sorted(p.name for p in tmp_path.iterdir()) == ["stations.json"]
    assert json.loads(path.read_text(encoding="utf-8")) == {"B": []}


def test_in_place_save(tmp_path: Path) -> None:
    path = tmp_path / "stations.json"
    path.write_text("{}", encoding="utf-8")

    JsonFileStorage(path, atomic=False).save({"A": [{"savedAt": "2024-01-01T00:00:00Z"}]})

    assert json.loads(path.read_text(encoding="utf-8")) == {"A": [{"savedAt": "2024-01-01T00:00:00Z"}]}


def test_saved_file_keeps_non_ascii_readable(tmp_path: Path) -> None:
    path = tmp_path / "stations.json"

    JsonFileStorage(path).save({"محطة": []})

    assert "محطة" in path.read_text(encoding="utf-8")


def test_save_failure_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(PersistenceError):
        JsonFileStorage(blocker / "stations.json").save({"A": []})


def test_unserializable_state_raises_persistence_error(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError):
        JsonFileStorage(tmp_path / "stations.json").save({"A": [{"savedAt": object()}]})
