from __future__ import annotations

import json
from pathlib import Path

from mapty.workout.storage import JsonFileStorage, MappingStorage, MemoryStorage


def test_json_file_storage_set_get_remove(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "storage.json"
    storage = JsonFileStorage(path)

    assert storage.get("workouts") is None

    storage.set("workouts", "[]")
    storage.set("other", "x")

    assert path.exists()
    assert JsonFileStorage(path).get("workouts") == "[]"
    assert json.loads(path.read_text(encoding="utf-8")) == {"workouts": "[]", "other": "x"}

    storage.remove("workouts")
    storage.remove("workouts")

    assert storage.get("workouts") is None
    assert storage.get("other") == "x"


def test_json_file_storage_corrupt_file_reads_empty(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{broken", encoding="utf-8")

    storage = JsonFileStorage(path)

    assert storage.get("workouts") is None
    storage.set("workouts", "[]")
    assert storage.get("workouts") == "[]"


def test_mapping_storage_wraps_dict() -> None:
    backing: dict = {"count": 3}
    storage = MappingStorage(backing)

    storage.set("workouts", "[]")
    assert backing["workouts"] == "[]"
    # Non-string values are not snapshots.
    assert storage.get("count") is None

    storage.remove("workouts")
    storage.remove("missing")
    assert "workouts" not in backing


def test_memory_storage_instances_are_isolated() -> None:
    a = MemoryStorage()
    b = MemoryStorage()
    a.set("k", "v")

    assert a.get("k") == "v"
    assert b.get("k") is None
