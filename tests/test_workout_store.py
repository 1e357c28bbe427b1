from __future__ import annotations

import json

from mapty.workout.model import Cycling, Running
from mapty.workout.storage import MemoryStorage
from mapty.workout.store import STORAGE_KEY, WorkoutStore, deserialize, serialize


def _run(**kwargs: object) -> Running:
    params: dict = {"coords": (51.6, -0.2), "distance": 5, "duration": 25, "cadence": 150}
    params.update(kwargs)
    return Running(**params)


def _ride(**kwargs: object) -> Cycling:
    params: dict = {"coords": (51.5, -0.1), "distance": 20, "duration": 60, "elevation": -5}
    params.update(kwargs)
    return Cycling(**params)


def test_append_keeps_insertion_order() -> None:
    store = WorkoutStore()
    first = store.append(_run())
    second = store.append(_ride())

    assert store.all() == (first, second)
    assert list(store) == [first, second]
    assert len(store) == 2


def test_all_is_a_snapshot() -> None:
    store = WorkoutStore()
    store.append(_run())
    snapshot = store.all()

    store.append(_ride())

    assert len(snapshot) == 1
    assert list(snapshot) == list(snapshot)


def test_find_by_id() -> None:
    store = WorkoutStore()
    run = store.append(_run())
    ride = store.append(_ride())

    assert store.find(ride.id) is ride
    assert store.find(run.id) is run
    assert store.find("missing") is None


def test_append_regenerates_colliding_id() -> None:
    store = WorkoutStore()
    first = store.append(_run(id="same"))
    second = store.append(_ride(id="same"))

    assert first.id == "same"
    assert second.id != "same"
    assert isinstance(second, Cycling)
    assert second.speed == 20.0
    assert store.find(second.id) is second


def test_clear_empties_store() -> None:
    store = WorkoutStore()
    store.append(_run(id="a"))
    store.clear()

    assert store.all() == ()
    # Ids are free again after a clear.
    assert store.append(_run(id="a")).id == "a"


def test_save_and_load_round_trip() -> None:
    storage = MemoryStorage()
    store = WorkoutStore()
    run = store.append(_run())
    ride = store.append(_ride())
    store.save_to(storage)

    restored = WorkoutStore()
    restored.load_from(storage)

    assert restored.all() == (run, ride)
    assert isinstance(restored.all()[0], Running)
    assert isinstance(restored.all()[1], Cycling)
    assert restored.all()[0].pace == 5.0
    assert restored.all()[1].speed == 20.0


def test_save_overwrites_previous_snapshot() -> None:
    storage = MemoryStorage()
    store = WorkoutStore()
    store.append(_run())
    store.save_to(storage)
    store.append(_ride())
    store.save_to(storage)

    payload = json.loads(storage.get(STORAGE_KEY) or "")
    assert [item["type"] for item in payload] == ["running", "cycling"]


def test_load_missing_snapshot_leaves_store_empty() -> None:
    store = WorkoutStore()
    store.append(_run())

    store.load_from(MemoryStorage())

    assert store.all() == ()


def test_load_corrupt_snapshot_is_treated_as_empty() -> None:
    for raw in ("{not json", '{"a": 1}', '[{"type": "running"}]', "null"):
        storage = MemoryStorage()
        storage.set(STORAGE_KEY, raw)
        store = WorkoutStore()
        store.append(_run())

        store.load_from(storage)

        assert store.all() == ()


def test_serialize_deserialize_preserves_fields() -> None:
    workouts = [_run(), _ride()]

    restored = deserialize(serialize(workouts))

    assert [w.to_record() for w in restored] == [w.to_record() for w in workouts]
