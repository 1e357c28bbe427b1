"""Ordered in-memory collection of workouts and its persisted snapshot."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Iterator

from mapty.workout.model import (
    Workout,
    WorkoutValidationError,
    new_workout_id,
    workout_from_record,
)
from mapty.workout.storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "workouts"


def serialize(workouts: tuple[Workout, ...] | list[Workout]) -> str:
    return json.dumps([w.to_record() for w in workouts], ensure_ascii=True)


def deserialize(text: str) -> list[Workout]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise WorkoutValidationError(f"Invalid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise WorkoutValidationError("Workout snapshot must be an array")
    return [workout_from_record(item) for item in payload]


class WorkoutStore:
    """Append-only workouts in creation order.

    Identifiers are unique for the lifetime of the store: a workout whose id is
    empty or already taken is stored under a freshly generated one.
    """

    def __init__(self) -> None:
        self._workouts: list[Workout] = []
        self._ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(self.all())

    def all(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    def find(self, workout_id: str) -> Workout | None:
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    def _unique_id(self) -> str:
        candidate = new_workout_id()
        while candidate in self._ids:
            candidate = new_workout_id()
        return candidate

    def append(self, workout: Workout) -> Workout:
        if not workout.id or workout.id in self._ids:
            fresh_id = self._unique_id()
            logger.warning(
                "Workout id %r already in use, storing as %s", workout.id, fresh_id
            )
            workout = dataclasses.replace(workout, id=fresh_id)
        self._workouts.append(workout)
        self._ids.add(workout.id)
        return workout

    def clear(self) -> None:
        self._workouts = []
        self._ids = set()

    def load_from(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.clear()
        try:
            raw = storage.get(key)
        except OSError as exc:
            logger.warning("Could not read stored workouts: %s", exc)
            return
        if raw is None:
            return
        try:
            workouts = deserialize(raw)
        except WorkoutValidationError as exc:
            logger.warning("Discarding corrupt workout snapshot: %s", exc)
            return
        for workout in workouts:
            self.append(workout)
        logger.debug("Restored %d workouts", len(self._workouts))

    def save_to(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        storage.set(key, serialize(self._workouts))
