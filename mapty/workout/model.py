"""Workout domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, ClassVar, Literal, cast
from uuid import uuid4


WorkoutKind = Literal["running", "cycling"]
Coords = tuple[float, float]

WORKOUT_KINDS: tuple[WorkoutKind, ...] = ("running", "cycling")

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class WorkoutValidationError(ValueError):
    """Raised when workout inputs cannot produce a valid workout."""


def new_workout_id() -> str:
    return uuid4().hex


def now_local() -> datetime:
    return datetime.now().astimezone()


def round_tenth(value: float) -> float:
    """Round to one decimal, ties away from zero on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def parse_number(raw: object) -> float:
    """Convert a form value to a float, or NaN when it is not a number."""
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def _finite(*values: object) -> bool:
    return all(
        isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)
        for v in values
    )


def _positive(*values: object) -> bool:
    return _finite(*values) and all(cast(float, v) > 0 for v in values)


def validate_workout_inputs(
    kind: str,
    distance: object,
    duration: object,
    *,
    cadence: object = None,
    elevation: object = None,
) -> None:
    if kind == "running":
        if not _positive(distance, duration, cadence):
            raise WorkoutValidationError("Inputs have to be positive numbers")
        return
    if kind == "cycling":
        if not _positive(distance, duration):
            raise WorkoutValidationError("Distance and duration have to be positive numbers")
        if not _finite(elevation):
            raise WorkoutValidationError("Elevation has to be a number")
        return
    raise WorkoutValidationError(f"Unknown workout type '{kind}'")


@dataclass(frozen=True, kw_only=True)
class Workout:
    type: ClassVar[WorkoutKind]

    coords: Coords
    distance: float
    duration: float
    id: str = field(default_factory=new_workout_id)
    created_at: datetime = field(default_factory=now_local)
    description: str = field(init=False)

    def __post_init__(self) -> None:
        if type(self) is Workout:
            raise TypeError("Workout is abstract; build Running or Cycling")
        self._validate()
        object.__setattr__(self, "coords", (float(self.coords[0]), float(self.coords[1])))
        object.__setattr__(self, "description", self._build_description())
        self._derive()

    def _validate(self) -> None:
        raise NotImplementedError

    def _derive(self) -> None:
        raise NotImplementedError

    def _build_description(self) -> str:
        month = _MONTHS[self.created_at.month - 1]
        return f"{self.type.capitalize()} on {month} {self.created_at.day}"

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "coords": [self.coords[0], self.coords[1]],
            "distance": self.distance,
            "duration": self.duration,
            "description": self.description,
            "type": self.type,
        }


@dataclass(frozen=True, kw_only=True)
class Running(Workout):
    type: ClassVar[WorkoutKind] = "running"

    cadence: float
    pace: float = field(init=False)

    def _validate(self) -> None:
        validate_workout_inputs(
            self.type, self.distance, self.duration, cadence=self.cadence
        )

    def _derive(self) -> None:
        object.__setattr__(self, "pace", round_tenth(self.duration / self.distance))

    def to_record(self) -> dict[str, Any]:
        record = super().to_record()
        record["cadence"] = self.cadence
        record["pace"] = self.pace
        return record


@dataclass(frozen=True, kw_only=True)
class Cycling(Workout):
    type: ClassVar[WorkoutKind] = "cycling"

    elevation: float
    speed: float = field(init=False)

    def _validate(self) -> None:
        validate_workout_inputs(
            self.type, self.distance, self.duration, elevation=self.elevation
        )

    def _derive(self) -> None:
        object.__setattr__(
            self, "speed", round_tenth(self.distance / (self.duration / 60))
        )

    def to_record(self) -> dict[str, Any]:
        record = super().to_record()
        record["elevation"] = self.elevation
        record["speed"] = self.speed
        return record


def create_workout(
    kind: str,
    coords: Coords,
    distance: float,
    duration: float,
    *,
    cadence: float | None = None,
    elevation: float | None = None,
) -> Workout:
    validate_workout_inputs(
        kind, distance, duration, cadence=cadence, elevation=elevation
    )
    if kind == "running":
        return Running(
            coords=coords,
            distance=distance,
            duration=duration,
            cadence=cast(float, cadence),
        )
    return Cycling(
        coords=coords,
        distance=distance,
        duration=duration,
        elevation=cast(float, elevation),
    )


def workout_from_record(record: object) -> Workout:
    """Rebuild the workout variant named by a record's ``type`` field."""
    if not isinstance(record, dict):
        raise WorkoutValidationError("Workout record must be an object")

    kind = record.get("type")
    try:
        workout_id = str(record["id"])
        created_at = datetime.fromisoformat(str(record["created_at"]))
        lat, lng = record["coords"]
        common: dict[str, Any] = {
            "id": workout_id,
            "created_at": created_at,
            "coords": (float(lat), float(lng)),
            "distance": record["distance"],
            "duration": record["duration"],
        }
        if kind == "running":
            return Running(cadence=record["cadence"], **common)
        if kind == "cycling":
            return Cycling(elevation=record["elevation"], **common)
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkoutValidationError(f"Invalid workout record: {exc}") from exc
    raise WorkoutValidationError(f"Unknown workout type '{kind}'")
