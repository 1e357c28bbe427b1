"""Display rows for workout list entries and map popups."""

from __future__ import annotations

from dataclasses import dataclass

from mapty.workout.model import Cycling, Running, Workout

RUNNING_ICON = "🏃‍♂️"
CYCLING_ICON = "🚴‍♀️"


@dataclass(frozen=True)
class EntryDetail:
    icon: str
    value: str
    unit: str


def workout_icon(workout: Workout) -> str:
    return RUNNING_ICON if workout.type == "running" else CYCLING_ICON


def _fmt(value: float) -> str:
    return f"{value:g}"


def entry_details(workout: Workout) -> tuple[EntryDetail, ...]:
    rows = [
        EntryDetail(workout_icon(workout), _fmt(workout.distance), "km"),
        EntryDetail("⏱", _fmt(workout.duration), "min"),
    ]
    if isinstance(workout, Running):
        rows.append(EntryDetail("⚡️", _fmt(workout.pace), "min/km"))
        rows.append(EntryDetail("🦶🏼", _fmt(workout.cadence), "spm"))
    elif isinstance(workout, Cycling):
        rows.append(EntryDetail("⚡️", _fmt(workout.speed), "km/h"))
        rows.append(EntryDetail("⛰", _fmt(workout.elevation), "m"))
    return tuple(rows)
