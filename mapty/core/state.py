"""Mutable state owned by the session controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from mapty.workout.model import Coords, WorkoutKind

SessionPhase = Literal["acquiring_location", "map_ready", "location_unavailable"]


@dataclass
class SessionState:
    phase: SessionPhase = "acquiring_location"
    zoom_level: int = 15
    pending_coords: Coords | None = None
    form_visible: bool = False
    form_kind: WorkoutKind = "running"
    # Sequence number of the location request whose answer is still awaited.
    location_request: int = 0
    location_answered: bool = False

    @property
    def map_ready(self) -> bool:
        return self.phase == "map_ready"
