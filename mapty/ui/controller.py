"""Session controller keeping the store, the snapshot and the views in sync."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, cast

from mapty.core.geolocation import GeolocationProvider
from mapty.core.state import SessionState
from mapty.map.bridge import MapBridge
from mapty.workout.model import (
    WORKOUT_KINDS,
    Coords,
    Workout,
    WorkoutKind,
    WorkoutValidationError,
    create_workout,
    parse_number,
)
from mapty.workout.storage import KeyValueStorage
from mapty.workout.store import STORAGE_KEY, WorkoutStore

logger = logging.getLogger(__name__)

LOCATION_UNAVAILABLE_MESSAGE = "Couldn't get your current location"
SAVE_FAILED_MESSAGE = "Couldn't save your workouts"
KIND_MISMATCH_MESSAGE = "Choose the workout type again"


@dataclass(frozen=True)
class WorkoutForm:
    """Raw form values as typed by the user."""

    kind: str
    distance: object = None
    duration: object = None
    cadence: object = None
    elevation: object = None


class WorkoutView(Protocol):
    def show_form(self) -> None: ...

    def hide_form(self) -> None: ...

    def show_kind_fields(self, kind: WorkoutKind) -> None: ...

    def reset_inputs(self) -> None: ...

    def render_entry(self, workout: Workout) -> None: ...

    def remove_entries(self) -> None: ...

    def notify(self, message: str) -> None: ...


class SessionController:
    def __init__(
        self,
        map_bridge: MapBridge,
        geolocation: GeolocationProvider,
        storage: KeyValueStorage,
        view: WorkoutView,
        *,
        zoom_level: int = 15,
        storage_key: str = STORAGE_KEY,
        store: WorkoutStore | None = None,
    ) -> None:
        self._map = map_bridge
        self._geolocation = geolocation
        self._storage = storage
        self._view = view
        self._storage_key = storage_key
        self.store = store or WorkoutStore()
        self.state = SessionState(zoom_level=zoom_level)
        self._map.on_user_click(self.handle_map_click)

    def start(self) -> None:
        self.store.load_from(self._storage, self._storage_key)
        for workout in self.store.all():
            self._view.render_entry(workout)
        self._request_location()

    def _request_location(self) -> None:
        self.state.phase = "acquiring_location"
        self.state.location_request += 1
        self.state.location_answered = False
        request_id = self.state.location_request

        def _on_success(coords: Coords) -> None:
            if self._claim_location_answer(request_id):
                self._on_location(coords)

        def _on_failure(reason: str) -> None:
            if self._claim_location_answer(request_id):
                self._on_location_error(reason)

        self._geolocation.request(_on_success, _on_failure)

    def _claim_location_answer(self, request_id: int) -> bool:
        if request_id != self.state.location_request or self.state.location_answered:
            logger.debug("Ignoring stale location answer for request %d", request_id)
            return False
        self.state.location_answered = True
        return True

    def _on_location(self, coords: Coords) -> None:
        self._map.initialize(coords, self.state.zoom_level)
        self.state.phase = "map_ready"
        for workout in self.store.all():
            self._map.place_marker(workout)

    def _on_location_error(self, reason: str) -> None:
        logger.warning("Location unavailable: %s", reason)
        self.state.phase = "location_unavailable"
        self._view.notify(LOCATION_UNAVAILABLE_MESSAGE)

    def handle_map_click(self, coords: Coords) -> None:
        if not self.state.map_ready:
            return
        self.state.pending_coords = coords
        if not self.state.form_visible:
            self.state.form_visible = True
            self._view.show_form()

    def change_kind(self, kind: str) -> None:
        if not self.state.form_visible:
            return
        if kind not in WORKOUT_KINDS:
            logger.warning("Ignoring unknown workout type %r", kind)
            return
        self.state.form_kind = cast(WorkoutKind, kind)
        self._view.show_kind_fields(self.state.form_kind)

    def cancel(self) -> None:
        if not self.state.form_visible:
            return
        self._close_form()

    def _close_form(self) -> None:
        self.state.form_visible = False
        self.state.pending_coords = None
        self._view.hide_form()

    def submit(self, form: WorkoutForm) -> Workout | None:
        coords = self.state.pending_coords
        if not self.state.form_visible or coords is None:
            return None
        if form.kind != self.state.form_kind:
            logger.warning(
                "Form type %r does not match selected type %r", form.kind, self.state.form_kind
            )
            self._view.notify(KIND_MISMATCH_MESSAGE)
            return None

        try:
            workout = create_workout(
                form.kind,
                coords,
                parse_number(form.distance),
                parse_number(form.duration),
                cadence=parse_number(form.cadence) if form.kind == "running" else None,
                elevation=parse_number(form.elevation) if form.kind == "cycling" else None,
            )
        except WorkoutValidationError as exc:
            self._view.notify(str(exc))
            return None

        workout = self.store.append(workout)
        try:
            self.store.save_to(self._storage, self._storage_key)
        except OSError as exc:
            logger.error("Failed to persist workouts: %s", exc)
            self._view.notify(SAVE_FAILED_MESSAGE)
        self._view.render_entry(workout)
        if self._map.is_ready:
            self._map.place_marker(workout)
        self._view.reset_inputs()
        self._close_form()
        logger.info("Logged %s (%s)", workout.description, workout.id)
        return workout

    def select_entry(self, workout_id: str) -> None:
        if not self.state.map_ready:
            return
        workout = self.store.find(workout_id)
        if workout is None:
            return
        self._map.focus(workout.coords, self.state.zoom_level)

    def clear_all(self) -> None:
        self._view.remove_entries()
        self._map.reset()
        if self.state.form_visible:
            self._close_form()
        self.store.clear()
        try:
            if self._storage.get(self._storage_key) is not None:
                self._storage.remove(self._storage_key)
        except OSError as exc:
            logger.error("Failed to remove stored workouts: %s", exc)
            self._view.notify(SAVE_FAILED_MESSAGE)
        self._request_location()
