"""NiceGUI web UI for Mapty."""

from __future__ import annotations

import logging
from typing import Any

from nicegui import Client, app, background_tasks, ui
from nicegui.events import KeyEventArguments

from mapty.core.config import AppConfig
from mapty.core.geolocation import (
    FailureCallback,
    FixedGeolocation,
    GeolocationProvider,
    LocationCallback,
)
from mapty.map.bridge import MapBridge
from mapty.ui.controller import SessionController, WorkoutForm
from mapty.ui.leaflet_widget import LeafletWidget
from mapty.workout.entries import entry_details
from mapty.workout.model import Workout, WorkoutKind
from mapty.workout.storage import JsonFileStorage, KeyValueStorage, MappingStorage, MemoryStorage

logger = logging.getLogger(__name__)

ENTRY_FADE_SEC = 0.3
GEOLOCATION_TIMEOUT_SEC = 120.0

_LOCATE_JS = """
return await new Promise((resolve) => {
  if (!navigator.geolocation) {
    resolve({error: 'Geolocation is not supported by this browser'});
    return;
  }
  navigator.geolocation.getCurrentPosition(
    (pos) => resolve({lat: pos.coords.latitude, lng: pos.coords.longitude}),
    (err) => resolve({error: err.message || 'Permission denied'}),
  );
});
"""

_HEAD_HTML = """
<style>
  body { font-family: Manrope, Arial, sans-serif; background: #2d3439; color: #ececec; }
  .mt-sidebar { background: #2d3439; }
  .mt-form { background: #42484d; border-radius: 6px; }
  .mt-workout { background: #42484d; border-radius: 6px; cursor: pointer; }
  .mt-workout--running { border-left: 5px solid #00c46a; }
  .mt-workout--cycling { border-left: 5px solid #ffb545; }
  .mt-fade { opacity: 0; transition: opacity 0.3s; }
  .running-popup .leaflet-popup-content-wrapper { border-left: 5px solid #00c46a; }
  .cycling-popup .leaflet-popup-content-wrapper { border-left: 5px solid #ffb545; }
</style>
"""


def _coords_from_result(result: object) -> tuple[float, float]:
    if not isinstance(result, dict):
        raise ValueError("No location returned")
    if "error" in result:
        raise ValueError(str(result["error"] or "Permission denied"))
    try:
        return (float(result["lat"]), float(result["lng"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed location: {result!r}") from exc


class BrowserGeolocation:
    """Asks the connected browser for its position once per request."""

    def __init__(self, client: Client, timeout: float = GEOLOCATION_TIMEOUT_SEC) -> None:
        self._client = client
        self._timeout = timeout

    def request(self, on_success: LocationCallback, on_failure: FailureCallback) -> None:
        background_tasks.create(
            self._locate(on_success, on_failure), name="mapty-geolocation"
        )

    async def _locate(self, on_success: LocationCallback, on_failure: FailureCallback) -> None:
        try:
            await self._client.connected(timeout=self._timeout)
            result = await self._client.run_javascript(_LOCATE_JS, timeout=self._timeout)
            coords = _coords_from_result(result)
        except TimeoutError:
            on_failure("Timed out waiting for the browser location")
            return
        except Exception as exc:
            logger.warning("Browser location failed: %s", exc)
            on_failure(str(exc) or "No location returned")
            return
        on_success(coords)


class WebWorkoutView:
    """Sidebar form and workout list rendered with NiceGUI elements."""

    def __init__(self, root: ui.element) -> None:
        self._root = root
        self.on_select: Any = None
        with root:
            with ui.card().classes("w-full mt-form") as self.form:
                with ui.grid(columns=2).classes("w-full gap-2"):
                    self.kind_select = ui.select(
                        {"running": "Running", "cycling": "Cycling"},
                        value="running",
                        label="Type",
                    )
                    self.distance_input = ui.number("Distance (km)", min=0)
                    self.duration_input = ui.number("Duration (min)", min=0)
                    self.cadence_input = ui.number("Cadence (step/min)", min=0)
                    self.elevation_input = ui.number("Elev Gain (m)")
                self.submit_btn = ui.button("OK").props("color=positive")
            self.entries = ui.column().classes("w-full gap-2")
        self.form.set_visibility(False)
        self.elevation_input.set_visibility(False)
        self._cards: list[ui.card] = []

    def read_form(self) -> WorkoutForm:
        return WorkoutForm(
            kind=str(self.kind_select.value),
            distance=self.distance_input.value,
            duration=self.duration_input.value,
            cadence=self.cadence_input.value,
            elevation=self.elevation_input.value,
        )

    def show_form(self) -> None:
        self.form.set_visibility(True)
        self.distance_input.run_method("focus")

    def hide_form(self) -> None:
        self.form.set_visibility(False)

    def show_kind_fields(self, kind: WorkoutKind) -> None:
        self.cadence_input.set_visibility(kind == "running")
        self.elevation_input.set_visibility(kind == "cycling")

    def reset_inputs(self) -> None:
        for field in (
            self.distance_input,
            self.duration_input,
            self.cadence_input,
            self.elevation_input,
        ):
            field.value = None

    def render_entry(self, workout: Workout) -> None:
        with self.entries:
            with ui.card().classes(
                f"w-full mt-workout mt-workout--{workout.type}"
            ) as card:
                ui.label(workout.description).classes("text-base font-semibold")
                with ui.row().classes("w-full gap-4"):
                    for detail in entry_details(workout):
                        ui.label(f"{detail.icon} {detail.value} {detail.unit}").classes("text-sm")
        card.props(f'data-id="{workout.id}"')
        card.on("click", lambda _, workout_id=workout.id: self._select(workout_id))
        # Newest entry sits right below the form.
        card.move(target_index=0)
        self._cards.append(card)

    def _select(self, workout_id: str) -> None:
        if self.on_select is not None:
            self.on_select(workout_id)

    def remove_entries(self) -> None:
        cards, self._cards = self._cards, []
        for card in cards:
            card.classes("mt-fade")
            with self._root:
                ui.timer(ENTRY_FADE_SEC, card.delete, once=True)

    def notify(self, message: str) -> None:
        with self._root:
            ui.notify(message, color="negative")


def _build_storage(config: AppConfig) -> KeyValueStorage | None:
    if config.storage == "file":
        return JsonFileStorage(config.resolved_data_path)
    if config.storage == "memory":
        return MemoryStorage()
    return None


def run_web_ui(config: AppConfig) -> int:
    shared_storage = _build_storage(config)
    logger.info("Serving Mapty on http://%s:%d (storage: %s)", config.host, config.port, config.storage)

    @ui.page("/")
    def index(client: Client) -> None:
        ui.add_head_html(_HEAD_HTML)
        storage = shared_storage if shared_storage is not None else MappingStorage(app.storage.user)
        geolocation: GeolocationProvider
        if config.location is not None:
            geolocation = FixedGeolocation(config.location)
        else:
            geolocation = BrowserGeolocation(client)

        with ui.row().classes("w-full h-screen no-wrap gap-0"):
            with ui.column().classes("w-[420px] h-full p-4 gap-3 mt-sidebar overflow-auto") as sidebar:
                ui.label("Mapty").classes("text-2xl font-bold")
                reset_btn = ui.button("Clear all").props("outline color=white")
            map_container = ui.element("div").classes("grow h-full")

        view = WebWorkoutView(sidebar)
        controller = SessionController(
            MapBridge(LeafletWidget(map_container)),
            geolocation,
            storage,
            view,
            zoom_level=config.zoom_level,
        )
        view.on_select = controller.select_entry

        def on_submit() -> None:
            controller.submit(view.read_form())

        def on_key(event: KeyEventArguments) -> None:
            if event.action.keydown and event.key.name == "Escape":
                controller.cancel()

        view.kind_select.on_value_change(lambda e: controller.change_kind(str(e.value)))
        view.submit_btn.on_click(on_submit)
        for field in (
            view.distance_input,
            view.duration_input,
            view.cadence_input,
            view.elevation_input,
        ):
            field.on("keydown.enter", on_submit)
        reset_btn.on_click(controller.clear_all)
        ui.keyboard(on_key=on_key)

        controller.start()

    ui.run(
        host=config.host,
        port=config.port,
        reload=False,
        title="Mapty",
        storage_secret=config.storage_secret,
    )
    return 0
