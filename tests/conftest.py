from __future__ import annotations

from typing import Any

import pytest

from mapty.map.bridge import ClickHandler, MapBridge, PopupOptions
from mapty.ui.controller import SessionController
from mapty.workout.model import Coords, Workout, WorkoutKind
from mapty.workout.storage import MemoryStorage


class FakeMapWidget:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.markers: list[tuple[Coords, str, PopupOptions]] = []
        self.views: list[tuple[Coords, int, bool, float]] = []
        self.created_at: list[tuple[Coords, int]] = []
        self.click_handler: ClickHandler | None = None
        self.alive = False

    def create(self, center: Coords, zoom: int) -> None:
        self.created_at.append((center, zoom))
        self.alive = True

    def on_click(self, handler: ClickHandler) -> None:
        self.click_handler = handler

    def add_marker(self, coords: Coords, content: str, options: PopupOptions) -> None:
        assert self.alive
        self.markers.append((coords, content, options))

    def set_view(self, coords: Coords, zoom: int, animate: bool, pan_duration: float) -> None:
        assert self.alive
        self.views.append((coords, zoom, animate, pan_duration))

    def remove(self) -> None:
        self.alive = False
        self.markers = []

    def click(self, coords: Coords) -> None:
        assert self.click_handler is not None
        self.click_handler(coords)


class FakeGeolocation:
    """Holds requests until the test answers them."""

    def __init__(self) -> None:
        self.pending: list[tuple[Any, Any]] = []

    def request(self, on_success: Any, on_failure: Any) -> None:
        self.pending.append((on_success, on_failure))

    def succeed(self, coords: Coords, index: int = -1) -> None:
        self.pending[index][0](coords)

    def fail(self, reason: str = "denied", index: int = -1) -> None:
        self.pending[index][1](reason)


class FakeView:
    def __init__(self) -> None:
        self.form_visible = False
        self.kind: WorkoutKind = "running"
        self.entries: list[Workout] = []
        self.notices: list[str] = []
        self.resets = 0
        self.removals = 0

    def show_form(self) -> None:
        self.form_visible = True

    def hide_form(self) -> None:
        self.form_visible = False

    def show_kind_fields(self, kind: WorkoutKind) -> None:
        self.kind = kind

    def reset_inputs(self) -> None:
        self.resets += 1

    def render_entry(self, workout: Workout) -> None:
        self.entries.append(workout)

    def remove_entries(self) -> None:
        self.removals += 1
        self.entries = []

    def notify(self, message: str) -> None:
        self.notices.append(message)


@pytest.fixture
def widget() -> FakeMapWidget:
    return FakeMapWidget()


@pytest.fixture
def geolocation() -> FakeGeolocation:
    return FakeGeolocation()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def view() -> FakeView:
    return FakeView()


@pytest.fixture
def controller(
    widget: FakeMapWidget,
    geolocation: FakeGeolocation,
    storage: MemoryStorage,
    view: FakeView,
) -> SessionController:
    return SessionController(MapBridge(widget), geolocation, storage, view)
