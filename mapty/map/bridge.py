"""Adapter between workouts and the interactive map surface."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from mapty.workout.entries import workout_icon
from mapty.workout.model import Coords, Workout

logger = logging.getLogger(__name__)

FOCUS_PAN_DURATION_SEC = 1.0

ClickHandler = Callable[[Coords], None]


class MapNotReadyError(RuntimeError):
    """Raised when a marker operation runs before the map exists."""


@dataclass(frozen=True)
class PopupOptions:
    max_width: int = 250
    min_width: int = 100
    auto_close: bool = False
    close_on_click: bool = False
    class_name: str = ""


class MapWidget(Protocol):
    """Capabilities consumed from the rendering widget."""

    def create(self, center: Coords, zoom: int) -> None: ...

    def on_click(self, handler: ClickHandler) -> None: ...

    def add_marker(self, coords: Coords, content: str, options: PopupOptions) -> None: ...

    def set_view(
        self, coords: Coords, zoom: int, animate: bool, pan_duration: float
    ) -> None: ...

    def remove(self) -> None: ...


def popup_content(workout: Workout) -> str:
    return f"{workout_icon(workout)} {workout.description}"


def popup_options(workout: Workout) -> PopupOptions:
    return PopupOptions(class_name=f"{workout.type}-popup")


class MapBridge:
    def __init__(self, widget: MapWidget) -> None:
        self._widget = widget
        self._ready = False
        self._click_handler: ClickHandler | None = None

    @property
    def is_ready(self) -> bool:
        return self._ready

    def initialize(self, center: Coords, zoom_level: int) -> None:
        if self._ready:
            self.reset()
        self._widget.create(center, zoom_level)
        self._widget.on_click(self._dispatch_click)
        self._ready = True
        logger.info("Map initialized at %.5f, %.5f (zoom %d)", center[0], center[1], zoom_level)

    def on_user_click(self, handler: ClickHandler) -> None:
        self._click_handler = handler

    def _dispatch_click(self, coords: Coords) -> None:
        if self._click_handler is not None:
            self._click_handler(coords)

    def _require_ready(self) -> None:
        if not self._ready:
            raise MapNotReadyError("Map is not initialized")

    def place_marker(self, workout: Workout) -> None:
        self._require_ready()
        self._widget.add_marker(workout.coords, popup_content(workout), popup_options(workout))

    def focus(self, coords: Coords, zoom_level: int) -> None:
        self._require_ready()
        self._widget.set_view(
            coords, zoom_level, animate=True, pan_duration=FOCUS_PAN_DURATION_SEC
        )

    def reset(self) -> None:
        if not self._ready:
            return
        self._widget.remove()
        self._ready = False
