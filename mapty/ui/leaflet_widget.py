"""NiceGUI Leaflet map used as the Map Bridge rendering surface."""

from __future__ import annotations

from nicegui import background_tasks, ui
from nicegui.events import GenericEventArguments

from mapty.map.bridge import ClickHandler, PopupOptions
from mapty.workout.model import Coords


class LeafletWidget:
    def __init__(self, container: ui.element) -> None:
        self._container = container
        self._map: ui.leaflet | None = None
        self._click_handler: ClickHandler | None = None

    def _require_map(self) -> ui.leaflet:
        if self._map is None:
            raise RuntimeError("Leaflet map has not been created")
        return self._map

    def create(self, center: Coords, zoom: int) -> None:
        with self._container:
            self._map = ui.leaflet(center=center, zoom=zoom).classes("w-full h-full")
        self._map.on("map-click", self._on_map_click)

    def _on_map_click(self, event: GenericEventArguments) -> None:
        latlng = event.args.get("latlng") or {}
        if self._click_handler is None or "lat" not in latlng:
            return
        self._click_handler((float(latlng["lat"]), float(latlng["lng"])))

    def on_click(self, handler: ClickHandler) -> None:
        self._click_handler = handler

    def add_marker(self, coords: Coords, content: str, options: PopupOptions) -> None:
        leaflet = self._require_map()
        marker = leaflet.marker(latlng=coords)
        popup_options = {
            "maxWidth": options.max_width,
            "minWidth": options.min_width,
            "autoClose": options.auto_close,
            "closeOnClick": options.close_on_click,
            "className": options.class_name,
        }

        async def _open_popup() -> None:
            # Layer methods only reach the browser once Leaflet is mounted.
            await leaflet.initialized()
            marker.run_method("bindPopup", content, popup_options)
            marker.run_method("openPopup")

        background_tasks.create(_open_popup(), name="mapty-marker-popup")

    def set_view(self, coords: Coords, zoom: int, animate: bool, pan_duration: float) -> None:
        leaflet = self._require_map()
        leaflet.run_map_method(
            "setView",
            [coords[0], coords[1]],
            zoom,
            {"animate": animate, "pan": {"duration": pan_duration}},
        )

    def remove(self) -> None:
        if self._map is None:
            return
        self._map.delete()
        self._map = None
