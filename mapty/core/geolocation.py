"""Location providers used to center the map on startup."""

from __future__ import annotations

from typing import Callable, Protocol

from mapty.workout.model import Coords

LocationCallback = Callable[[Coords], None]
FailureCallback = Callable[[str], None]


class GeolocationProvider(Protocol):
    def request(self, on_success: LocationCallback, on_failure: FailureCallback) -> None: ...


class FixedGeolocation:
    def __init__(self, coords: Coords) -> None:
        self._coords = coords

    def request(self, on_success: LocationCallback, on_failure: FailureCallback) -> None:
        on_success(self._coords)


class UnavailableGeolocation:
    def __init__(self, reason: str = "Geolocation is not available") -> None:
        self._reason = reason

    def request(self, on_success: LocationCallback, on_failure: FailureCallback) -> None:
        on_failure(self._reason)
