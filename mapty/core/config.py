"""Runtime configuration for the Mapty web app."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from mapty.workout.model import Coords

StorageBackend = Literal["browser", "file", "memory"]

DEFAULT_ZOOM_LEVEL = 15


def _default_data_path() -> Path:
    return Path.home() / ".mapty" / "storage.json"


@dataclass(frozen=True)
class AppConfig:
    host: str = "127.0.0.1"
    port: int = 8089
    zoom_level: int = DEFAULT_ZOOM_LEVEL
    storage: StorageBackend = "browser"
    data_path: Path | None = None
    location: Coords | None = None
    storage_secret: str = "mapty-local-secret"
    verbose: bool = False

    @property
    def resolved_data_path(self) -> Path:
        return self.data_path or _default_data_path()


def parse_location(raw: str) -> Coords:
    """Parse ``"LAT,LNG"`` into a coordinate pair."""
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Location must be 'LAT,LNG', got '{raw}'")
    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise ValueError(f"Location must be numeric, got '{raw}'") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise ValueError(f"Location must be finite, got '{raw}'")
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        raise ValueError(f"Location out of range: '{raw}'")
    return (lat, lng)
