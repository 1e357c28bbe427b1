"""Key-value string storage backends for the persisted workout snapshot."""

from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


def _default_storage_path() -> Path:
    return Path.home() / ".mapty" / "storage.json"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MappingStorage:
    """Storage over any mutable mapping, e.g. NiceGUI ``app.storage.user``."""

    def __init__(self, mapping: MutableMapping[str, Any]) -> None:
        self._mapping = mapping

    def get(self, key: str) -> str | None:
        value = self._mapping.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self._mapping[key] = value

    def remove(self, key: str) -> None:
        self._mapping.pop(key, None)


class MemoryStorage(MappingStorage):
    def __init__(self) -> None:
        super().__init__({})


class JsonFileStorage:
    """All keys kept in a single JSON object file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _default_storage_path()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return {str(k): v for k, v in payload.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=True, indent=2), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key not in data:
            return
        del data[key]
        self._write(data)
