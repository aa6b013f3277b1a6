from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import yaml

from dimmer.core.errors import ValidationError


class PreferencesStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryPreferencesStore:
    def __init__(self, values: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})
        self._lock = threading.Lock()
        self.writes = 0

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value
            self.writes += 1

    def remove(self, key: str) -> None:
        with self._lock:
            if key in self._values:
                del self._values[key]
                self.writes += 1

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._values)


class YamlPreferencesStore:
    """
    Flat key/value preferences persisted as a YAML mapping.

    Every write rewrites the whole file through a temp file + rename, so a reader
    never sees a half-written document.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        data = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError(
                code="prefs.invalid",
                message="Preferences file must contain a mapping",
                data={"path": str(self._path)},
            )
        return data

    def _dump(self, data: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(yaml.safe_dump(data, sort_keys=True, allow_unicode=True), encoding="utf-8")
        os.replace(tmp, self._path)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._dump(data)
