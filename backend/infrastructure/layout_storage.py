"""Durable key-value slots holding the persisted workspace layout."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger(__name__)

STORAGE_VERSION = 0


class LayoutStorage(Protocol):
    """Persistence contract for named layout slots."""

    def load(self, name: str) -> dict[str, Any] | None: ...

    def save(self, name: str, state: dict[str, Any]) -> None: ...

    def clear(self, name: str) -> None: ...


def _unwrap(name: str, payload: Any) -> dict[str, Any] | None:
    if not isinstance(payload, dict) or not isinstance(payload.get("state"), dict):
        logger.warning("layout_slot_malformed", slot=name)
        return None
    return payload["state"]


class InMemoryLayoutStorage:
    """Slot storage that lives only as long as the process."""

    def __init__(self) -> None:
        self._slots: dict[str, str] = {}

    def load(self, name: str) -> dict[str, Any] | None:
        raw = self._slots.get(name)
        if raw is None:
            return None
        return _unwrap(name, json.loads(raw))

    def save(self, name: str, state: dict[str, Any]) -> None:
        self._slots[name] = json.dumps({"state": state, "version": STORAGE_VERSION})

    def clear(self, name: str) -> None:
        self._slots.pop(name, None)


class JsonFileLayoutStorage:
    """Slot storage backed by one JSON document per slot under ``root``."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def _path(self, name: str) -> Path:
        safe_name = Path(name).name
        return self._root / f"{safe_name}.json"

    def load(self, name: str) -> dict[str, Any] | None:
        path = self._path(name)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("layout_slot_unreadable", slot=name, path=str(path), error=str(exc))
            return None
        return _unwrap(name, payload)

    def save(self, name: str, state: dict[str, Any]) -> None:
        path = self._path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(
            json.dumps({"state": state, "version": STORAGE_VERSION}, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        os.replace(tmp_path, path)

    def clear(self, name: str) -> None:
        path = self._path(name)
        if path.exists():
            path.unlink()
