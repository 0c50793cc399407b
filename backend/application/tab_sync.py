"""Keeps the active workspace tab in line with the current location."""
from __future__ import annotations

from typing import Iterable
from urllib.parse import urlsplit

import structlog

from backend.domain import Tab

from .layout import WorkspaceTabStore

logger = structlog.get_logger(__name__)


def _path_of(location: str) -> str:
    path = urlsplit(location).path or location
    return path.rstrip("/") or "/"


def match_tab(tabs: Iterable[Tab], location: str) -> Tab | None:
    """Return the tab owning ``location``.

    A tab owns a location when its href equals it or is a path prefix of it
    (``href + "/"``).  An exact match wins, then the longest href; ties keep
    sequence order.
    """

    path = _path_of(location)
    best: Tab | None = None
    for tab in tabs:
        href = _path_of(tab.href)
        if href == path:
            return tab
        if href != "/" and path.startswith(href + "/") and (best is None or len(href) > len(_path_of(best.href))):
            best = tab
    return best


class TabLocationSynchronizer:
    """Activates the tab matching each location change; never opens or closes tabs."""

    def __init__(self, store: WorkspaceTabStore) -> None:
        self._store = store

    def on_location_change(self, location: str) -> Tab | None:
        if not location or not self._store.tabs:
            return None
        tab = match_tab(self._store.tabs, location)
        if tab is None:
            return None
        if tab.id != self._store.active_tab_id:
            self._store.set_active_tab(tab.id)
            logger.debug("tab_synced", tab_id=tab.id, location=location)
        return tab
