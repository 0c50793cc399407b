"""Workspace tab store: open documents, the active tab and the sidebar flag."""
from __future__ import annotations

from typing import Any, Iterable

import structlog

from backend.core.errors import ValidationError
from backend.core.settings import Settings
from backend.domain import LayoutState, Tab
from backend.infrastructure import InMemoryLayoutStorage, JsonFileLayoutStorage, LayoutStorage

logger = structlog.get_logger(__name__)

ACTIVATION_POLICIES = ("last", "history")


class WorkspaceTabStore:
    """Tracks open tabs independently of the current location.

    Every mutation is written through to ``storage`` under ``storage_name``;
    construction rehydrates from the same slot.  When the active tab goes
    away its replacement is picked by ``policy``: ``last`` takes the last
    remaining tab, ``history`` the most recently active remaining tab.
    """

    def __init__(
        self,
        storage: LayoutStorage,
        *,
        storage_name: str = "erp-layout-storage",
        policy: str = "last",
    ) -> None:
        if policy not in ACTIVATION_POLICIES:
            raise ValueError(f"unknown activation policy {policy!r}")
        self._storage = storage
        self._storage_name = storage_name
        self._policy = policy
        self._history: list[str] = []
        self._state = self._rehydrate()

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _rehydrate(self) -> LayoutState:
        stored = self._storage.load(self._storage_name)
        if stored is None:
            return LayoutState()
        try:
            state = LayoutState.from_dict(stored)
        except (TypeError, ValueError) as exc:
            logger.warning("layout_state_discarded", slot=self._storage_name, error=str(exc))
            return LayoutState()
        if state.active_tab_id:
            self._history.append(state.active_tab_id)
        return state

    def _persist(self) -> None:
        self._storage.save(self._storage_name, self._state.to_dict())

    def _activate(self, tab_id: str | None) -> None:
        self._state.active_tab_id = tab_id
        if tab_id is None:
            return
        if tab_id in self._history:
            self._history.remove(tab_id)
        self._history.append(tab_id)

    def _replacement(self) -> str | None:
        remaining = {tab.id for tab in self._state.tabs}
        if self._policy == "history":
            for tab_id in reversed(self._history):
                if tab_id in remaining:
                    return tab_id
        return self._state.tabs[-1].id if self._state.tabs else None

    def _forget(self, tab_ids: Iterable[str]) -> None:
        gone = set(tab_ids)
        self._history = [tab_id for tab_id in self._history if tab_id not in gone]

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    @property
    def state(self) -> LayoutState:
        return self._state

    @property
    def tabs(self) -> list[Tab]:
        return list(self._state.tabs)

    @property
    def active_tab_id(self) -> str | None:
        return self._state.active_tab_id

    @property
    def sidebar_open(self) -> bool:
        return self._state.sidebar_open

    def snapshot(self) -> dict[str, Any]:
        return self._state.to_dict()

    # ------------------------------------------------------------------
    # tab operations
    # ------------------------------------------------------------------
    def add_tab(self, tab: Tab) -> None:
        if self._state.find(tab.id) is None:
            self._state.tabs.append(tab)
            logger.info("tab_added", tab_id=tab.id, href=tab.href)
        self._activate(tab.id)
        self._persist()

    def remove_tab(self, tab_id: str) -> None:
        was_active = self._state.active_tab_id == tab_id
        self._state.tabs = [tab for tab in self._state.tabs if tab.id != tab_id]
        self._forget([tab_id])
        if was_active:
            self._activate(self._replacement())
        logger.info("tab_removed", tab_id=tab_id, active_tab_id=self._state.active_tab_id)
        self._persist()

    def set_active_tab(self, tab_id: str) -> bool:
        """Activate ``tab_id``; unknown ids leave the state untouched."""

        if self._state.find(tab_id) is None:
            logger.info("tab_activation_ignored", tab_id=tab_id)
            return False
        if self._state.active_tab_id != tab_id:
            self._activate(tab_id)
            self._persist()
        return True

    def reorder_tabs(self, tabs: list[Tab]) -> None:
        ids = [tab.id for tab in tabs]
        if len(ids) != len(set(ids)):
            raise ValidationError("tab ids must be unique", [{"loc": ["tabs"], "msg": "duplicate tab id"}])
        dropped = {tab.id for tab in self._state.tabs} - set(ids)
        self._state.tabs = list(tabs)
        self._forget(dropped)
        if self._state.active_tab_id not in set(ids):
            self._activate(self._replacement())
        self._persist()

    def close_all_tabs(self) -> None:
        self._state.tabs = []
        self._state.active_tab_id = None
        self._history = []
        self._persist()

    def close_other_tabs(self, tab_id: str) -> None:
        target = self._state.find(tab_id)
        self._state.tabs = [target] if target else []
        self._history = []
        self._activate(target.id if target else None)
        self._persist()

    def _step(self, offset: int) -> None:
        tabs = self._state.tabs
        if not tabs:
            return
        ids = [tab.id for tab in tabs]
        current = ids.index(self._state.active_tab_id) if self._state.active_tab_id in ids else 0
        self._activate(ids[(current + offset) % len(ids)])
        self._persist()

    def next_tab(self) -> None:
        self._step(1)

    def prev_tab(self) -> None:
        self._step(-1)

    # ------------------------------------------------------------------
    # sidebar
    # ------------------------------------------------------------------
    def toggle_sidebar(self) -> None:
        self._state.sidebar_open = not self._state.sidebar_open
        self._persist()

    def set_sidebar_open(self, is_open: bool) -> None:
        self._state.sidebar_open = is_open
        self._persist()


def build_tab_store(settings: Settings) -> WorkspaceTabStore:
    storage = JsonFileLayoutStorage(settings.layout_storage_root)
    return WorkspaceTabStore(
        storage,
        storage_name=settings.layout_storage_name,
        policy=settings.tab_activation_policy,
    )


_store = WorkspaceTabStore(InMemoryLayoutStorage())


def get_tab_store() -> WorkspaceTabStore:
    """Return the workspace tab store for the process."""

    return _store


def configure_tab_store(store: WorkspaceTabStore) -> WorkspaceTabStore:
    global _store
    _store = store
    return _store


def reset_layout_state() -> None:
    """Swap in a fresh, non-durable store (used in tests)."""

    configure_tab_store(WorkspaceTabStore(InMemoryLayoutStorage()))
