"""Domain entities for the persisted workspace layout."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Tab:
    """An open workspace document, identified by the route it points at."""

    id: str
    title: str
    href: str
    icon: str | None = None
    is_pinned: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "title": self.title, "href": self.href}
        if self.icon is not None:
            data["icon"] = self.icon
        if self.is_pinned:
            data["isPinned"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tab":
        if not isinstance(data, dict):
            raise ValueError("tab must be a mapping")
        href = data.get("href") or data.get("url")
        if not data.get("id") or not href:
            raise ValueError("tab requires id and href")
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or data["id"]),
            href=str(href),
            icon=data.get("icon"),
            is_pinned=bool(data.get("isPinned", False)),
        )


@dataclass(slots=True)
class LayoutState:
    """Sidebar flag plus the ordered tab sequence and the active tab id."""

    sidebar_open: bool = True
    tabs: list[Tab] = field(default_factory=list)
    active_tab_id: str | None = None

    def find(self, tab_id: str) -> Tab | None:
        for tab in self.tabs:
            if tab.id == tab_id:
                return tab
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "sidebarOpen": self.sidebar_open,
            "tabs": [tab.to_dict() for tab in self.tabs],
            "activeTabId": self.active_tab_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayoutState":
        tabs: list[Tab] = []
        seen: set[str] = set()
        for item in data.get("tabs") or []:
            tab = Tab.from_dict(item)
            if tab.id in seen:
                continue
            seen.add(tab.id)
            tabs.append(tab)
        active = data.get("activeTabId")
        if active is not None and active not in seen:
            active = None
        return cls(
            sidebar_open=bool(data.get("sidebarOpen", True)),
            tabs=tabs,
            active_tab_id=active,
        )
