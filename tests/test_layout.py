import json

import pytest

from backend.application import WorkspaceTabStore
from backend.core.errors import ValidationError
from backend.domain import Tab
from backend.infrastructure import InMemoryLayoutStorage, JsonFileLayoutStorage


def _tab(tab_id: str, href: str | None = None) -> Tab:
    return Tab(id=tab_id, title=tab_id.upper(), href=href or f"/{tab_id}")


@pytest.fixture()
def store():
    return WorkspaceTabStore(InMemoryLayoutStorage())


def test_default_state(store):
    assert store.snapshot() == {"sidebarOpen": True, "tabs": [], "activeTabId": None}


def test_add_tab_twice_keeps_one_entry(store):
    store.add_tab(_tab("a"))
    store.add_tab(_tab("b"))
    store.add_tab(_tab("a"))
    assert [tab.id for tab in store.tabs] == ["a", "b"]
    assert store.active_tab_id == "a"


def test_remove_only_active_tab_clears_state(store):
    store.add_tab(_tab("a"))
    store.remove_tab("a")
    assert store.tabs == []
    assert store.active_tab_id is None


def test_remove_active_tab_activates_last_remaining(store):
    for tab_id in ("a", "b", "c"):
        store.add_tab(_tab(tab_id))
    store.set_active_tab("a")
    store.remove_tab("a")
    assert store.active_tab_id == "c"


def test_remove_inactive_tab_keeps_active(store):
    for tab_id in ("a", "b", "c"):
        store.add_tab(_tab(tab_id))
    store.remove_tab("a")
    assert store.active_tab_id == "c"
    assert [tab.id for tab in store.tabs] == ["b", "c"]


def test_history_policy_returns_to_previous_active():
    store = WorkspaceTabStore(InMemoryLayoutStorage(), policy="history")
    for tab_id in ("a", "b", "c"):
        store.add_tab(_tab(tab_id))
    store.set_active_tab("a")
    store.set_active_tab("b")
    store.remove_tab("b")
    assert store.active_tab_id == "a"


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        WorkspaceTabStore(InMemoryLayoutStorage(), policy="random")


def test_set_active_tab_ignores_unknown_ids(store):
    store.add_tab(_tab("a"))
    assert store.set_active_tab("missing") is False
    assert store.active_tab_id == "a"


def test_close_other_tabs(store):
    for tab_id in ("a", "b", "c"):
        store.add_tab(_tab(tab_id))
    store.close_other_tabs("b")
    assert [tab.id for tab in store.tabs] == ["b"]
    assert store.active_tab_id == "b"

    store.close_other_tabs("missing")
    assert store.tabs == []
    assert store.active_tab_id is None


def test_close_all_tabs(store):
    store.add_tab(_tab("a"))
    store.add_tab(_tab("b"))
    store.close_all_tabs()
    assert store.snapshot()["tabs"] == []
    assert store.active_tab_id is None


def test_reorder_tabs(store):
    for tab_id in ("a", "b", "c"):
        store.add_tab(_tab(tab_id))
    store.reorder_tabs([_tab("c"), _tab("a"), _tab("b")])
    assert [tab.id for tab in store.tabs] == ["c", "a", "b"]
    assert store.active_tab_id == "c"

    store.reorder_tabs([_tab("a"), _tab("b")])
    assert store.active_tab_id == "b"

    with pytest.raises(ValidationError):
        store.reorder_tabs([_tab("a"), _tab("a")])


def test_next_and_prev_wrap_around(store):
    for tab_id in ("a", "b", "c"):
        store.add_tab(_tab(tab_id))
    store.next_tab()
    assert store.active_tab_id == "a"
    store.prev_tab()
    assert store.active_tab_id == "c"
    store.prev_tab()
    assert store.active_tab_id == "b"


def test_sidebar_flag(store):
    store.toggle_sidebar()
    assert store.sidebar_open is False
    store.set_sidebar_open(True)
    assert store.sidebar_open is True


def test_state_survives_restart(tmp_path):
    storage = JsonFileLayoutStorage(tmp_path)
    first = WorkspaceTabStore(storage, storage_name="erp-layout-storage")
    first.add_tab(Tab(id="ledgers", title="전표 관리", href="/finance/ledgers", icon="receipt", is_pinned=True))
    first.add_tab(_tab("tasks", "/pms/tasks"))
    first.set_active_tab("ledgers")
    first.toggle_sidebar()

    stored = json.loads((tmp_path / "erp-layout-storage.json").read_text(encoding="utf-8"))
    assert stored["state"]["activeTabId"] == "ledgers"
    assert stored["state"]["tabs"][0]["isPinned"] is True

    second = WorkspaceTabStore(JsonFileLayoutStorage(tmp_path), storage_name="erp-layout-storage")
    assert second.snapshot() == first.snapshot()
    assert second.sidebar_open is False


def test_unreadable_slot_falls_back_to_default(tmp_path):
    (tmp_path / "erp-layout-storage.json").write_text("{not json", encoding="utf-8")
    store = WorkspaceTabStore(JsonFileLayoutStorage(tmp_path))
    assert store.snapshot() == {"sidebarOpen": True, "tabs": [], "activeTabId": None}


def test_rehydrate_drops_dangling_active_id(tmp_path):
    state = {"sidebarOpen": True, "tabs": [{"id": "a", "title": "A", "url": "/a"}], "activeTabId": "gone"}
    (tmp_path / "erp-layout-storage.json").write_text(json.dumps({"state": state, "version": 0}), encoding="utf-8")
    store = WorkspaceTabStore(JsonFileLayoutStorage(tmp_path))
    assert store.tabs[0].href == "/a"
    assert store.active_tab_id is None


def test_layout_api_round_trip(client, storage_root):
    response = client.post("/api/layout/tabs", json={"id": "projects", "title": "프로젝트", "url": "/pms/projects"})
    assert response.status_code == 200
    client.post("/api/layout/tabs", json={"id": "ledgers", "title": "전표", "href": "/finance/ledgers"})

    state = client.get("/api/layout").json()
    assert state["activeTabId"] == "ledgers"
    assert [tab["href"] for tab in state["tabs"]] == ["/pms/projects", "/finance/ledgers"]

    synced = client.post("/api/layout/location", json={"location": "/pms/projects/42"}).json()
    assert synced["matchedTabId"] == "projects"
    assert synced["layout"]["activeTabId"] == "projects"

    state = client.post("/api/layout/tabs/ledgers/close-others").json()
    assert [tab["id"] for tab in state["tabs"]] == ["ledgers"]

    state = client.delete("/api/layout/tabs/ledgers").json()
    assert state == {"sidebarOpen": True, "tabs": [], "activeTabId": None}

    assert (storage_root / "erp-layout-storage.json").exists()


def test_layout_api_rejects_bad_input(client):
    assert client.post("/api/layout/tabs", json={"title": "no id"}).status_code == 400
    assert client.put("/api/layout/sidebar", json={"open": "yes"}).status_code == 400
    assert client.post("/api/layout/location", json={}).status_code == 400
    duplicate = client.put("/api/layout/tabs", json={"tabs": [{"id": "a", "href": "/a"}, {"id": "a", "href": "/a"}]})
    assert duplicate.status_code == 400


def test_layout_rehydrates_across_app_restarts(client, storage_root):
    from fastapi.testclient import TestClient

    from backend.app import create_app

    client.post("/api/layout/tabs", json={"id": "tasks", "title": "태스크", "href": "/pms/tasks"})
    client.post("/api/layout/sidebar/toggle")

    with TestClient(create_app()) as restarted:
        state = restarted.get("/api/layout").json()
    assert state["activeTabId"] == "tasks"
    assert state["sidebarOpen"] is False
