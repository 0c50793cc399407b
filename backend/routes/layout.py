from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from backend.application import TabLocationSynchronizer, get_tab_store
from backend.domain import Tab

router = APIRouter(prefix="/layout", tags=["layout"])


def _parse_tab(payload: Any) -> Tab:
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="tab must be an object")
    try:
        return Tab.from_dict(payload)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("")
async def get_layout() -> dict:
    return get_tab_store().snapshot()


@router.post("/tabs")
async def add_tab(payload: dict[str, Any]) -> dict:
    store = get_tab_store()
    store.add_tab(_parse_tab(payload))
    return store.snapshot()


@router.put("/tabs")
async def reorder_tabs(payload: dict[str, Any]) -> dict:
    items = payload.get("tabs")
    if not isinstance(items, list):
        raise HTTPException(status_code=400, detail="tabs is required")
    store = get_tab_store()
    store.reorder_tabs([_parse_tab(item) for item in items])
    return store.snapshot()


@router.put("/tabs/active")
async def set_active_tab(payload: dict[str, Any]) -> dict:
    tab_id = payload.get("id")
    if not tab_id:
        raise HTTPException(status_code=400, detail="id is required")
    store = get_tab_store()
    store.set_active_tab(str(tab_id))
    return store.snapshot()


@router.post("/tabs/close-all")
async def close_all_tabs() -> dict:
    store = get_tab_store()
    store.close_all_tabs()
    return store.snapshot()


@router.post("/tabs/next")
async def next_tab() -> dict:
    store = get_tab_store()
    store.next_tab()
    return store.snapshot()


@router.post("/tabs/prev")
async def prev_tab() -> dict:
    store = get_tab_store()
    store.prev_tab()
    return store.snapshot()


@router.post("/tabs/{tab_id}/close-others")
async def close_other_tabs(tab_id: str) -> dict:
    store = get_tab_store()
    store.close_other_tabs(tab_id)
    return store.snapshot()


@router.delete("/tabs/{tab_id}")
async def remove_tab(tab_id: str) -> dict:
    store = get_tab_store()
    store.remove_tab(tab_id)
    return store.snapshot()


@router.put("/sidebar")
async def set_sidebar(payload: dict[str, Any]) -> dict:
    if not isinstance(payload.get("open"), bool):
        raise HTTPException(status_code=400, detail="open must be a boolean")
    store = get_tab_store()
    store.set_sidebar_open(payload["open"])
    return store.snapshot()


@router.post("/sidebar/toggle")
async def toggle_sidebar() -> dict:
    store = get_tab_store()
    store.toggle_sidebar()
    return store.snapshot()


@router.post("/location")
async def sync_location(payload: dict[str, Any]) -> dict:
    location = payload.get("location")
    if not location:
        raise HTTPException(status_code=400, detail="location is required")
    store = get_tab_store()
    matched = TabLocationSynchronizer(store).on_location_change(str(location))
    return {"matchedTabId": matched.id if matched else None, "layout": store.snapshot()}
