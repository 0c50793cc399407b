from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, Request, Response

from backend.application import get_record_services

from .records import build_record_router

tenants_router = build_record_router("tenants", "/tenants", "system")
users_router = build_record_router("users", "/users", "system")
code_groups_router = build_record_router("code_groups", "/system/code-groups", "system")

codes_router = APIRouter(prefix="/system/codes", tags=["system"])


@codes_router.get("")
async def list_codes(request: Request, kind: str | None = Query(default=None, alias="type")) -> list[dict[str, Any]]:
    """List codes, or code groups when ``type=groups``."""

    services = get_record_services()
    if kind == "groups":
        return [group.to_json() for group in services.code_groups.list()]
    return [code.to_json() for code in services.codes.list(request.query_params)]


@codes_router.get("/{record_id}")
async def get_code(record_id: str) -> dict[str, Any]:
    return get_record_services().codes.get(record_id).to_json()


@codes_router.post("", status_code=201)
async def create_code(payload: dict[str, Any]) -> dict[str, Any]:
    services = get_record_services()
    body = dict(payload)
    if body.pop("isGroup", False):
        return services.code_groups.create(body).to_json()
    return services.codes.create(body).to_json()


@codes_router.put("/{record_id}")
async def update_code(record_id: str, payload: dict[str, Any]) -> dict[str, Any]:
    return get_record_services().codes.update(record_id, payload).to_json()


@codes_router.delete("/{record_id}", status_code=204)
async def delete_code(record_id: str) -> Response:
    get_record_services().codes.delete(record_id)
    return Response(status_code=204)
