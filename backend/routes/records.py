from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request, Response

from backend.application import get_record_services


def build_record_router(service_name: str, prefix: str, tag: str) -> APIRouter:
    """Uniform list/get/create/update/delete routes for one record collection."""

    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("")
    async def list_records(request: Request) -> list[dict[str, Any]]:
        service = get_record_services().by_name(service_name)
        return [record.to_json() for record in service.list(request.query_params)]

    @router.get("/{record_id}")
    async def get_record(record_id: str) -> dict[str, Any]:
        service = get_record_services().by_name(service_name)
        return service.get(record_id).to_json()

    @router.post("", status_code=201)
    async def create_record(payload: dict[str, Any]) -> dict[str, Any]:
        service = get_record_services().by_name(service_name)
        return service.create(payload).to_json()

    @router.put("/{record_id}")
    async def update_record(record_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        service = get_record_services().by_name(service_name)
        return service.update(record_id, payload).to_json()

    @router.delete("/{record_id}", status_code=204)
    async def delete_record(record_id: str) -> Response:
        service = get_record_services().by_name(service_name)
        service.delete(record_id)
        return Response(status_code=204)

    return router
