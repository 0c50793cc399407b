from __future__ import annotations

from fastapi import APIRouter

from backend.application import get_ledger_service

from .records import build_record_router

accounts_router = APIRouter(prefix="/finance/accounts", tags=["finance"])


@accounts_router.get("")
async def list_accounts() -> list[dict[str, str]]:
    service = get_ledger_service()
    return [
        {"code": account.code, "name": account.name, "type": account.type.value}
        for account in service.list_accounts()
    ]


ledgers_router = build_record_router("ledgers", "/finance/ledgers", "finance")
