"""Demo data for the in-memory store, loaded from ``backend/config``."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from backend.core.schema import (
    CommonCode,
    CommonCodeGroup,
    Employee,
    Ledger,
    Project,
    RecordModel,
    Task,
    Tenant,
    User,
)
from backend.domain import AccountSubject, AccountType

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


def _load_yaml(name: str) -> dict[str, Any]:
    path = CONFIG_DIR / name
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fp:
        return yaml.safe_load(fp) or {}


@lru_cache(maxsize=1)
def _seed_document() -> dict[str, Any]:
    return _load_yaml("seed_data.yaml")


def _records(key: str, model: type[RecordModel]) -> list[RecordModel]:
    return [model.model_validate(item) for item in _seed_document().get(key) or []]


def load_chart_of_accounts() -> list[AccountSubject]:
    document = _load_yaml("chart_of_accounts.yaml")
    return [
        AccountSubject(code=str(item["code"]), name=str(item["name"]), type=AccountType(item["type"]))
        for item in document.get("accounts") or []
    ]


SEEDS: dict[str, tuple[str, type[RecordModel]]] = {
    "ledgers": ("ledgers", Ledger),
    "employees": ("employees", Employee),
    "projects": ("projects", Project),
    "tasks": ("tasks", Task),
    "tenants": ("tenants", Tenant),
    "users": ("users", User),
    "code_groups": ("code_groups", CommonCodeGroup),
    "codes": ("codes", CommonCode),
}


def seed_for(collection: str):
    """Return a callable producing fresh seed records for ``collection``."""

    key, model = SEEDS[collection]
    return lambda: _records(key, model)
