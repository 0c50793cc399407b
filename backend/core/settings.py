from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _storage_root() -> Path:
    env_root = os.getenv("LAYOUT_STORAGE_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path(__file__).resolve().parents[2] / "storage"


@dataclass(frozen=True, slots=True)
class Settings:
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))
    default_tenant_id: str = "t-1"
    default_actor: str = "user-1"
    layout_storage_root: Path = field(default_factory=_storage_root)
    layout_storage_name: str = "erp-layout-storage"
    tab_activation_policy: str = "last"
    enforce_ledger_balance: bool = True
    log_level: str = "INFO"
    log_format: str = "console"


def load_settings() -> Settings:
    """Read the runtime settings from the environment."""

    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]

    policy = (os.getenv("TAB_ACTIVATION_POLICY") or "last").strip().lower()
    if policy not in {"last", "history"}:
        raise ValueError("TAB_ACTIVATION_POLICY must be 'last' or 'history'")

    return Settings(
        cors_origins=origins or list(DEFAULT_ORIGINS),
        default_tenant_id=os.getenv("ERP_DEFAULT_TENANT_ID") or "t-1",
        default_actor=os.getenv("ERP_DEFAULT_ACTOR") or "user-1",
        layout_storage_root=_storage_root(),
        layout_storage_name=os.getenv("LAYOUT_STORAGE_NAME") or "erp-layout-storage",
        tab_activation_policy=policy,
        enforce_ledger_balance=_flag(os.getenv("LEDGER_ENFORCE_BALANCE"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_format=(os.getenv("LOG_FORMAT") or "console").lower(),
    )
