from __future__ import annotations

from .records import build_record_router

employees_router = build_record_router("employees", "/hrm/employees", "hrm")
