from __future__ import annotations

from .records import build_record_router

projects_router = build_record_router("projects", "/pms/projects", "pms")
tasks_router = build_record_router("tasks", "/pms/tasks", "pms")
