"""Domain layer definitions."""

from .layout import LayoutState, Tab
from .records import (
    AccountSubject,
    AccountType,
    EmployeeGrade,
    EmploymentType,
    LedgerStatus,
    LedgerType,
    Priority,
    ProjectStatus,
    TaskStatus,
    TenantType,
    UserRole,
    UserStatus,
)

__all__ = [
    "AccountSubject",
    "AccountType",
    "EmployeeGrade",
    "EmploymentType",
    "LayoutState",
    "LedgerStatus",
    "LedgerType",
    "Priority",
    "ProjectStatus",
    "Tab",
    "TaskStatus",
    "TenantType",
    "UserRole",
    "UserStatus",
]
