from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, model_validator
from pydantic.alias_generators import to_camel

from backend.domain import (
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


def _coerce_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if len(raw) > 10 and raw[10] in "T ":
            return raw[:10]
        return raw
    return value


def _amount_to_json(value: Decimal) -> Any:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


DateValue = Annotated[date, BeforeValidator(_coerce_date)]
# blank form values mean "no date"
OptionalDate = Annotated[date | None, BeforeValidator(_coerce_date)]
Amount = Annotated[Decimal, PlainSerializer(_amount_to_json, return_type=Any, when_used="json")]


class ApiModel(BaseModel):
    """Wire models use camelCase keys and reject unknown fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class RecordModel(ApiModel):
    id: str
    created_at: datetime
    updated_at: datetime


class LedgerLine(ApiModel):
    id: str
    account_code: str
    account_name: str = ""
    description: str = ""
    debit_amount: Amount = Field(default=Decimal("0"), ge=0)
    credit_amount: Amount = Field(default=Decimal("0"), ge=0)


class Ledger(RecordModel):
    tenant_id: str
    transaction_date: DateValue
    description: str = ""
    type: LedgerType = LedgerType.EXPENSE
    status: LedgerStatus = LedgerStatus.DRAFT
    total_amount: Amount = Field(default=Decimal("0"), ge=0)
    lines: list[LedgerLine] = Field(default_factory=list)
    created_by: str | None = None


class Employee(RecordModel):
    tenant_id: str
    user_id: str | None = None
    name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone_number: str | None = None
    department_id: str | None = None
    department_name: str | None = None
    position: str | None = None
    grade: EmployeeGrade = EmployeeGrade.L1
    employment_type: EmploymentType = EmploymentType.REGULAR
    join_date: DateValue
    resignation_date: OptionalDate = None
    status: UserStatus = UserStatus.ACTIVE


class Project(RecordModel):
    tenant_id: str
    name: str = Field(min_length=1)
    description: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    manager_id: str | None = None
    manager_name: str | None = None
    budget: Amount = Field(default=Decimal("0"), ge=0)
    spent_amount: Amount | None = None
    progress: int = Field(default=0, ge=0, le=100)
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_period(self) -> "Project":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate must not precede startDate")
        return self


class Task(RecordModel):
    tenant_id: str
    project_id: str | None = None
    title: str = Field(min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    assignee_name: str | None = None
    due_date: OptionalDate = None
    estimated_hours: Amount = Field(default=Decimal("0"), ge=0)


class TenantTheme(ApiModel):
    primary_color: str = "#000000"
    secondary_color: str | None = None
    logo_url: str | None = None
    dark_mode: bool = False


class TenantConfig(ApiModel):
    max_users: int | None = Field(default=100, ge=0)
    features: list[str] = Field(default_factory=list)
    security_level: Literal["HIGH", "MEDIUM", "LOW"] | None = None


class Tenant(RecordModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    type: TenantType = TenantType.PUBLIC
    domain: str | None = None
    theme: TenantTheme = Field(default_factory=TenantTheme)
    config: TenantConfig = Field(default_factory=TenantConfig)
    is_active: bool = True


class User(RecordModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str = Field(min_length=1)
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.PENDING
    tenant_id: str | None = None
    department_id: str | None = None
    phone_number: str | None = None
    avatar_url: str | None = None
    last_login_at: datetime | None = None


class CommonCodeGroup(RecordModel):
    tenant_id: str
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    is_active: bool = True
    is_system: bool = False
    sort_order: int = 0


class CommonCode(RecordModel):
    tenant_id: str
    group_id: str | None = None
    group_code: str = Field(min_length=1)
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    value: str | None = None
    is_active: bool = True
    sort_order: int = 0
    parent_id: str | None = None
