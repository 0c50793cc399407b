"""Application services for the record domains served by the mock store."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Mapping
from uuid import uuid4

import structlog
from pydantic import ValidationError as PydanticValidationError

from backend.core.errors import NotFound, ValidationError
from backend.core.schema import (
    CommonCode,
    CommonCodeGroup,
    Employee,
    Ledger,
    Project,
    Task,
    Tenant,
    User,
)
from backend.core.settings import Settings, load_settings
from backend.core.validation import validate_ledger_lines, validate_ledger_total
from backend.domain import AccountSubject, LedgerStatus, ProjectStatus, TaskStatus
from backend.infrastructure import InMemoryRecordRepository, RecordRepository, load_chart_of_accounts, seed_for
from backend.infrastructure.records import ModelT

logger = structlog.get_logger(__name__)

PROTECTED_FIELDS = ("id", "createdAt", "created_at", "updatedAt", "updated_at")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _query_value(value: Any) -> str:
    # booleans arrive from query strings in lower case
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _pydantic_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors(include_url=False)
    ]


class RecordService(Generic[ModelT]):
    """List/get/create/update/delete over one record collection.

    ``update`` is a shallow merge: top-level fields in the patch overwrite the
    stored record, nested values (``lines``, ``theme`` ...) are replaced
    wholesale, and the merged record is validated again before it is stored.
    """

    entity = "Record"
    id_prefix = "rec"
    filter_fields: tuple[str, ...] = ()
    tenant_scoped = True

    def __init__(self, repository: RecordRepository[ModelT], model: type[ModelT], settings: Settings) -> None:
        self._repository = repository
        self._model = model
        self._settings = settings

    # ------------------------------------------------------------------
    # hooks
    # ------------------------------------------------------------------
    def new_id(self) -> str:
        return f"{self.id_prefix}-{uuid4().hex[:12]}"

    def prepare_create(self, payload: dict[str, Any]) -> dict[str, Any]:
        return payload

    def prepare_update(self, current: ModelT, patch: dict[str, Any]) -> dict[str, Any]:
        return patch

    def check(self, record: ModelT, patch: Mapping[str, Any] | None = None) -> None:
        """Domain rules beyond the schema; ``patch`` is None on create."""

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def list(self, filters: Mapping[str, str] | None = None) -> list[ModelT]:
        records = self._repository.list()
        active = {key: value for key, value in (filters or {}).items() if key in self.filter_fields and value}
        if not active:
            return records
        matched: list[ModelT] = []
        for record in records:
            data = record.to_json()
            if all(_query_value(data.get(key)) == value for key, value in active.items()):
                matched.append(record)
        return matched

    def get(self, record_id: str) -> ModelT:
        record = self._repository.get(record_id)
        if record is None:
            raise NotFound(self.entity, record_id)
        return record

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------
    def _validate(self, data: dict[str, Any]) -> ModelT:
        try:
            return self._model.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(f"invalid {self.entity.lower()} payload", _pydantic_errors(exc)) from exc

    def create(self, payload: Mapping[str, Any]) -> ModelT:
        body = {key: value for key, value in payload.items() if key not in PROTECTED_FIELDS}
        record_id = self.new_id()
        now = _now()
        data: dict[str, Any] = {"id": record_id}
        if self.tenant_scoped:
            data["tenantId"] = self._settings.default_tenant_id
        data.update(body)
        data["id"] = record_id
        data = self.prepare_create(data)
        data["createdAt"] = now
        data["updatedAt"] = now

        record = self._validate(data)
        self.check(record)
        self._repository.add(record)
        logger.info("record_created", entity=self.entity, record_id=record.id)
        return record

    def update(self, record_id: str, payload: Mapping[str, Any]) -> ModelT:
        current = self.get(record_id)
        patch = {key: value for key, value in payload.items() if key not in PROTECTED_FIELDS}
        patch = self.prepare_update(current, patch)

        merged = current.to_json()
        merged.update(patch)
        merged["updatedAt"] = _now()

        record = self._validate(merged)
        self.check(record, patch)
        if not self._repository.replace(record):
            raise NotFound(self.entity, record_id)
        logger.info("record_updated", entity=self.entity, record_id=record_id, fields=sorted(patch))
        return record

    def delete(self, record_id: str) -> None:
        if not self._repository.remove(record_id):
            raise NotFound(self.entity, record_id)
        logger.info("record_deleted", entity=self.entity, record_id=record_id)

    def reset(self) -> None:
        self._repository.reset()


class LedgerService(RecordService[Ledger]):
    entity = "Ledger"
    id_prefix = "l"
    filter_fields = ("status", "type", "tenantId")

    def __init__(self, repository: RecordRepository[Ledger], settings: Settings, accounts: list[AccountSubject]) -> None:
        super().__init__(repository, Ledger, settings)
        self._accounts = {account.code: account for account in accounts}

    def list_accounts(self) -> list[AccountSubject]:
        return list(self._accounts.values())

    def _normalise_lines(self, ledger_id: str, lines: Any) -> Any:
        if not isinstance(lines, list):
            return lines
        normalised: list[Any] = []
        taken = {str(line["id"]) for line in lines if isinstance(line, dict) and line.get("id")}
        counter = 0
        for line in lines:
            if not isinstance(line, dict):
                normalised.append(line)
                continue
            item = dict(line)
            if not item.get("id"):
                counter += 1
                while f"{ledger_id}-{counter}" in taken:
                    counter += 1
                item["id"] = f"{ledger_id}-{counter}"
                taken.add(item["id"])
            if not item.get("accountName"):
                account = self._accounts.get(str(item.get("accountCode", "")))
                item["accountName"] = account.name if account else "Unknown"
            normalised.append(item)
        return normalised

    def prepare_create(self, payload: dict[str, Any]) -> dict[str, Any]:
        payload["status"] = LedgerStatus.DRAFT.value
        payload.setdefault("createdBy", self._settings.default_actor)
        if "lines" in payload:
            payload["lines"] = self._normalise_lines(payload["id"], payload["lines"])
        return payload

    def prepare_update(self, current: Ledger, patch: dict[str, Any]) -> dict[str, Any]:
        if "lines" in patch:
            patch["lines"] = self._normalise_lines(current.id, patch["lines"])
        return patch

    def check(self, record: Ledger, patch: Mapping[str, Any] | None = None) -> None:
        if not self._settings.enforce_ledger_balance:
            return
        if patch is None:
            validate_ledger_lines(record.lines, self._accounts)
            validate_ledger_total(record)
            return
        if "lines" in patch:
            validate_ledger_lines(record.lines, self._accounts)
            if "totalAmount" in patch:
                validate_ledger_total(record)


class EmployeeService(RecordService[Employee]):
    entity = "Employee"
    id_prefix = "emp"
    filter_fields = ("departmentId", "status")


class ProjectService(RecordService[Project]):
    entity = "Project"
    id_prefix = "p"
    filter_fields = ("status",)

    def prepare_create(self, payload: dict[str, Any]) -> dict[str, Any]:
        payload["status"] = ProjectStatus.PLANNING.value
        payload["progress"] = 0
        return payload


class TaskService(RecordService[Task]):
    entity = "Task"
    id_prefix = "task"
    filter_fields = ("projectId", "status")

    def prepare_create(self, payload: dict[str, Any]) -> dict[str, Any]:
        payload["status"] = TaskStatus.TODO.value
        return payload


class TenantService(RecordService[Tenant]):
    entity = "Tenant"
    id_prefix = "t"
    tenant_scoped = False


class UserService(RecordService[User]):
    entity = "User"
    id_prefix = "u"
    filter_fields = ("role", "status", "tenantId")
    tenant_scoped = False

    # Credentials belong to the authentication provider, never to this store.
    def prepare_create(self, payload: dict[str, Any]) -> dict[str, Any]:
        payload.pop("password", None)
        return payload

    def prepare_update(self, current: User, patch: dict[str, Any]) -> dict[str, Any]:
        patch.pop("password", None)
        return patch


class CodeGroupService(RecordService[CommonCodeGroup]):
    entity = "Code group"
    id_prefix = "grp"
    filter_fields = ("code", "isActive")

    def find_by_code(self, code: str) -> CommonCodeGroup | None:
        for group in self._repository.list():
            if group.code == code:
                return group
        return None

    def prepare_create(self, payload: dict[str, Any]) -> dict[str, Any]:
        payload["isActive"] = True
        payload["isSystem"] = False
        payload["sortOrder"] = len(self._repository.list()) + 1
        return payload

    def check(self, record: CommonCodeGroup, patch: Mapping[str, Any] | None = None) -> None:
        if patch is not None and "code" not in patch:
            return
        existing = self.find_by_code(record.code)
        if existing is not None and existing.id != record.id:
            raise ValidationError(f"code group {record.code!r} already exists")

    def delete(self, record_id: str) -> None:
        group = self.get(record_id)
        if group.is_system:
            raise ValidationError(f"system code group {group.code!r} cannot be deleted")
        super().delete(record_id)


class CodeService(RecordService[CommonCode]):
    entity = "Code"
    id_prefix = "code"
    filter_fields = ("groupCode", "groupId", "isActive")

    def __init__(self, repository: RecordRepository[CommonCode], settings: Settings, groups: CodeGroupService) -> None:
        super().__init__(repository, CommonCode, settings)
        self._groups = groups

    def _resolve_group(self, group_code: Any) -> CommonCodeGroup:
        group = self._groups.find_by_code(str(group_code)) if group_code else None
        if group is None:
            raise ValidationError(
                "unknown code group",
                [{"loc": ["groupCode"], "msg": f"no code group {group_code!r}"}],
            )
        return group

    def prepare_create(self, payload: dict[str, Any]) -> dict[str, Any]:
        group = self._resolve_group(payload.get("groupCode"))
        payload["groupId"] = group.id
        payload["isActive"] = True
        payload["sortOrder"] = sum(1 for code in self._repository.list() if code.group_code == group.code) + 1
        return payload

    def prepare_update(self, current: CommonCode, patch: dict[str, Any]) -> dict[str, Any]:
        if "groupCode" in patch or "groupId" in patch:
            group = self._resolve_group(patch.get("groupCode", current.group_code))
            patch["groupCode"] = group.code
            patch["groupId"] = group.id
        return patch


class RecordServices:
    """Every record service of the process, wired to in-memory repositories."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.ledgers = LedgerService(InMemoryRecordRepository(seed_for("ledgers")), settings, load_chart_of_accounts())
        self.employees = EmployeeService(InMemoryRecordRepository(seed_for("employees")), Employee, settings)
        self.projects = ProjectService(InMemoryRecordRepository(seed_for("projects")), Project, settings)
        self.tasks = TaskService(InMemoryRecordRepository(seed_for("tasks")), Task, settings)
        self.tenants = TenantService(InMemoryRecordRepository(seed_for("tenants")), Tenant, settings)
        self.users = UserService(InMemoryRecordRepository(seed_for("users")), User, settings)
        self.code_groups = CodeGroupService(
            InMemoryRecordRepository(seed_for("code_groups")), CommonCodeGroup, settings
        )
        self.codes = CodeService(InMemoryRecordRepository(seed_for("codes")), settings, self.code_groups)

    def by_name(self, name: str) -> RecordService[Any]:
        service = getattr(self, name, None)
        if not isinstance(service, RecordService):
            raise KeyError(name)
        return service

    def reset(self) -> None:
        for service in (
            self.ledgers,
            self.employees,
            self.projects,
            self.tasks,
            self.tenants,
            self.users,
            self.code_groups,
            self.codes,
        ):
            service.reset()


_services = RecordServices(load_settings())


def get_record_services() -> RecordServices:
    """Return the record services for the process."""

    return _services


def get_ledger_service() -> LedgerService:
    return _services.ledgers


def configure_record_services(settings: Settings) -> RecordServices:
    """Rebuild the services with ``settings``; the store restarts from its seed."""

    global _services
    _services = RecordServices(settings)
    return _services


def reset_record_state() -> None:
    """Reset the in-memory store from the current environment (used in tests)."""

    configure_record_services(load_settings())
