"""Employee Lifecycle - create, update, lookup, search and retirement of employee records.

Invariants:
    - Field validation and uniqueness run before anything is persisted
    - employee_code assigned once, on create, and never written again
    - create defaults status to ACTIVE and never applies the leaving-date rule
    - update forces RESIGNED when date_of_leaving <= today, else honors the submitted status
    - soft_delete sets RESIGNED + date_of_leaving = today; hard_delete removes the row
    - Each mutating operation is one store.atomic() transaction

Design Decisions:
    - `today` injected as a callable: lifecycle rules stay testable without freezing time
    - Employee-code collisions at commit are retried (bounded); other duplicates are not
"""

import logging
from datetime import date
from enum import Enum
from typing import Any, Callable, Mapping

from hrms.core.domain_types import EmployeeId, EmployeeStatus, UniqueKey
from hrms.core.enforce_lifecycle import soft_delete_changes, update_changes
from hrms.core.errors import DuplicateKeyError, NotFoundError, ValidationError
from hrms.core.repository_protocols import EmployeeLike, EmployeeStore
from hrms.core.validate_fields import (
    normalize_employee_fields, validate_employee_fields,
)
from hrms.services.employee_code_generator import generate_employee_code
from hrms.services.uniqueness_validator import ensure_unique

logger = logging.getLogger(__name__)


def _column_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def apply_changes(record: EmployeeLike, changes: Mapping[str, Any]) -> None:
    for name, value in changes.items():
        setattr(record, name, _column_value(value))


class EmployeeLifecycle:
    """Owns status-transition rules and every record-level operation."""

    CODE_ASSIGNMENT_ATTEMPTS = 3

    def __init__(
        self, store: EmployeeStore, today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.today = today

    def _validated(self, data: Mapping[str, Any]) -> dict:
        fields = normalize_employee_fields(data)
        errors = validate_employee_fields(fields, self.today())
        if errors:
            raise ValidationError(errors)
        return fields

    # ─── Create / Update ─────────────────────────────────────────

    async def create(self, data: Mapping[str, Any]) -> EmployeeLike:
        """Validate, check uniqueness, assign the next code, persist."""
        fields = self._validated(data)
        attempt = 1
        while True:
            try:
                async with self.store.atomic():
                    await ensure_unique(self.store, fields)
                    code = await generate_employee_code(self.store)
                    record = await self.store.create({
                        **{k: _column_value(v) for k, v in fields.items()},
                        "employee_code": code,
                    })
            except DuplicateKeyError as e:
                if (
                    e.field != UniqueKey.EMPLOYEE_CODE.value
                    or attempt >= self.CODE_ASSIGNMENT_ATTEMPTS
                ):
                    raise
                logger.warning(
                    f"Employee code collision, retrying ({attempt})",
                    extra={"field": e.field},
                )
                attempt += 1
                continue
            logger.info(
                f"Employee created: {code}",
                extra={"employee_id": record.id, "employee_code": code},
            )
            return record

    async def update(
        self, employee_id: EmployeeId, data: Mapping[str, Any],
    ) -> EmployeeLike:
        """Overwrite every mutable field; leaving date on/before today forces RESIGNED."""
        fields = self._validated(data)
        async with self.store.atomic():
            record = await self._get_or_raise(employee_id)
            await ensure_unique(self.store, fields, exclude_id=employee_id)
            apply_changes(record, update_changes(fields, self.today()))
            record = await self.store.save(record)
        logger.info(
            f"Employee updated: {record.employee_code}",
            extra={"employee_id": employee_id, "employee_code": record.employee_code},
        )
        return record

    # ─── Lookups ─────────────────────────────────────────────────

    async def _get_or_raise(self, employee_id: EmployeeId) -> EmployeeLike:
        record = await self.store.get_by_id(employee_id)
        if record is None:
            raise NotFoundError("Employee", employee_id)
        return record

    async def get_by_id(self, employee_id: EmployeeId) -> EmployeeLike:
        return await self._get_or_raise(employee_id)

    async def get_by_code(self, employee_code: str) -> EmployeeLike:
        record = await self.store.get_by_unique_key(
            UniqueKey.EMPLOYEE_CODE, employee_code,
        )
        if record is None:
            raise NotFoundError("Employee", employee_code)
        return record

    async def list_all(self) -> list[EmployeeLike]:
        return await self.store.list_all()

    async def list_active(self) -> list[EmployeeLike]:
        return await self.store.list_by_status(EmployeeStatus.ACTIVE)

    async def list_by_status(self, status: EmployeeStatus) -> list[EmployeeLike]:
        return await self.store.list_by_status(status)

    async def search(self, keyword: str) -> list[EmployeeLike]:
        """Name/code substring search, case-insensitive. Empty list when nothing matches."""
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValidationError.single("keyword", "Search keyword is required")
        return await self.store.search(keyword)

    # ─── Retirement ──────────────────────────────────────────────

    async def soft_delete(self, employee_id: EmployeeId) -> EmployeeLike:
        """Mark RESIGNED as of today. Safe to call repeatedly."""
        async with self.store.atomic():
            record = await self._get_or_raise(employee_id)
            apply_changes(record, soft_delete_changes(self.today()))
            record = await self.store.save(record)
        logger.info(
            "Employee marked as resigned",
            extra={"employee_id": employee_id, "employee_code": record.employee_code},
        )
        return record

    async def hard_delete(self, employee_id: EmployeeId) -> None:
        """Permanently remove the record. Irreversible."""
        async with self.store.atomic():
            if not await self.store.exists_by_id(employee_id):
                raise NotFoundError("Employee", employee_id)
            await self.store.delete_by_id(employee_id)
        logger.info("Employee deleted permanently", extra={"employee_id": employee_id})
