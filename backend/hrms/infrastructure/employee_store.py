"""SQL Employee Store - EmployeeStore Protocol over an async SQLAlchemy session.

Invariants:
    - atomic() commits on success and rolls back on ANY exception
    - IntegrityError on a uniquely-constrained column surfaces as DuplicateKeyError
    - Other SQLAlchemy failures surface as StorageError
    - Reads never commit; create/save only flush (atomic() owns the commit)
    - Listing and search results are ordered by id

Design Decisions:
    - UPDATE ... RETURNING on the counter row: row lock on PostgreSQL serializes
      concurrent creates until commit
    - Search escapes LIKE wildcards so the keyword matches literally
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.core.domain_types import EmployeeId, EmployeeStatus, UniqueKey
from hrms.core.employee_code import next_sequence_after
from hrms.core.errors import DuplicateKeyError, StorageError
from hrms.models.employee import Employee
from hrms.models.employee_code_sequence import (
    EmployeeCodeSequence, SEQUENCE_ROW_ID,
)

logger = logging.getLogger(__name__)

# PostgreSQL: DETAIL:  Key (mobile_no)=(9000000001) already exists.
_PG_DETAIL = re.compile(r"Key \((\w+)\)=\((.*?)\) already exists")


def parse_unique_violation(message: str) -> tuple[UniqueKey, str | None] | None:
    """Identify the violated unique column (and value, when reported) from a driver message."""
    detail = _PG_DETAIL.search(message)
    if detail:
        try:
            return UniqueKey(detail.group(1)), detail.group(2)
        except ValueError:
            pass
    # Two creators seeding the counter row at once: retryable as a code collision
    if "employee_code_sequence" in message:
        return UniqueKey.EMPLOYEE_CODE, None
    for key in UniqueKey:
        # uq_employees_<col> (PostgreSQL) or employees.<col> (SQLite)
        if f"uq_employees_{key.value}" in message or f"employees.{key.value}" in message:
            return key, None
    return None


def _escape_like(keyword: str) -> str:
    return (
        keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )


class SqlEmployeeStore:
    """Employee persistence bound to one AsyncSession (one request)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def atomic(self) -> AsyncGenerator[None, None]:
        """One logical operation: commit on success, rollback on any error."""
        try:
            yield
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            violation = parse_unique_violation(str(e.orig))
            if violation is None:
                logger.error(f"Unmapped integrity error: {e}")
                raise StorageError("Integrity constraint violated", "commit") from e
            key, value = violation
            raise DuplicateKeyError(key.value, value) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Employee store error: {e}")
            raise StorageError("Database operation failed", "commit") from e
        except Exception:
            await self.db.rollback()
            raise

    # ─── Lookups ─────────────────────────────────────────────────

    async def get_by_id(self, employee_id: EmployeeId) -> Employee | None:
        return await self.db.get(Employee, employee_id)

    async def get_by_unique_key(self, key: UniqueKey, value: Any) -> Employee | None:
        result = await self.db.execute(
            select(Employee).where(getattr(Employee, key.value) == value),
        )
        return result.scalar_one_or_none()

    async def exists_by_unique_key(
        self, key: UniqueKey, value: Any, exclude_id: EmployeeId | None = None,
    ) -> bool:
        query = select(Employee.id).where(getattr(Employee, key.value) == value)
        if exclude_id is not None:
            query = query.where(Employee.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    async def exists_by_id(self, employee_id: EmployeeId) -> bool:
        result = await self.db.execute(
            select(Employee.id).where(Employee.id == employee_id),
        )
        return result.first() is not None

    # ─── Enumeration ─────────────────────────────────────────────

    async def list_all(self) -> list[Employee]:
        result = await self.db.execute(select(Employee).order_by(Employee.id))
        return list(result.scalars().all())

    async def list_by_status(self, status: EmployeeStatus) -> list[Employee]:
        result = await self.db.execute(
            select(Employee)
            .where(Employee.status == status.value)
            .order_by(Employee.id),
        )
        return list(result.scalars().all())

    async def search(self, keyword: str) -> list[Employee]:
        """Case-insensitive substring match on first name, last name, code."""
        pattern = f"%{_escape_like(keyword)}%"
        result = await self.db.execute(
            select(Employee)
            .where(
                or_(
                    Employee.first_name.ilike(pattern, escape="\\"),
                    Employee.last_name.ilike(pattern, escape="\\"),
                    Employee.employee_code.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Employee.id),
        )
        return list(result.scalars().all())

    # ─── Identity sequencing ─────────────────────────────────────

    async def max_assigned_id(self) -> int | None:
        result = await self.db.execute(select(func.max(Employee.id)))
        return result.scalar_one_or_none()

    async def next_code_sequence(self) -> int:
        """Atomically increment and return the code counter (seeded from max id)."""
        result = await self.db.execute(
            update(EmployeeCodeSequence)
            .where(EmployeeCodeSequence.id == SEQUENCE_ROW_ID)
            .values(last_value=EmployeeCodeSequence.last_value + 1)
            .returning(EmployeeCodeSequence.last_value),
        )
        value = result.scalar_one_or_none()
        if value is not None:
            return value

        seeded = next_sequence_after(await self.max_assigned_id())
        self.db.add(EmployeeCodeSequence(id=SEQUENCE_ROW_ID, last_value=seeded))
        await self.db.flush()
        logger.info(f"Employee code sequence seeded at {seeded}")
        return seeded

    # ─── Mutation ────────────────────────────────────────────────

    async def create(self, fields: dict) -> Employee:
        record = Employee(**fields)
        self.db.add(record)
        await self.db.flush()
        return record

    async def save(self, record: Employee) -> Employee:
        self.db.add(record)
        await self.db.flush()
        return record

    async def delete_by_id(self, employee_id: EmployeeId) -> bool:
        record = await self.db.get(Employee, employee_id)
        if record is None:
            return False
        await self.db.delete(record)
        await self.db.flush()
        return True
