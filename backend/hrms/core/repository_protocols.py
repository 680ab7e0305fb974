"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - Record store and file store accessed only through these Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE their results are never async themselves
    - atomic() marks the transaction boundary of one logical operation
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, AsyncContextManager, Protocol

from hrms.core.domain_types import EmployeeId, EmployeeStatus, UniqueKey


class EmployeeLike(Protocol):
    """Structural contract for employee records passed between services and routes.

    Avoids coupling services to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: int
    employee_code: str
    first_name: str
    last_name: str
    mobile_no: str
    email: str | None
    aadhaar_no: str
    pan_no: str
    account_no: str
    ifsc_code: str
    bank_name: str
    uan_no: str | None
    pf_no: str | None
    qualification: str | None
    dob: date
    address: str
    status: str
    date_of_joining: date
    date_of_leaving: date | None
    aadhaar_document: str | None
    pan_document: str | None
    photo: str | None
    other_documents: str | None
    created_at: datetime
    updated_at: datetime


class EmployeeStore(Protocol):
    """Contract for employee persistence - implemented by shell."""
    def atomic(self) -> AsyncContextManager[None]: ...
    async def get_by_id(self, employee_id: EmployeeId) -> EmployeeLike | None: ...
    async def get_by_unique_key(
        self, key: UniqueKey, value: Any,
    ) -> EmployeeLike | None: ...
    async def exists_by_unique_key(
        self, key: UniqueKey, value: Any, exclude_id: EmployeeId | None = None,
    ) -> bool: ...
    async def exists_by_id(self, employee_id: EmployeeId) -> bool: ...
    async def list_all(self) -> list[EmployeeLike]: ...
    async def list_by_status(self, status: EmployeeStatus) -> list[EmployeeLike]: ...
    async def search(self, keyword: str) -> list[EmployeeLike]: ...
    async def max_assigned_id(self) -> int | None: ...
    async def next_code_sequence(self) -> int: ...
    async def create(self, fields: dict) -> EmployeeLike: ...
    async def save(self, record: EmployeeLike) -> EmployeeLike: ...
    async def delete_by_id(self, employee_id: EmployeeId) -> bool: ...


class FileStore(Protocol):
    """Contract for uploaded-document storage - implemented by shell."""
    def store(
        self, data: bytes, category: str, filename: str | None = None,
    ) -> str: ...
    def delete(self, path: str) -> bool: ...
    def resolve(self, path: str) -> Path: ...
