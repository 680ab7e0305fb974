"""Route Dependencies - wires request-scoped services onto the DB session.

Invariants:
    - One SqlEmployeeStore per request, bound to the request's AsyncSession
    - The file store root comes from settings.upload_dir
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.config import get_settings
from hrms.infrastructure.database import get_db
from hrms.infrastructure.employee_store import SqlEmployeeStore
from hrms.infrastructure.file_storage import LocalFileStore
from hrms.services.document_associator import DocumentAssociator, UploadPolicy
from hrms.services.employee_lifecycle import EmployeeLifecycle


def get_file_store() -> LocalFileStore:
    return LocalFileStore(get_settings().upload_dir)


def get_upload_policy() -> UploadPolicy:
    settings = get_settings()
    return UploadPolicy(
        max_bytes=settings.max_upload_bytes,
        allowed_types=frozenset(t.lower() for t in settings.allowed_upload_types),
        allowed_extensions=frozenset(e.lower() for e in settings.allowed_upload_extensions),
    )


def get_employee_store(db: AsyncSession = Depends(get_db)) -> SqlEmployeeStore:
    return SqlEmployeeStore(db)


def get_lifecycle(
    store: SqlEmployeeStore = Depends(get_employee_store),
) -> EmployeeLifecycle:
    return EmployeeLifecycle(store)


def get_document_associator(
    store: SqlEmployeeStore = Depends(get_employee_store),
    files: LocalFileStore = Depends(get_file_store),
) -> DocumentAssociator:
    return DocumentAssociator(store, files)
