"""Document Associator - sets document-reference slots on an employee record.

Invariants:
    - Only slots given a non-blank value are overwritten; the others are untouched
    - A slot is never cleared through this path
    - attach_uploaded_document validates the upload before any IO
    - A file written for a failed association is deleted best-effort; the original error wins
    - Previously referenced files are left in place when a slot is overwritten

Design Decisions:
    - Two-phase (store file, then update record) with compensating delete: the file
      store has no transaction to join
"""

import logging
from dataclasses import dataclass

from hrms.core.domain_types import DocumentSlot, EmployeeId
from hrms.core.enforce_lifecycle import document_changes
from hrms.core.errors import HrmsError, NotFoundError, ValidationError
from hrms.core.repository_protocols import EmployeeLike, EmployeeStore, FileStore
from hrms.infrastructure.file_storage import file_extension

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadPolicy:
    """Size and type limits applied to every uploaded document."""
    max_bytes: int
    allowed_types: frozenset[str]
    allowed_extensions: frozenset[str]

    def check(self, data: bytes, filename: str | None, content_type: str | None) -> None:
        """Raise ValidationError when the upload is empty, too large or of a disallowed type."""
        if not data:
            raise ValidationError.single("file", "File is empty")
        if len(data) > self.max_bytes:
            limit_mb = self.max_bytes / (1024 * 1024)
            raise ValidationError.single(
                "file", f"File size exceeds the maximum limit of {limit_mb:g}MB",
            )
        # MIME type AND extension must both be allowed
        mime_ok = (content_type or "").lower() in self.allowed_types
        ext_ok = file_extension(filename) in self.allowed_extensions
        if not (mime_ok and ext_ok):
            raise ValidationError.single(
                "file",
                "Invalid file type. Only PDF, DOC, DOCX, JPG, and PNG files are allowed.",
            )


class DocumentAssociator:
    """Patches document slots, optionally storing the uploaded file first."""

    def __init__(self, store: EmployeeStore, files: FileStore | None = None):
        self.store = store
        self.files = files

    async def associate_documents(
        self,
        employee_id: EmployeeId,
        aadhaar_document: str | None = None,
        pan_document: str | None = None,
        photo: str | None = None,
        other_documents: str | None = None,
    ) -> EmployeeLike:
        """Overwrite the supplied slots and persist."""
        changes = document_changes(
            aadhaar_document=aadhaar_document,
            pan_document=pan_document,
            photo=photo,
            other_documents=other_documents,
        )
        async with self.store.atomic():
            record = await self.store.get_by_id(employee_id)
            if record is None:
                raise NotFoundError("Employee", employee_id)
            for slot, value in changes.items():
                setattr(record, slot.value, value)
            record = await self.store.save(record)
        logger.info(
            f"Documents updated: {', '.join(s.value for s in changes) or 'none'}",
            extra={"employee_id": employee_id},
        )
        return record

    async def attach_uploaded_document(
        self,
        employee_id: EmployeeId,
        document_type: str,
        data: bytes,
        filename: str | None,
        content_type: str | None,
        policy: UploadPolicy,
    ) -> tuple[EmployeeLike, str]:
        """Store the upload under employee-<id>, then point the matching slot at it."""
        if self.files is None:
            raise RuntimeError("DocumentAssociator has no file store")
        try:
            slot = DocumentSlot.from_document_type(document_type)
        except ValueError:
            raise ValidationError.single("document_type", "Invalid document type") from None
        policy.check(data, filename, content_type)
        if not await self.store.exists_by_id(employee_id):
            raise NotFoundError("Employee", employee_id)

        path = self.files.store(data, f"employee-{employee_id}", filename)
        try:
            record = await self.associate_documents(employee_id, **{slot.value: path})
        except HrmsError:
            self._discard_orphan(path, employee_id)
            raise
        logger.info(
            f"Document attached: {path}",
            extra={"employee_id": employee_id, "document_type": slot.name.lower()},
        )
        return record, path

    def _discard_orphan(self, path: str, employee_id: EmployeeId) -> None:
        try:
            self.files.delete(path)
        except HrmsError as e:
            logger.error(
                f"Orphaned document left on disk: {path} ({e.message})",
                extra={"employee_id": employee_id},
            )
