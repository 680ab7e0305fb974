"""File Routes - upload, download and deletion of employee documents.

Invariants:
    - Uploads are checked against UploadPolicy before anything is written
    - At most max_bytes + 1 bytes of an upload are read into memory
    - Download and delete resolve paths inside the upload root only
    - Employee uploads go through DocumentAssociator (store, then associate)
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import FileResponse

from hrms.api.dependencies import (
    get_document_associator, get_file_store, get_upload_policy,
)
from hrms.core.domain_types import EmployeeId
from hrms.core.errors import NotFoundError
from hrms.infrastructure.file_storage import LocalFileStore
from hrms.schemas.document import DocumentUploadResponse, FileUploadResponse
from hrms.schemas.employee import EmployeeResponse
from hrms.services.document_associator import DocumentAssociator, UploadPolicy

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/files", tags=["files"])


@router.post("/upload", response_model=FileUploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    category: str = Form(...),
    files: LocalFileStore = Depends(get_file_store),
    policy: UploadPolicy = Depends(get_upload_policy),
):
    """Store a document without associating it; the caller patches the record later."""
    data = await file.read(policy.max_bytes + 1)
    policy.check(data, file.filename, file.content_type)
    path = files.store(data, category, file.filename)
    return FileUploadResponse(
        file_path=path, file_name=file.filename, file_size=len(data),
    )


@router.post(
    "/employees/{employee_id}/upload", response_model=DocumentUploadResponse,
)
async def upload_employee_document(
    employee_id: int,
    file: UploadFile = File(...),
    document_type: str = Form(...),
    associator: DocumentAssociator = Depends(get_document_associator),
    policy: UploadPolicy = Depends(get_upload_policy),
):
    """Store the document and point the slot named by document_type at it."""
    data = await file.read(policy.max_bytes + 1)
    record, path = await associator.attach_uploaded_document(
        EmployeeId(employee_id), document_type, data,
        file.filename, file.content_type, policy,
    )
    return DocumentUploadResponse(
        file_path=path,
        file_name=file.filename,
        file_size=len(data),
        document_type=document_type.strip().lower(),
        employee=EmployeeResponse.model_validate(record),
    )


@router.get("/download")
async def download_file(
    file_path: str = Query(..., min_length=1),
    files: LocalFileStore = Depends(get_file_store),
):
    target = files.resolve(file_path)
    if not target.is_file():
        raise NotFoundError("File", file_path)
    return FileResponse(target, filename=target.name)


@router.delete("")
async def delete_file(
    file_path: str = Query(..., min_length=1),
    files: LocalFileStore = Depends(get_file_store),
):
    """Delete a stored document. Records still referencing it are not changed."""
    if not files.delete(file_path):
        raise NotFoundError("File", file_path)
    return {"message": "File deleted successfully"}
