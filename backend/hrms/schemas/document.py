"""Document Schemas - responses for file upload endpoints."""

from pydantic import BaseModel

from hrms.schemas.employee import EmployeeResponse


class FileUploadResponse(BaseModel):
    file_path: str
    file_name: str | None
    file_size: int


class DocumentUploadResponse(FileUploadResponse):
    document_type: str
    employee: EmployeeResponse
