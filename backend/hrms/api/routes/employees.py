"""Employee Routes - HTTP surface of the employee lifecycle.

Invariants:
    - Every handler delegates to EmployeeLifecycle or DocumentAssociator
    - Domain failures propagate as HrmsError (mapped by api/error_handlers.py)
    - Static paths (/active, /search, /status, /code) are registered before /{employee_id}
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from hrms.api.dependencies import get_document_associator, get_lifecycle
from hrms.core.domain_types import EmployeeId, EmployeeStatus
from hrms.schemas.employee import (
    DocumentPatch, EmployeeCreate, EmployeeListResponse, EmployeeResponse,
    EmployeeUpdate,
)
from hrms.services.document_associator import DocumentAssociator
from hrms.services.employee_lifecycle import EmployeeLifecycle

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/employees", tags=["employees"])


@router.post(
    "", response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: EmployeeCreate,
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    """Create an employee; the EMPnnnn code is assigned here."""
    record = await lifecycle.create(body.model_dump())
    return EmployeeResponse.model_validate(record)


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    status_filter: EmployeeStatus | None = Query(None, alias="status"),
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    if status_filter is None:
        records = await lifecycle.list_all()
    else:
        records = await lifecycle.list_by_status(status_filter)
    return EmployeeListResponse.of(records)


@router.get("/active", response_model=EmployeeListResponse)
async def list_active_employees(
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    return EmployeeListResponse.of(await lifecycle.list_active())


@router.get("/status/{employee_status}", response_model=EmployeeListResponse)
async def list_employees_by_status(
    employee_status: EmployeeStatus,
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    return EmployeeListResponse.of(await lifecycle.list_by_status(employee_status))


@router.get("/search", response_model=EmployeeListResponse)
async def search_employees(
    keyword: str = Query(..., min_length=1, max_length=100),
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    """Case-insensitive match on first name, last name or employee code."""
    return EmployeeListResponse.of(await lifecycle.search(keyword))


@router.get("/code/{employee_code}", response_model=EmployeeResponse)
async def get_employee_by_code(
    employee_code: str,
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    record = await lifecycle.get_by_code(employee_code)
    return EmployeeResponse.model_validate(record)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    record = await lifecycle.get_by_id(EmployeeId(employee_id))
    return EmployeeResponse.model_validate(record)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    """Replace all mutable fields. A past leaving date forces RESIGNED."""
    record = await lifecycle.update(EmployeeId(employee_id), body.model_dump())
    return EmployeeResponse.model_validate(record)


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: int,
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    """Soft delete: status RESIGNED, date_of_leaving today."""
    record = await lifecycle.soft_delete(EmployeeId(employee_id))
    return {
        "message": "Employee marked as resigned successfully",
        "employee": EmployeeResponse.model_validate(record).model_dump(mode="json"),
    }


@router.delete("/{employee_id}/permanent")
async def hard_delete_employee(
    employee_id: int,
    lifecycle: EmployeeLifecycle = Depends(get_lifecycle),
):
    """Permanent deletion. Stored documents are not removed."""
    await lifecycle.hard_delete(EmployeeId(employee_id))
    return {"message": "Employee deleted permanently"}


@router.patch("/{employee_id}/documents", response_model=EmployeeResponse)
async def patch_employee_documents(
    employee_id: int,
    body: DocumentPatch,
    associator: DocumentAssociator = Depends(get_document_associator),
):
    """Point document slots at already-stored files. Omitted slots are untouched."""
    record = await associator.associate_documents(
        EmployeeId(employee_id), **body.model_dump(),
    )
    return EmployeeResponse.model_validate(record)
