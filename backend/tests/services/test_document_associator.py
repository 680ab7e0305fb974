"""Document Associator - slot patching, upload policy and orphan cleanup.

Tests:
    - Only supplied slots change; an empty patch changes nothing
    - Upload stores under employee-<id> and sets the matching slot
    - Policy rejects empty, oversized and disallowed uploads before any IO
    - Unknown employee and unknown document type rejected without writing a file
    - A file written for a failed association is removed
"""

import pytest

from hrms.core.domain_types import EmployeeId
from hrms.core.errors import NotFoundError, StorageError, ValidationError

PDF = b"%PDF-1.4 test document"


@pytest.fixture
async def employee_id(lifecycle, employee_data):
    record = await lifecycle.create(employee_data(1))
    return EmployeeId(record.id)


def _stored_files(file_store):
    if not file_store.root.exists():
        return []
    return [p for p in file_store.root.rglob("*") if p.is_file()]


async def test_patch_only_touches_supplied_slots(associator, employee_id):
    await associator.associate_documents(
        employee_id, aadhaar_document="employee-1/a.pdf", photo="employee-1/p.png",
    )
    record = await associator.associate_documents(
        employee_id, pan_document="employee-1/pan.pdf",
    )
    assert record.aadhaar_document == "employee-1/a.pdf"
    assert record.pan_document == "employee-1/pan.pdf"
    assert record.photo == "employee-1/p.png"
    assert record.other_documents is None


async def test_empty_patch_changes_nothing(associator, employee_id):
    await associator.associate_documents(employee_id, photo="employee-1/p.png")
    record = await associator.associate_documents(employee_id)
    assert record.photo == "employee-1/p.png"


async def test_patch_unknown_employee(associator):
    with pytest.raises(NotFoundError):
        await associator.associate_documents(EmployeeId(404), photo="x.png")


async def test_upload_sets_slot(associator, employee_id, upload_policy, file_store):
    record, path = await associator.attach_uploaded_document(
        employee_id, "PAN", PDF, "pan card.pdf", "application/pdf", upload_policy,
    )
    assert path.startswith(f"employee-{employee_id}/")
    assert path.endswith(".pdf")
    assert record.pan_document == path
    assert file_store.resolve(path).read_bytes() == PDF


@pytest.mark.parametrize("data,filename,content_type,message", [
    (b"", "a.pdf", "application/pdf", "File is empty"),
    (b"x" * 2048, "a.pdf", "application/pdf", "maximum limit"),
    (PDF, "a.exe", "application/pdf", "Invalid file type"),
    (PDF, "a.pdf", "application/zip", "Invalid file type"),
])
async def test_policy_rejects_before_io(
    associator, employee_id, upload_policy, file_store,
    data, filename, content_type, message,
):
    with pytest.raises(ValidationError) as exc_info:
        await associator.attach_uploaded_document(
            employee_id, "aadhaar", data, filename, content_type, upload_policy,
        )
    assert message in exc_info.value.errors[0].message
    assert _stored_files(file_store) == []


async def test_invalid_document_type(associator, employee_id, upload_policy, file_store):
    with pytest.raises(ValidationError) as exc_info:
        await associator.attach_uploaded_document(
            employee_id, "passport", PDF, "a.pdf", "application/pdf", upload_policy,
        )
    assert exc_info.value.errors[0].field == "document_type"
    assert _stored_files(file_store) == []


async def test_upload_for_unknown_employee_writes_nothing(
    associator, upload_policy, file_store,
):
    with pytest.raises(NotFoundError):
        await associator.attach_uploaded_document(
            EmployeeId(404), "photo", PDF, "a.pdf", "application/pdf", upload_policy,
        )
    assert _stored_files(file_store) == []


async def test_failed_association_removes_file(
    associator, employee_id, upload_policy, file_store, monkeypatch,
):
    async def failing_associate(*args, **kwargs):
        raise StorageError("connection lost", "commit")

    monkeypatch.setattr(associator, "associate_documents", failing_associate)

    with pytest.raises(StorageError):
        await associator.attach_uploaded_document(
            employee_id, "other", PDF, "a.pdf", "application/pdf", upload_policy,
        )
    assert _stored_files(file_store) == []
