"""File Routes - upload, employee document upload, download and delete.

Tests:
    - Generic upload returns a category-relative path and size
    - Employee upload sets the slot and returns the updated employee
    - Disallowed type, empty and oversized files rejected with 400
    - Download returns stored bytes; traversal outside the root is rejected
    - Delete removes the file; deleting twice is 404
"""

from hrms.api.dependencies import get_upload_policy
from hrms.main import app
from hrms.services.document_associator import UploadPolicy

PDF = b"%PDF-1.4 upload body"


async def _employee(client, employee_json):
    res = await client.post("/api/v1/employees", json=employee_json(1))
    assert res.status_code == 201, res.text
    return res.json()


async def test_generic_upload(client):
    res = await client.post(
        "/api/v1/files/upload",
        files={"file": ("offer.pdf", PDF, "application/pdf")},
        data={"category": "offers"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["file_path"].startswith("offers/")
    assert body["file_name"] == "offer.pdf"
    assert body["file_size"] == len(PDF)


async def test_upload_rejects_disallowed_type(client):
    res = await client.post(
        "/api/v1/files/upload",
        files={"file": ("run.exe", b"MZ", "application/octet-stream")},
        data={"category": "misc"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "file"


async def test_upload_rejects_empty_file(client):
    res = await client.post(
        "/api/v1/files/upload",
        files={"file": ("empty.pdf", b"", "application/pdf")},
        data={"category": "misc"},
    )
    assert res.status_code == 400


async def test_employee_document_upload(client, employee_json):
    employee = await _employee(client, employee_json)
    res = await client.post(
        f"/api/v1/files/employees/{employee['id']}/upload",
        files={"file": ("aadhaar.pdf", PDF, "application/pdf")},
        data={"document_type": "Aadhaar"},
    )
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["document_type"] == "aadhaar"
    assert body["employee"]["aadhaar_document"] == body["file_path"]
    assert body["file_path"].startswith(f"employee-{employee['id']}/")


async def test_employee_upload_invalid_document_type(client, employee_json):
    employee = await _employee(client, employee_json)
    res = await client.post(
        f"/api/v1/files/employees/{employee['id']}/upload",
        files={"file": ("a.pdf", PDF, "application/pdf")},
        data={"document_type": "passport"},
    )
    assert res.status_code == 400


async def test_employee_upload_unknown_employee(client):
    res = await client.post(
        "/api/v1/files/employees/999/upload",
        files={"file": ("a.pdf", PDF, "application/pdf")},
        data={"document_type": "pan"},
    )
    assert res.status_code == 404


async def test_download_and_delete(client):
    uploaded = (await client.post(
        "/api/v1/files/upload",
        files={"file": ("photo.png", b"\x89PNG data", "image/png")},
        data={"category": "photos"},
    )).json()
    path = uploaded["file_path"]

    download = await client.get("/api/v1/files/download", params={"file_path": path})
    assert download.status_code == 200
    assert download.content == b"\x89PNG data"

    deleted = await client.delete("/api/v1/files", params={"file_path": path})
    assert deleted.json() == {"message": "File deleted successfully"}

    again = await client.delete("/api/v1/files", params={"file_path": path})
    assert again.status_code == 404
    missing = await client.get("/api/v1/files/download", params={"file_path": path})
    assert missing.status_code == 404


async def test_download_outside_root_rejected(client):
    res = await client.get(
        "/api/v1/files/download", params={"file_path": "../../etc/passwd"},
    )
    assert res.status_code == 400


async def test_upload_over_limit_rejected(client, file_store):
    app.dependency_overrides[get_upload_policy] = lambda: UploadPolicy(
        max_bytes=16,
        allowed_types=frozenset({"application/pdf"}),
        allowed_extensions=frozenset({".pdf"}),
    )
    res = await client.post(
        "/api/v1/files/upload",
        files={"file": ("big.pdf", b"x" * 4096, "application/pdf")},
        data={"category": "misc"},
    )
    assert res.status_code == 400
    assert "maximum limit" in res.json()["error"]["details"][0]["message"]
    assert not file_store.root.exists() or not any(
        p.is_file() for p in file_store.root.rglob("*")
    )
