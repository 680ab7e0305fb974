"""Service test fixtures - async DB, employee store, services + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_file_store overridden to a per-test temporary upload root
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for service and route tests
      (PostgreSQL row locking on the code counter is not exercised here)
    - Services get a fixed `today` so lifecycle rules are deterministic
"""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from hrms.api.dependencies import get_file_store
from hrms.db.base import Base
from hrms.infrastructure.database import get_db, DatabaseSessionManager
from hrms.infrastructure.employee_store import SqlEmployeeStore
from hrms.infrastructure.file_storage import LocalFileStore
from hrms.services.document_associator import DocumentAssociator, UploadPolicy
from hrms.services.employee_lifecycle import EmployeeLifecycle
import hrms.infrastructure.database as db_module
import hrms.models  # noqa: F401
from hrms.main import app

TODAY = date(2024, 6, 15)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlEmployeeStore(test_db)


@pytest.fixture
def lifecycle(store):
    return EmployeeLifecycle(store, today=lambda: TODAY)


@pytest.fixture
def file_store(tmp_path):
    return LocalFileStore(tmp_path / "uploads")


@pytest.fixture
def associator(store, file_store):
    return DocumentAssociator(store, file_store)


@pytest.fixture
def upload_policy():
    return UploadPolicy(
        max_bytes=1024,
        allowed_types=frozenset({"application/pdf", "image/png"}),
        allowed_extensions=frozenset({".pdf", ".png"}),
    )


@pytest.fixture
def employee_data():
    """Factory for valid employee input; n varies every unique key."""
    def _make(n: int = 1, **overrides) -> dict:
        data = {
            "first_name": "Asha",
            "last_name": f"Verma{chr(ord('a') + n)}",
            "mobile_no": f"98765432{n:02d}",
            "email": f"emp{n}@example.com",
            "aadhaar_no": f"1234567890{n:02d}",
            "pan_no": f"ABCDE{n:04d}F",
            "account_no": f"0011223344{n:02d}",
            "ifsc_code": "SBIN0001234",
            "bank_name": "State Bank",
            "uan_no": None,
            "pf_no": None,
            "qualification": "B.Com",
            "dob": date(1990, 1, 1),
            "address": "12 MG Road, Pune",
            "status": "ACTIVE",
            "date_of_joining": date(2020, 1, 1),
            "date_of_leaving": None,
        }
        data.update(overrides)
        return data
    return _make


@pytest.fixture
def employee_json(employee_data):
    """Same as employee_data with dates rendered for a JSON body."""
    def _make(n: int = 1, **overrides) -> dict:
        return {
            k: v.isoformat() if isinstance(v, date) else v
            for k, v in employee_data(n, **overrides).items()
        }
    return _make


@pytest.fixture
async def client(test_engine, test_session_factory, file_store):
    """FastAPI test client with DB and file store dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: file_store

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
