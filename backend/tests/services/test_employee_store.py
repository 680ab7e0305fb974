"""SQL Employee Store - lookups, search, counter and integrity-error mapping.

Tests:
    - parse_unique_violation understands PostgreSQL and SQLite messages
    - A UNIQUE violation at flush surfaces as DuplicateKeyError with the column name
    - exists_by_unique_key honors exclude_id
    - Search is case-insensitive over name and code, wildcards matched literally
    - Code counter seeds from max id, then increments
"""

import pytest

from hrms.core.domain_types import EmployeeId, EmployeeStatus, UniqueKey
from hrms.core.errors import DuplicateKeyError
from hrms.infrastructure.employee_store import parse_unique_violation
from hrms.models.employee import Employee


async def _insert(store, data, code):
    async with store.atomic():
        record = await store.create({**data, "employee_code": code})
    return record


# ─── Driver message parsing ──────────────────────────────────────


def test_parse_postgres_detail():
    message = (
        'duplicate key value violates unique constraint "uq_employees_mobile_no"\n'
        "DETAIL:  Key (mobile_no)=(9876543210) already exists."
    )
    assert parse_unique_violation(message) == (UniqueKey.MOBILE_NO, "9876543210")


def test_parse_postgres_constraint_name_only():
    message = 'duplicate key value violates unique constraint "uq_employees_pan_no"'
    assert parse_unique_violation(message) == (UniqueKey.PAN_NO, None)


def test_parse_sqlite_message():
    assert parse_unique_violation(
        "UNIQUE constraint failed: employees.aadhaar_no",
    ) == (UniqueKey.AADHAAR_NO, None)


def test_parse_counter_seed_race_is_code_collision():
    assert parse_unique_violation(
        "UNIQUE constraint failed: employee_code_sequence.id",
    ) == (UniqueKey.EMPLOYEE_CODE, None)


def test_parse_unrelated_message():
    assert parse_unique_violation("NOT NULL constraint failed: employees.dob") is None


# ─── Store behaviour ─────────────────────────────────────────────


async def test_duplicate_column_at_flush_maps_to_duplicate_key(store, employee_data):
    await _insert(store, employee_data(1), "EMP0001")

    with pytest.raises(DuplicateKeyError) as exc_info:
        await _insert(
            store, employee_data(2, mobile_no=employee_data(1)["mobile_no"]), "EMP0002",
        )
    assert exc_info.value.field == "mobile_no"
    assert await store.list_all() != []


async def test_exists_by_unique_key_excludes_own_record(store, employee_data):
    record = await _insert(store, employee_data(1), "EMP0001")
    record_id = record.id

    assert await store.exists_by_unique_key(UniqueKey.MOBILE_NO, "9876543201")
    assert not await store.exists_by_unique_key(
        UniqueKey.MOBILE_NO, "9876543201", exclude_id=EmployeeId(record_id),
    )


async def test_get_by_unique_key_code(store, employee_data):
    await _insert(store, employee_data(1), "EMP0001")
    record = await store.get_by_unique_key(UniqueKey.EMPLOYEE_CODE, "EMP0001")
    assert record is not None and record.first_name == "Asha"
    assert await store.get_by_unique_key(UniqueKey.EMPLOYEE_CODE, "EMP0404") is None


async def test_list_by_status_ordered_by_id(store, employee_data):
    await _insert(store, employee_data(1), "EMP0001")
    await _insert(store, employee_data(2, status="RESIGNED"), "EMP0002")
    await _insert(store, employee_data(3), "EMP0003")

    active = await store.list_by_status(EmployeeStatus.ACTIVE)
    assert [r.employee_code for r in active] == ["EMP0001", "EMP0003"]


async def test_search_is_case_insensitive(store, employee_data):
    await _insert(store, employee_data(1, first_name="Ravi", last_name="Kumar"), "EMP0001")
    await _insert(store, employee_data(2, first_name="Meena", last_name="Iyer"), "EMP0002")

    assert [r.employee_code for r in await store.search("KUM")] == ["EMP0001"]
    assert [r.employee_code for r in await store.search("emp0002")] == ["EMP0002"]
    assert len(await store.search("emp")) == 2


async def test_search_treats_wildcards_literally(store, employee_data):
    await _insert(store, employee_data(1), "EMP0001")
    assert await store.search("%") == []
    assert await store.search("_") == []


async def test_counter_seeds_from_max_id_then_increments(store, employee_data):
    await _insert(store, employee_data(1), "EMP0001")
    await _insert(store, employee_data(2), "EMP0002")

    async with store.atomic():
        first = await store.next_code_sequence()
    async with store.atomic():
        second = await store.next_code_sequence()
    assert (first, second) == (3, 4)


async def test_delete_by_id(store, employee_data):
    record = await _insert(store, employee_data(1), "EMP0001")
    record_id = EmployeeId(record.id)

    async with store.atomic():
        assert await store.delete_by_id(record_id) is True
    assert await store.get_by_id(record_id) is None
    assert not await store.exists_by_id(record_id)
    async with store.atomic():
        assert await store.delete_by_id(record_id) is False


def test_status_column_is_indexed():
    assert "ix_employees_status" in {ix.name for ix in Employee.__table__.indexes}
