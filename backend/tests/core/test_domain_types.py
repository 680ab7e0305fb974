"""Domain Types - verifies enum members and the document-type mapping.

Tests:
    - EmployeeStatus has exactly ACTIVE and RESIGNED
    - UniqueKey values are column names
    - document_type strings map to slots, case-insensitively
    - Optional unique keys and collision check order
"""

import pytest

from hrms.core.domain_types import (
    DocumentSlot, EmployeeCode, EmployeeId, EmployeeStatus,
    OPTIONAL_UNIQUE_KEYS, UNIQUE_CHECK_ORDER, UniqueKey,
)


def test_identity_types_wrap_primitives():
    assert EmployeeId(7) == 7
    assert EmployeeCode("EMP0007") == "EMP0007"


def test_employee_status_has_two_states():
    assert {s.value for s in EmployeeStatus} == {"ACTIVE", "RESIGNED"}


def test_unique_keys_are_column_names():
    assert UniqueKey.MOBILE_NO.value == "mobile_no"
    assert UniqueKey.EMPLOYEE_CODE.value == "employee_code"
    assert len(UniqueKey) == 7


@pytest.mark.parametrize("document_type,slot", [
    ("aadhaar", DocumentSlot.AADHAAR),
    ("PAN", DocumentSlot.PAN),
    (" photo ", DocumentSlot.PHOTO),
    ("Other", DocumentSlot.OTHER),
])
def test_document_type_maps_to_slot(document_type, slot):
    assert DocumentSlot.from_document_type(document_type) is slot


def test_unknown_document_type_raises():
    with pytest.raises(ValueError, match="Invalid document type"):
        DocumentSlot.from_document_type("passport")


def test_email_and_uan_are_the_optional_keys():
    assert set(OPTIONAL_UNIQUE_KEYS) == {UniqueKey.EMAIL, UniqueKey.UAN_NO}
    assert UniqueKey.EMPLOYEE_CODE not in UNIQUE_CHECK_ORDER


def test_email_checked_right_after_mobile():
    assert UNIQUE_CHECK_ORDER[:3] == (
        UniqueKey.MOBILE_NO, UniqueKey.EMAIL, UniqueKey.AADHAAR_NO,
    )
