"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - EmployeeId wraps the store-assigned integer key, EmployeeCode the EMPnnnn string
    - All valid states encoded as Enums - no raw string matching
    - UniqueKey values are the column names carrying UNIQUE constraints

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", int)
EmployeeCode = NewType("EmployeeCode", str)


# ─── Enums ───────────────────────────────────────────────────────

class EmployeeStatus(str, Enum):
    """Employment lifecycle states - maps to DB `status` column."""
    ACTIVE = "ACTIVE"
    RESIGNED = "RESIGNED"


class UniqueKey(str, Enum):
    """Uniquely-constrained identity columns on the employees table."""
    EMPLOYEE_CODE = "employee_code"
    MOBILE_NO = "mobile_no"
    EMAIL = "email"
    AADHAAR_NO = "aadhaar_no"
    PAN_NO = "pan_no"
    ACCOUNT_NO = "account_no"
    UAN_NO = "uan_no"


class DocumentSlot(str, Enum):
    """The four document-reference slots; value is the record attribute."""
    AADHAAR = "aadhaar_document"
    PAN = "pan_document"
    PHOTO = "photo"
    OTHER = "other_documents"

    @classmethod
    def from_document_type(cls, document_type: str) -> "DocumentSlot":
        """Map upload document_type (aadhaar|pan|photo|other) to its slot."""
        try:
            return _DOCUMENT_TYPES[document_type.strip().lower()]
        except KeyError:
            raise ValueError(f"Invalid document type: {document_type}") from None


_DOCUMENT_TYPES: dict[str, DocumentSlot] = {
    "aadhaar": DocumentSlot.AADHAAR,
    "pan": DocumentSlot.PAN,
    "photo": DocumentSlot.PHOTO,
    "other": DocumentSlot.OTHER,
}


# Checked only when the candidate value is non-null.
OPTIONAL_UNIQUE_KEYS: tuple[UniqueKey, ...] = (
    UniqueKey.EMAIL,
    UniqueKey.UAN_NO,
)
# Collision check order; the first hit is the one reported.
UNIQUE_CHECK_ORDER: tuple[UniqueKey, ...] = (
    UniqueKey.MOBILE_NO,
    UniqueKey.EMAIL,
    UniqueKey.AADHAAR_NO,
    UniqueKey.PAN_NO,
    UniqueKey.ACCOUNT_NO,
    UniqueKey.UAN_NO,
)
