"""Field Validation - explicit per-field rules for employee input, run before any store call.

Invariants:
    - validate_employee_fields is PURE: returns a list of FieldError, never raises
    - Every failing field is reported (no short-circuit on the first error)
    - `today` is a parameter so the dob rule is deterministic
    - normalize_employee_fields strips strings and maps blank optionals to None

Design Decisions:
    - Plain functions over ORM column annotations: the same rules serve create and update
    - Field names are snake_case record attributes (the API speaks the same names)
"""

import re
from datetime import date
from typing import Any, Mapping

from email_validator import EmailNotValidError, validate_email

from hrms.core.domain_types import EmployeeStatus
from hrms.core.errors import FieldError


# Overwritten by update(); id, employee_code, documents and timestamps are not.
MUTABLE_FIELDS: tuple[str, ...] = (
    "first_name", "last_name", "mobile_no", "email",
    "aadhaar_no", "pan_no", "account_no", "ifsc_code", "bank_name",
    "uan_no", "pf_no", "qualification", "dob", "address",
    "status", "date_of_joining", "date_of_leaving",
)

REQUIRED_TEXT_FIELDS: tuple[str, ...] = (
    "first_name", "last_name", "mobile_no", "aadhaar_no", "pan_no",
    "account_no", "ifsc_code", "bank_name", "address",
)
OPTIONAL_TEXT_FIELDS: tuple[str, ...] = (
    "email", "uan_no", "pf_no", "qualification",
)

NAME_MIN_LENGTH: int = 2
NAME_MAX_LENGTH: int = 50

MOBILE_PATTERN = re.compile(r"^[0-9]{10}$")
AADHAAR_PATTERN = re.compile(r"^[0-9]{12}$")
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
IFSC_PATTERN = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")

_PATTERN_RULES: tuple[tuple[str, re.Pattern, str], ...] = (
    ("mobile_no", MOBILE_PATTERN, "Mobile number must be 10 digits"),
    ("aadhaar_no", AADHAAR_PATTERN, "Aadhaar number must be 12 digits"),
    ("pan_no", PAN_PATTERN, "PAN number format is invalid"),
    ("ifsc_code", IFSC_PATTERN, "IFSC code format is invalid"),
)


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def normalize_employee_fields(data: Mapping[str, Any]) -> dict:
    """Return a copy with MUTABLE_FIELDS only, strings stripped, blanks as None."""
    fields = {name: _clean(data.get(name)) for name in MUTABLE_FIELDS}
    status = fields["status"]
    if status is None:
        fields["status"] = EmployeeStatus.ACTIVE
    elif isinstance(status, str):
        try:
            fields["status"] = EmployeeStatus(status.upper())
        except ValueError:
            pass  # reported by validate_employee_fields
    return fields


def validate_employee_fields(fields: Mapping[str, Any], today: date) -> list[FieldError]:
    """Check every field rule. Pure - returns errors, empty list when valid."""
    errors: list[FieldError] = []

    for name in REQUIRED_TEXT_FIELDS:
        value = fields.get(name)
        if value is None:
            errors.append(FieldError(name, f"{_label(name)} is required"))
        elif not isinstance(value, str):
            errors.append(FieldError(name, f"{_label(name)} must be text"))

    for name in OPTIONAL_TEXT_FIELDS:
        value = fields.get(name)
        if value is not None and not isinstance(value, str):
            errors.append(FieldError(name, f"{_label(name)} must be text"))

    for name in ("first_name", "last_name"):
        value = fields.get(name)
        if isinstance(value, str) and not (
            NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH
        ):
            errors.append(FieldError(
                name,
                f"{_label(name)} must be between {NAME_MIN_LENGTH} "
                f"and {NAME_MAX_LENGTH} characters",
            ))

    for name, pattern, message in _PATTERN_RULES:
        value = fields.get(name)
        if isinstance(value, str) and not pattern.match(value):
            errors.append(FieldError(name, message))

    email = fields.get("email")
    if isinstance(email, str) and not _is_email(email):
        errors.append(FieldError("email", "Email should be valid"))

    errors.extend(_validate_dates(fields, today))

    status = fields.get("status")
    if not isinstance(status, EmployeeStatus):
        errors.append(FieldError(
            "status",
            f"Status must be one of {', '.join(s.value for s in EmployeeStatus)}",
        ))

    return errors


def _validate_dates(fields: Mapping[str, Any], today: date) -> list[FieldError]:
    errors: list[FieldError] = []

    dob = fields.get("dob")
    if dob is None:
        errors.append(FieldError("dob", "Date of birth is required"))
    elif not _is_date(dob):
        errors.append(FieldError("dob", "Date of birth must be a date"))
    elif dob >= today:
        errors.append(FieldError("dob", "Date of birth must be in the past"))

    joining = fields.get("date_of_joining")
    if joining is None:
        errors.append(FieldError("date_of_joining", "Date of joining is required"))
    elif not _is_date(joining):
        errors.append(FieldError("date_of_joining", "Date of joining must be a date"))

    leaving = fields.get("date_of_leaving")
    if leaving is not None and not _is_date(leaving):
        errors.append(FieldError("date_of_leaving", "Date of leaving must be a date"))

    return errors


def _is_email(value: str) -> bool:
    # Same syntax rules as EmailStr at the HTTP boundary
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _is_date(value: Any) -> bool:
    # datetime is a date subclass but compares unsafely against date
    return isinstance(value, date) and type(value) is date


def _label(name: str) -> str:
    return name.replace("_no", " number").replace("_", " ").capitalize()
