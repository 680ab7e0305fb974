"""Lifecycle Enforcement - pure status-transition and patch rules for employee records.

Invariants:
    - resolve_update_status forces RESIGNED when date_of_leaving <= today, else honors the request
    - The leaving-date rule is applied on update only, never on create
    - soft_delete_changes always yields RESIGNED + date_of_leaving = today (idempotent in effect)
    - document_changes never contains a None or blank value (slots are never cleared)

Design Decisions:
    - Functions return change dicts; the service applies them to the record
"""

from datetime import date
from typing import Any, Mapping

from hrms.core.domain_types import (
    DocumentSlot, EmployeeStatus, OPTIONAL_UNIQUE_KEYS, UNIQUE_CHECK_ORDER,
    UniqueKey,
)


def resolve_update_status(
    requested: EmployeeStatus, date_of_leaving: date | None, today: date,
) -> EmployeeStatus:
    """Status to persist on update given the submitted status and leaving date."""
    if date_of_leaving is not None and date_of_leaving <= today:
        return EmployeeStatus.RESIGNED
    return requested


def update_changes(fields: Mapping[str, Any], today: date) -> dict:
    """All mutable fields from validated input, with the leaving-date rule applied."""
    changes = dict(fields)
    changes["status"] = resolve_update_status(
        fields["status"], fields.get("date_of_leaving"), today,
    )
    return changes


def soft_delete_changes(today: date) -> dict:
    return {
        "status": EmployeeStatus.RESIGNED,
        "date_of_leaving": today,
    }


def document_changes(
    aadhaar_document: str | None = None,
    pan_document: str | None = None,
    photo: str | None = None,
    other_documents: str | None = None,
) -> dict[DocumentSlot, str]:
    """Slots to overwrite - only those given a non-blank value, stripped."""
    supplied = {
        DocumentSlot.AADHAAR: aadhaar_document,
        DocumentSlot.PAN: pan_document,
        DocumentSlot.PHOTO: photo,
        DocumentSlot.OTHER: other_documents,
    }
    changes = {}
    for slot, value in supplied.items():
        if value is not None and value.strip():
            changes[slot] = value.strip()
    return changes


def unique_candidates(fields: Mapping[str, Any]) -> list[tuple[UniqueKey, Any]]:
    """Identity keys to check for collisions, in check order.

    Required keys are always included; optional keys only when non-null.
    """
    return [
        (key, fields.get(key.value))
        for key in UNIQUE_CHECK_ORDER
        if key not in OPTIONAL_UNIQUE_KEYS or fields.get(key.value) is not None
    ]
