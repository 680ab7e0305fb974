"""Uniqueness Validator - rejects a candidate record that collides on any identity key.

Invariants:
    - mobile_no, aadhaar_no, pan_no, account_no always checked; email, uan_no only when non-null
    - exclude_id lets a record keep its own values on update
    - First collision raises DuplicateKeyError(field, value); no collision has no side effect
    - Not atomic against concurrent validators: store UNIQUE constraints are the backstop
"""

import logging
from typing import Any, Mapping

from hrms.core.domain_types import EmployeeId
from hrms.core.enforce_lifecycle import unique_candidates
from hrms.core.errors import DuplicateKeyError
from hrms.core.repository_protocols import EmployeeStore

logger = logging.getLogger(__name__)


async def ensure_unique(
    store: EmployeeStore,
    fields: Mapping[str, Any],
    exclude_id: EmployeeId | None = None,
) -> None:
    """Raise DuplicateKeyError on the first identity key already held by another record."""
    for key, value in unique_candidates(fields):
        if await store.exists_by_unique_key(key, value, exclude_id):
            logger.warning(
                f"Duplicate {key.value} rejected",
                extra={"field": key.value, "employee_id": exclude_id},
            )
            raise DuplicateKeyError(key.value, value)
