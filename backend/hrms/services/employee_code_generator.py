"""Identity Code Generator - issues the next EMPnnnn code from the store's counter.

Invariants:
    - Must be called inside the create transaction (the counter bump commits with the record)
    - A code already held by a record (inserted out of band) is skipped, never reissued
"""

import logging

from hrms.core.domain_types import EmployeeCode, UniqueKey
from hrms.core.employee_code import format_employee_code
from hrms.core.repository_protocols import EmployeeStore

logger = logging.getLogger(__name__)


async def generate_employee_code(store: EmployeeStore) -> EmployeeCode:
    while True:
        code = format_employee_code(await store.next_code_sequence())
        if not await store.exists_by_unique_key(UniqueKey.EMPLOYEE_CODE, code):
            return code
        logger.warning(f"Employee code {code} already held, skipping")
