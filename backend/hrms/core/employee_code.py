"""Employee Code Format - pure formatting and sequencing of EMPnnnn codes.

Invariants:
    - Codes are EMP + zero-padded sequence, minimum 4 digits (EMP0001)
    - Sequences start at 1; a store with max id N seeds the next sequence at N + 1
"""

from hrms.core.domain_types import EmployeeCode


EMPLOYEE_CODE_PREFIX: str = "EMP"
EMPLOYEE_CODE_WIDTH: int = 4


def format_employee_code(sequence: int) -> EmployeeCode:
    if sequence < 1:
        raise ValueError(f"Employee code sequence must be positive, got {sequence}")
    return EmployeeCode(f"{EMPLOYEE_CODE_PREFIX}{sequence:0{EMPLOYEE_CODE_WIDTH}d}")


def next_sequence_after(max_assigned_id: int | None) -> int:
    """One more than the highest assigned id, or 1 for an empty store."""
    return 1 if max_assigned_id is None else max_assigned_id + 1
