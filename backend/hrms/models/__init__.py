"""ORM Models - SQLAlchemy declarative models for the personnel domain.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from hrms.models.employee import Employee  # noqa: F401
from hrms.models.employee_code_sequence import EmployeeCodeSequence  # noqa: F401
