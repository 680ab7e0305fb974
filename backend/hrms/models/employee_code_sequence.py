"""EmployeeCodeSequence ORM - single-row counter that feeds EMPnnnn codes.

Invariants:
    - At most one row, id = 1
    - last_value only ever increases (hard deletes never rewind it)
    - Incremented with UPDATE ... RETURNING inside the create transaction
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from hrms.db.base import Base


SEQUENCE_ROW_ID: int = 1


class EmployeeCodeSequence(Base):
    """Last issued employee-code sequence number."""
    __tablename__ = "employee_code_sequence"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
