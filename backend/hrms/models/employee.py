"""Employee ORM - persists one personnel record.

Invariants:
    - id is an autoincrement integer primary key
    - employee_code, mobile_no, email, aadhaar_no, pan_no, account_no, uan_no carry
      named UNIQUE constraints (uq_employees_<column>); NULLs never collide
    - status is ACTIVE or RESIGNED, stored as its string value
    - created_at set once, updated_at refreshed on every UPDATE

Design Decisions:
    - Named constraints: IntegrityError messages are mapped back to the column
      by infrastructure/employee_store.py on every dialect
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hrms.core.domain_types import EmployeeStatus, UniqueKey
from hrms.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    """Employee record - the sole aggregate of the personnel domain."""
    __tablename__ = "employees"
    __table_args__ = tuple(
        UniqueConstraint(key.value, name=f"uq_employees_{key.value}")
        for key in UniqueKey
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    employee_code: Mapped[str] = mapped_column(String(20), nullable=False)

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    mobile_no: Mapped[str] = mapped_column(String(10), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Identity and bank details
    aadhaar_no: Mapped[str] = mapped_column(String(12), nullable=False)
    pan_no: Mapped[str] = mapped_column(String(10), nullable=False)
    account_no: Mapped[str] = mapped_column(String(34), nullable=False)
    ifsc_code: Mapped[str] = mapped_column(String(11), nullable=False)
    bank_name: Mapped[str] = mapped_column(String(100), nullable=False)
    uan_no: Mapped[str | None] = mapped_column(String(20), nullable=True)
    pf_no: Mapped[str | None] = mapped_column(String(30), nullable=True)

    qualification: Mapped[str | None] = mapped_column(String(100), nullable=True)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EmployeeStatus.ACTIVE.value, index=True,
    )
    date_of_joining: Mapped[date] = mapped_column(Date, nullable=False)
    date_of_leaving: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Document references (relative paths inside the upload root)
    aadhaar_document: Mapped[str | None] = mapped_column(String(500), nullable=True)
    pan_document: Mapped[str | None] = mapped_column(String(500), nullable=True)
    photo: Mapped[str | None] = mapped_column(String(500), nullable=True)
    other_documents: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
