"""Initial schema - employees and the employee code counter.

Revision ID: 001_employees
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_employees"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


_UNIQUE_COLUMNS = (
    "employee_code", "mobile_no", "email", "aadhaar_no",
    "pan_no", "account_no", "uan_no",
)


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("employee_code", sa.String(20), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("mobile_no", sa.String(10), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("aadhaar_no", sa.String(12), nullable=False),
        sa.Column("pan_no", sa.String(10), nullable=False),
        sa.Column("account_no", sa.String(34), nullable=False),
        sa.Column("ifsc_code", sa.String(11), nullable=False),
        sa.Column("bank_name", sa.String(100), nullable=False),
        sa.Column("uan_no", sa.String(20), nullable=True),
        sa.Column("pf_no", sa.String(30), nullable=True),
        sa.Column("qualification", sa.String(100), nullable=True),
        sa.Column("dob", sa.Date, nullable=False),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column("date_of_joining", sa.Date, nullable=False),
        sa.Column("date_of_leaving", sa.Date, nullable=True),
        sa.Column("aadhaar_document", sa.String(500), nullable=True),
        sa.Column("pan_document", sa.String(500), nullable=True),
        sa.Column("photo", sa.String(500), nullable=True),
        sa.Column("other_documents", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        *[
            sa.UniqueConstraint(col, name=f"uq_employees_{col}")
            for col in _UNIQUE_COLUMNS
        ],
    )
    op.create_index("ix_employees_status", "employees", ["status"])

    op.create_table(
        "employee_code_sequence",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("last_value", sa.Integer, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("employee_code_sequence")
    op.drop_index("ix_employees_status", table_name="employees")
    op.drop_table("employees")
