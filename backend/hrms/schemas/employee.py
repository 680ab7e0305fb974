"""Employee Schemas - request bodies and public responses for the employees API.

Invariants:
    - EmployeeCreate and EmployeeUpdate carry every mutable field; neither accepts
      id, employee_code, document slots or timestamps
    - status defaults to ACTIVE when omitted
    - EmployeeResponse is built from ORM records (from_attributes)
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field

from hrms.core.domain_types import EmployeeStatus


class EmployeeInput(BaseModel):
    """Mutable employee fields shared by create and update."""
    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    mobile_no: str
    email: EmailStr | None = None
    aadhaar_no: str
    pan_no: str
    account_no: str = Field(max_length=34)
    ifsc_code: str
    bank_name: str = Field(max_length=100)
    uan_no: str | None = Field(None, max_length=20)
    pf_no: str | None = Field(None, max_length=30)
    qualification: str | None = Field(None, max_length=100)
    dob: date
    address: str
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    date_of_joining: date
    date_of_leaving: date | None = None


class EmployeeCreate(EmployeeInput):
    """New employee - code and id are assigned by the service."""


class EmployeeUpdate(EmployeeInput):
    """Full replacement of the mutable fields."""


class DocumentPatch(BaseModel):
    """Document references to set; omitted or null slots are left untouched."""
    aadhaar_document: str | None = Field(None, max_length=500)
    pan_document: str | None = Field(None, max_length=500)
    photo: str | None = Field(None, max_length=500)
    other_documents: str | None = Field(None, max_length=500)


class EmployeeResponse(BaseModel):
    """Employee response - public-facing record data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_code: str
    first_name: str
    last_name: str
    mobile_no: str
    email: str | None = None
    aadhaar_no: str
    pan_no: str
    account_no: str
    ifsc_code: str
    bank_name: str
    uan_no: str | None = None
    pf_no: str | None = None
    qualification: str | None = None
    dob: date
    address: str
    status: EmployeeStatus
    date_of_joining: date
    date_of_leaving: date | None = None
    aadhaar_document: str | None = None
    pan_document: str | None = None
    photo: str | None = None
    other_documents: str | None = None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class EmployeeListResponse(BaseModel):
    employees: list[EmployeeResponse]
    count: int

    @classmethod
    def of(cls, records) -> "EmployeeListResponse":
        employees = [EmployeeResponse.model_validate(r) for r in records]
        return cls(employees=employees, count=len(employees))
