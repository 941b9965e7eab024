"""
Employee schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from attendance_payroll.models.employee import Role
from attendance_payroll.utils.datetime_utils import iso_local


def _normalize_password(v):
    if v is None:
        return None
    v = v.strip()
    if not v:
        return None
    if len(v) < 6:
        raise ValueError("Password must be at least 6 characters")
    if len(v.encode("utf-8")) > 72:
        raise ValueError("Password cannot be longer than 72 bytes when encoded as UTF-8")
    return v


class EmployeeCreate(BaseModel):
    """Schema for creating an employee"""
    emp_code: str = Field(..., min_length=1, description="Employee code (unique)")
    name: str = Field(..., min_length=1, description="Employee name")
    email: Optional[str] = None
    role: Role = Field(default=Role.EMPLOYEE, description="Employee role")
    designation: Optional[str] = None
    salary: Optional[Decimal] = Field(None, ge=0, description="Monthly base salary")
    password: Optional[str] = Field(None, description="Login password (optional)")
    active: bool = True

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v):
        return _normalize_password(v)


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee; omitted fields are unchanged"""
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    role: Optional[Role] = None
    designation: Optional[str] = None
    salary: Optional[Decimal] = Field(None, ge=0)
    password: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v):
        return _normalize_password(v)


class EmployeeOut(BaseModel):
    id: int
    emp_code: str
    name: str
    email: Optional[str] = None
    role: str
    designation: Optional[str] = None
    salary: Optional[Decimal] = None
    active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("salary")
    def _ser_salary(self, value: Optional[Decimal]) -> Optional[float]:
        return float(value) if value is not None else None

    @field_serializer("created_at")
    def _ser_created_at(self, dt: datetime) -> Optional[str]:
        return iso_local(dt)
