"""
Payroll schemas, built from engine PayrollResult objects
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer

from attendance_payroll.engine.records import AttendanceStatus


class StatsOut(BaseModel):
    present: int
    half_day: int
    absent: int
    paid_days: float

    model_config = ConfigDict(from_attributes=True)


class DailyOut(BaseModel):
    day: int
    date: date
    is_working_day: bool
    status: Optional[AttendanceStatus]
    contribution: float

    model_config = ConfigDict(from_attributes=True)


class PayrollOut(BaseModel):
    """Payroll line for one employee and month"""
    employee_id: int
    name: Optional[str] = None
    year: int
    month: int
    base_salary: Decimal
    days_in_month: int
    working_days: int
    paid_days: float
    calculated_salary: int
    stats: StatsOut
    daily: List[DailyOut] = []

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("base_salary")
    def _ser_salary(self, value: Decimal) -> float:
        return float(value)


class PayrollRunResponse(BaseModel):
    year: int
    month: int
    items: List[PayrollOut]
    total: int
