"""
Attendance schemas. All datetimes are emitted in the reference timezone.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from attendance_payroll.engine.records import AttendanceStatus
from attendance_payroll.utils.datetime_utils import iso_local


class BreakOut(BaseModel):
    start_at: datetime
    end_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("start_at", "end_at", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class AttendanceRecordOut(BaseModel):
    """One employee's attendance for one work date"""
    id: int
    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None
    total_break_time: int = Field(0, description="Closed break minutes")
    total_work_time: int = Field(0, description="Net work minutes, set at check-out")
    is_half_day: bool = False
    note: Optional[str] = None
    breaks: List[BreakOut] = []

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("check_in_at", "check_out_at", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class ManualAttendanceRequest(BaseModel):
    """Admin override of one employee's status for one date"""
    employee_id: int = Field(..., gt=0)
    work_date: date = Field(..., alias="date", description="Work date (YYYY-MM-DD)")
    status: AttendanceStatus
    note: Optional[str] = Field(None, max_length=500)

    model_config = ConfigDict(populate_by_name=True)


class MonthlyAttendanceResponse(BaseModel):
    year: int
    month: int
    items: List[AttendanceRecordOut]
    total: int
