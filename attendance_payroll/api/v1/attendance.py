"""
Attendance endpoints: the employee's own check-in / break / check-out flow,
plus admin views and the manual override.

Work date is today's date in the reference timezone (settings.REFERENCE_TZ).
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from attendance_payroll.core.constants import (
    CAP_ATTENDANCE_MANAGE,
    CAP_ATTENDANCE_VIEW,
)
from attendance_payroll.core.deps import ensure_capability, get_current_user, get_db, require_capability
from attendance_payroll.engine.records import AttendanceStatus
from attendance_payroll.models.employee import Employee
from attendance_payroll.schemas.attendance import (
    AttendanceRecordOut,
    ManualAttendanceRequest,
    MonthlyAttendanceResponse,
)
from attendance_payroll.services import attendance_service
from attendance_payroll.utils.datetime_utils import resolve_period, work_date_for

router = APIRouter()


@router.get("/today/{employee_id}")
async def get_today(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    """
    Today's record for an employee, or {"status": "absent"} when there is none.
    Employees may only read their own; ADMIN/OWNER may read anyone's.
    """
    ensure_capability(current_user, CAP_ATTENDANCE_VIEW, employee_id)
    row = attendance_service.get_today(db, employee_id)
    if row is None:
        return {
            "employee_id": employee_id,
            "work_date": work_date_for().isoformat(),
            "status": AttendanceStatus.ABSENT.value,
        }
    return AttendanceRecordOut.model_validate(row)


@router.post("/check-in", response_model=AttendanceRecordOut, status_code=201)
async def check_in(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    """Check in the current user for today. A second check-in returns 400 AlreadyCheckedIn."""
    return attendance_service.check_in(db, current_user.id)


@router.post("/break-start", response_model=AttendanceRecordOut)
async def break_start(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    return attendance_service.start_break(db, current_user.id)


@router.post("/break-end", response_model=AttendanceRecordOut)
async def break_end(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    return attendance_service.end_break(db, current_user.id)


@router.post("/check-out", response_model=AttendanceRecordOut)
async def check_out(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    """
    Check out the current user. Net work minutes exclude closed breaks; fewer than
    HALF_DAY_THRESHOLD_MINUTES marks the day as half-day.
    """
    return attendance_service.check_out(db, current_user.id)


@router.get("/monthly", response_model=MonthlyAttendanceResponse)
async def list_monthly(
    year: Optional[int] = Query(None, description="Calendar year (default: current)"),
    month: Optional[int] = Query(None, description="Month 1-12 (default: current)"),
    employee_id: Optional[int] = Query(None, description="Filter by employee ID"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_ATTENDANCE_MANAGE)),
):
    """All attendance records of a month (ADMIN/OWNER)."""
    year, month = resolve_period(year, month)
    rows = attendance_service.list_month(
        db, year, month, employee_ids=[employee_id] if employee_id is not None else None
    )
    return MonthlyAttendanceResponse(
        year=year,
        month=month,
        items=[AttendanceRecordOut.model_validate(r) for r in rows],
        total=len(rows),
    )


@router.post("/manual", response_model=AttendanceRecordOut)
async def manual_set(
    body: ManualAttendanceRequest,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_ATTENDANCE_MANAGE)),
):
    """
    Set an employee's status for a date (ADMIN/OWNER).
    Creates the record when missing, otherwise overwrites status only.
    """
    return attendance_service.manual_set(
        db,
        actor_id=current_user.id,
        employee_id=body.employee_id,
        work_date=body.work_date,
        status=body.status,
        note=body.note,
    )


@router.get("/history/{employee_id}", response_model=List[AttendanceRecordOut])
async def history(
    employee_id: int,
    limit: Optional[int] = Query(None, ge=1, le=366, description="Max records (default: HISTORY_LIMIT)"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    """Most recent records first."""
    ensure_capability(current_user, CAP_ATTENDANCE_VIEW, employee_id)
    return attendance_service.get_history(db, employee_id, limit=limit)
