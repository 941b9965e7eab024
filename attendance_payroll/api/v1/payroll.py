"""
Payroll endpoints: monthly run for all employees, single-employee payslip,
and CSV export of the run.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from attendance_payroll.core.constants import CAP_PAYROLL_RUN, CAP_PAYROLL_VIEW
from attendance_payroll.core.deps import ensure_capability, get_current_user, get_db, require_capability
from attendance_payroll.models.employee import Employee
from attendance_payroll.schemas.payroll import PayrollOut, PayrollRunResponse
from attendance_payroll.services.audit_service import log_audit
from attendance_payroll.services.payroll_service import payroll_for_all, payroll_for_employee
from attendance_payroll.utils.csv_export import stream_csv
from attendance_payroll.utils.datetime_utils import resolve_period

router = APIRouter()

CSV_HEADERS = [
    "employee_id",
    "name",
    "base_salary",
    "days_in_month",
    "working_days",
    "present",
    "half_day",
    "absent",
    "paid_days",
    "calculated_salary",
]


def _to_out(result, include_daily: bool) -> PayrollOut:
    out = PayrollOut.model_validate(result, from_attributes=True)
    if not include_daily:
        out.daily = []
    return out


@router.get("/all", response_model=PayrollRunResponse)
async def payroll_all(
    year: Optional[int] = Query(None, description="Calendar year (default: current)"),
    month: Optional[int] = Query(None, description="Month 1-12 (default: current)"),
    working_days: Optional[int] = Query(None, description="Override reported working days"),
    include_daily: bool = Query(False, description="Include the per-day breakdown"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_PAYROLL_RUN)),
):
    """
    Payroll for every active non-owner employee (ADMIN/OWNER).

    The working_days override only changes the reported count; salary is always
    prorated over the calendar days of the month.
    """
    year, month = resolve_period(year, month)
    results = payroll_for_all(db, year, month, working_days_override=working_days)
    return PayrollRunResponse(
        year=year,
        month=month,
        items=[_to_out(r, include_daily) for r in results],
        total=len(results),
    )


@router.get("/all.csv")
async def payroll_all_csv(
    year: Optional[int] = Query(None, description="Calendar year (default: current)"),
    month: Optional[int] = Query(None, description="Month 1-12 (default: current)"),
    working_days: Optional[int] = Query(None, description="Override reported working days"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_PAYROLL_RUN)),
):
    """Payroll run as a CSV attachment (ADMIN/OWNER)."""
    year, month = resolve_period(year, month)
    results = payroll_for_all(db, year, month, working_days_override=working_days)

    rows = [
        {
            "employee_id": r.employee_id,
            "name": r.name,
            "base_salary": r.base_salary,
            "days_in_month": r.days_in_month,
            "working_days": r.working_days,
            "present": r.stats.present,
            "half_day": r.stats.half_day,
            "absent": r.stats.absent,
            "paid_days": r.paid_days,
            "calculated_salary": r.calculated_salary,
        }
        for r in results
    ]

    log_audit(
        db=db,
        actor_id=current_user.id,
        action="PAYROLL_EXPORT_CSV",
        entity_type="payroll",
        meta={"year": year, "month": month, "row_count": len(rows)},
    )
    return stream_csv(headers=CSV_HEADERS, rows=rows, filename=f"payroll_{year:04d}_{month:02d}.csv")


@router.get("/my/{employee_id}", response_model=PayrollOut)
async def payroll_my(
    employee_id: int,
    year: Optional[int] = Query(None, description="Calendar year (default: current)"),
    month: Optional[int] = Query(None, description="Month 1-12 (default: current)"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    """One employee's payroll with the per-day breakdown. Employees may only read their own."""
    ensure_capability(current_user, CAP_PAYROLL_VIEW, employee_id)
    year, month = resolve_period(year, month)
    return _to_out(payroll_for_employee(db, employee_id, year, month), include_daily=True)
