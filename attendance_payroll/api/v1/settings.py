"""
Payroll settings endpoints: weekly off-days and holidays
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from attendance_payroll.core.constants import CAP_SETTINGS_MANAGE, CAP_SETTINGS_VIEW
from attendance_payroll.core.deps import get_db, require_capability
from attendance_payroll.engine.calendar_resolver import Holiday
from attendance_payroll.models.employee import Employee
from attendance_payroll.schemas.settings import PayrollSettingsOut, PayrollSettingsUpdate
from attendance_payroll.services.settings_service import get_payroll_settings, update_payroll_settings

router = APIRouter()


@router.get("/payroll", response_model=PayrollSettingsOut)
async def read_payroll_settings(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_SETTINGS_VIEW)),
):
    """Current off-days and holidays (defaults when never configured)."""
    return PayrollSettingsOut.model_validate(get_payroll_settings(db), from_attributes=True)


@router.patch("/payroll", response_model=PayrollSettingsOut)
async def patch_payroll_settings(
    body: PayrollSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_SETTINGS_MANAGE)),
):
    """
    Update off-days and/or holidays (ADMIN/OWNER).
    Omitted fields are kept; a holidays list replaces all stored holidays.
    """
    holidays = None
    if body.holidays is not None:
        holidays = [Holiday(date=h.date, label=h.label) for h in body.holidays]
    updated = update_payroll_settings(
        db,
        off_days=body.off_days,
        holidays=holidays,
        actor_id=current_user.id,
    )
    return PayrollSettingsOut.model_validate(updated, from_attributes=True)
