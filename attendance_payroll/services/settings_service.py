"""
Payroll settings service: weekly off-days and holidays.

A missing settings row is not an error; callers get PayrollSettings.default()
(Sunday off, no holidays).
"""
import logging
from typing import Iterable, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from attendance_payroll.core.constants import DEFAULT_OFF_DAYS, SETTINGS_KEY
from attendance_payroll.engine.calendar_resolver import Holiday, PayrollSettings
from attendance_payroll.models.payroll_setting import PayrollHoliday, PayrollSetting
from attendance_payroll.services.audit_service import log_audit

_log = logging.getLogger(__name__)


def get_payroll_settings(db: Session) -> PayrollSettings:
    """Load the active payroll settings (defaults when nothing is stored)"""
    row = db.query(PayrollSetting).filter(PayrollSetting.key == SETTINGS_KEY).first()
    holidays = db.query(PayrollHoliday).order_by(PayrollHoliday.date).all()
    return PayrollSettings.build(
        off_days=row.off_days if row is not None and row.off_days is not None else DEFAULT_OFF_DAYS,
        holidays=[Holiday(date=h.date, label=h.label or "") for h in holidays],
    )


def _validate_off_days(off_days: Iterable[int]) -> list:
    cleaned = []
    for d in off_days:
        if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 6:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid off day {d!r}: use weekday index 0 (Sunday) to 6 (Saturday)",
            )
        cleaned.append(d)
    return sorted(set(cleaned))


def update_payroll_settings(
    db: Session,
    off_days: Optional[Iterable[int]] = None,
    holidays: Optional[Iterable[Holiday]] = None,
    actor_id: Optional[int] = None,
) -> PayrollSettings:
    """
    Merge-update payroll settings

    Args:
        db: Database session
        off_days: Replaces the stored off-days when given
        holidays: Replaces the whole holiday list when given
        actor_id: Employee performing the update (audited)

    Returns:
        The settings now in effect

    Raises:
        HTTPException: If an off-day index is out of range or a holiday date is duplicated
    """
    if off_days is not None:
        off_days = _validate_off_days(off_days)
    if holidays is not None:
        holidays = list(holidays)
        seen = set()
        for h in holidays:
            if h.date in seen:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Duplicate holiday date {h.date}",
                )
            seen.add(h.date)

    row = db.query(PayrollSetting).filter(PayrollSetting.key == SETTINGS_KEY).first()
    if row is None:
        row = PayrollSetting(key=SETTINGS_KEY, off_days=list(DEFAULT_OFF_DAYS))
        db.add(row)

    meta = {}
    if off_days is not None:
        row.off_days = off_days
        meta["off_days"] = off_days

    if holidays is not None:
        db.query(PayrollHoliday).delete(synchronize_session=False)
        for h in holidays:
            db.add(PayrollHoliday(date=h.date, label=h.label or ""))
        meta["holidays"] = [{"date": h.date, "label": h.label} for h in holidays]

    row.updated_by = actor_id
    db.flush()
    if actor_id:
        log_audit(
            db=db,
            actor_id=actor_id,
            action="PAYROLL_SETTINGS_UPDATE",
            entity_type="payroll_settings",
            entity_id=row.id,
            meta=meta,
            commit=False,
        )
    db.commit()
    _log.info("payroll settings updated: actor_id=%s keys=%s", actor_id, sorted(meta))
    return get_payroll_settings(db)
