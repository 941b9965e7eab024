"""
Attendance service: check-in / break / check-out / admin manual set.

Each transition is one read-modify-write on the (employee_id, work_date) row inside
a single transaction: the row is read FOR UPDATE, the pure shift state machine
computes the new snapshot, and the snapshot is written back. Work dates are the
reference-timezone date of `now`; timestamps are stored in UTC.
"""
import logging
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from attendance_payroll.core.config import settings
from attendance_payroll.core.exceptions import (
    AlreadyCheckedIn,
    AttendanceError,
    EmployeeNotFound,
    InvalidCalendarInput,
    InvalidPeriod,
)
from attendance_payroll.engine import shift
from attendance_payroll.engine.calendar_resolver import days_in_month
from attendance_payroll.engine.records import AttendanceDay, AttendanceStatus, BreakPeriod
from attendance_payroll.models.attendance import AttendanceBreak, AttendanceRecord
from attendance_payroll.models.employee import Employee
from attendance_payroll.services.audit_service import log_audit
from attendance_payroll.utils.datetime_utils import (
    day_start_utc,
    ensure_utc,
    now_utc,
    work_date_for,
)

_log = logging.getLogger(__name__)


# --- ORM <-> engine snapshot mapping ---


def to_domain(row: AttendanceRecord) -> AttendanceDay:
    """Snapshot of a stored row. SQLite returns naive datetimes, so everything goes through ensure_utc."""
    return AttendanceDay(
        employee_id=row.employee_id,
        work_date=row.work_date,
        status=AttendanceStatus(row.status),
        check_in=ensure_utc(row.check_in_at),
        check_out=ensure_utc(row.check_out_at),
        breaks=tuple(
            BreakPeriod(start=ensure_utc(b.start_at), end=ensure_utc(b.end_at))
            for b in row.breaks
        ),
        total_break_time=row.total_break_time or 0,
        total_work_time=row.total_work_time or 0,
        is_half_day=bool(row.is_half_day),
        note=row.note,
    )


def _apply(row: AttendanceRecord, day: AttendanceDay) -> AttendanceRecord:
    row.employee_id = day.employee_id
    row.work_date = day.work_date
    row.status = day.status
    row.check_in_at = day.check_in
    row.check_out_at = day.check_out
    row.total_break_time = day.total_break_time
    row.total_work_time = day.total_work_time
    row.is_half_day = day.is_half_day
    row.note = day.note

    # breaks are append-only; only the last one can change (closing it)
    existing = list(row.breaks)
    for stored, period in zip(existing, day.breaks):
        stored.end_at = period.end
    for period in day.breaks[len(existing):]:
        row.breaks.append(AttendanceBreak(start_at=period.start, end_at=period.end))
    return row


def _load_for_update(db: Session, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.employee_id == employee_id,
            AttendanceRecord.work_date == work_date,
        )
        .with_for_update()
        .first()
    )


# --- Employee transitions ---


def check_in(db: Session, employee_id: int, now: Optional[datetime] = None) -> AttendanceRecord:
    """
    Create today's record with check-in = now.

    A duplicate (including a concurrent one losing the unique-constraint race)
    raises AlreadyCheckedIn and leaves the stored record untouched.
    """
    now = ensure_utc(now) or now_utc()
    work_date = work_date_for(now)

    existing = _load_for_update(db, employee_id, work_date)
    try:
        day = shift.check_in(to_domain(existing) if existing else None, employee_id, work_date, now)
    except AttendanceError:
        db.rollback()
        raise

    row = _apply(AttendanceRecord(), day)
    db.add(row)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        _log.info("check_in lost unique race: employee_id=%s work_date=%s", employee_id, work_date)
        raise AlreadyCheckedIn()

    log_audit(
        db=db,
        actor_id=employee_id,
        action="ATTENDANCE_CHECK_IN",
        entity_type="attendance_records",
        entity_id=row.id,
        meta={"work_date": work_date, "check_in_at": now},
        commit=False,
    )
    db.commit()
    db.refresh(row)
    _log.info("check_in: employee_id=%s work_date=%s", employee_id, work_date)
    return row


def _transition(
    db: Session,
    employee_id: int,
    now: Optional[datetime],
    step: Callable[[Optional[AttendanceDay], datetime], AttendanceDay],
    action: str,
) -> AttendanceRecord:
    now = ensure_utc(now) or now_utc()
    work_date = work_date_for(now)

    row = _load_for_update(db, employee_id, work_date)
    try:
        day = step(to_domain(row) if row else None, now)
    except AttendanceError as exc:
        db.rollback()
        _log.debug("%s rejected: employee_id=%s reason=%s", action, employee_id, exc.code)
        raise

    _apply(row, day)
    log_audit(
        db=db,
        actor_id=employee_id,
        action=action,
        entity_type="attendance_records",
        entity_id=row.id,
        meta={"work_date": work_date, "at": now, "status": day.status},
        commit=False,
    )
    db.commit()
    db.refresh(row)
    _log.info("%s: employee_id=%s work_date=%s status=%s", action, employee_id, work_date, day.status.value)
    return row


def start_break(db: Session, employee_id: int, now: Optional[datetime] = None) -> AttendanceRecord:
    return _transition(db, employee_id, now, shift.start_break, "ATTENDANCE_BREAK_START")


def end_break(db: Session, employee_id: int, now: Optional[datetime] = None) -> AttendanceRecord:
    return _transition(db, employee_id, now, shift.end_break, "ATTENDANCE_BREAK_END")


def check_out(db: Session, employee_id: int, now: Optional[datetime] = None) -> AttendanceRecord:
    threshold = settings.HALF_DAY_THRESHOLD_MINUTES
    return _transition(
        db,
        employee_id,
        now,
        lambda record, at: shift.check_out(record, at, half_day_threshold=threshold),
        "ATTENDANCE_CHECK_OUT",
    )


# --- Admin manual override ---


def manual_set(
    db: Session,
    actor_id: int,
    employee_id: int,
    work_date: date,
    status: AttendanceStatus,
    note: Optional[str] = None,
) -> AttendanceRecord:
    """
    Idempotent upsert of (employee_id, work_date) to the given status.

    Internally tagged CREATE or UPDATE; a CREATE that collides with a concurrent
    writer is retried once as an UPDATE.
    """
    if db.query(Employee.id).filter(Employee.id == employee_id).first() is None:
        raise EmployeeNotFound(f"Employee with id {employee_id} not found")

    for attempt in (1, 2):
        existing = _load_for_update(db, employee_id, work_date)
        change = shift.manual_set(
            to_domain(existing) if existing else None,
            employee_id,
            work_date,
            status,
            day_start=day_start_utc(work_date),
            note=note,
        )
        if change.kind == shift.ManualChangeKind.UPDATE:
            row = _apply(existing, change.record)
            break
        row = _apply(AttendanceRecord(), change.record)
        db.add(row)
        try:
            db.flush()
            break
        except IntegrityError:
            db.rollback()
            if attempt == 2:
                raise
            _log.info("manual_set create collided, retrying as update: employee_id=%s", employee_id)

    log_audit(
        db=db,
        actor_id=actor_id,
        action="ATTENDANCE_MANUAL_SET",
        entity_type="attendance_records",
        entity_id=row.id,
        meta={
            "employee_id": employee_id,
            "work_date": work_date,
            "status": change.record.status,
            "kind": change.kind,
        },
        commit=False,
    )
    db.commit()
    db.refresh(row)
    _log.info(
        "manual_set(%s): actor_id=%s employee_id=%s work_date=%s status=%s",
        change.kind.value, actor_id, employee_id, work_date, change.record.status.value,
    )
    return row


# --- Reads ---


def get_today(db: Session, employee_id: int, now: Optional[datetime] = None) -> Optional[AttendanceRecord]:
    """Today's record (reference-timezone date) or None."""
    return (
        db.query(AttendanceRecord)
        .filter(
            AttendanceRecord.employee_id == employee_id,
            AttendanceRecord.work_date == work_date_for(now),
        )
        .first()
    )


def get_history(db: Session, employee_id: int, limit: Optional[int] = None) -> List[AttendanceRecord]:
    """Most recent records first, at most `limit` (default settings.HISTORY_LIMIT)."""
    return (
        db.query(AttendanceRecord)
        .options(selectinload(AttendanceRecord.breaks))
        .filter(AttendanceRecord.employee_id == employee_id)
        .order_by(AttendanceRecord.work_date.desc())
        .limit(limit or settings.HISTORY_LIMIT)
        .all()
    )


def month_bounds(year: int, month: int) -> tuple:
    try:
        last = days_in_month(year, month)
    except InvalidCalendarInput as exc:
        raise InvalidPeriod(exc.detail) from exc
    return date(year, month, 1), date(year, month, last)


def list_month(
    db: Session,
    year: int,
    month: int,
    employee_ids: Optional[Iterable[int]] = None,
) -> List[AttendanceRecord]:
    """All records dated within the month, optionally limited to some employees."""
    start, end = month_bounds(year, month)
    query = (
        db.query(AttendanceRecord)
        .options(selectinload(AttendanceRecord.breaks))
        .filter(
            AttendanceRecord.work_date >= start,
            AttendanceRecord.work_date <= end,
        )
    )
    if employee_ids is not None:
        ids = list(employee_ids)
        if not ids:
            return []
        query = query.filter(AttendanceRecord.employee_id.in_(ids))
    return query.order_by(AttendanceRecord.work_date, AttendanceRecord.employee_id).all()


def snapshots_by_employee(rows: Iterable[AttendanceRecord]) -> Dict[int, List[AttendanceDay]]:
    grouped: Dict[int, List[AttendanceDay]] = {}
    for row in rows:
        grouped.setdefault(row.employee_id, []).append(to_domain(row))
    return grouped
