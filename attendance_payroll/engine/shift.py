"""
Shift state machine for one employee's attendance on one work date.

    absent -> present -> on-break <-> present -> checked-out | half-day

Every transition takes the current snapshot (or None) and returns a new one;
a rejected transition raises and leaves its input untouched.
"""
import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from attendance_payroll.core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    AlreadyOnBreak,
    NotCheckedIn,
    NotOnBreak,
    OnBreakCannotCheckOut,
)
from attendance_payroll.engine.records import (
    AttendanceDay,
    AttendanceStatus,
    BreakPeriod,
    elapsed_minutes,
)

HALF_DAY_THRESHOLD_MINUTES = 240

_SHIFT_ENDED = (AttendanceStatus.CHECKED_OUT, AttendanceStatus.HALF_DAY)


def check_in(
    existing: Optional[AttendanceDay],
    employee_id: int,
    work_date: date,
    now: datetime,
) -> AttendanceDay:
    if existing is not None:
        raise AlreadyCheckedIn()
    return AttendanceDay(
        employee_id=employee_id,
        work_date=work_date,
        status=AttendanceStatus.PRESENT,
        check_in=now,
    )


def start_break(record: Optional[AttendanceDay], now: datetime) -> AttendanceDay:
    if record is None or record.check_in is None or record.status == AttendanceStatus.ABSENT:
        raise NotCheckedIn()
    if record.status == AttendanceStatus.ON_BREAK:
        raise AlreadyOnBreak()
    if record.check_out is not None or record.status in _SHIFT_ENDED:
        raise AlreadyCheckedOut()
    return record.evolve(
        breaks=record.breaks + (BreakPeriod(start=now),),
        status=AttendanceStatus.ON_BREAK,
    )


def end_break(record: Optional[AttendanceDay], now: datetime) -> AttendanceDay:
    if record is None or record.status != AttendanceStatus.ON_BREAK:
        raise NotOnBreak()

    breaks = list(record.breaks)
    added = 0
    for i in range(len(breaks) - 1, -1, -1):
        if breaks[i].is_open:
            breaks[i] = BreakPeriod(start=breaks[i].start, end=now)
            added = elapsed_minutes(breaks[i].start, now)
            break

    return record.evolve(
        breaks=tuple(breaks),
        total_break_time=record.total_break_time + added,
        status=AttendanceStatus.PRESENT,
    )


def check_out(
    record: Optional[AttendanceDay],
    now: datetime,
    half_day_threshold: int = HALF_DAY_THRESHOLD_MINUTES,
) -> AttendanceDay:
    if record is None:
        raise NotCheckedIn()
    if record.check_out is not None or record.status in _SHIFT_ENDED:
        raise AlreadyCheckedOut()
    if record.status == AttendanceStatus.ON_BREAK or record.open_break is not None:
        raise OnBreakCannotCheckOut()
    if record.check_in is None or record.status != AttendanceStatus.PRESENT:
        raise NotCheckedIn()

    total_work_time = elapsed_minutes(record.check_in, now) - record.total_break_time
    # strict: exactly the threshold is a full day
    half_day = total_work_time < half_day_threshold
    return record.evolve(
        check_out=now,
        total_work_time=total_work_time,
        is_half_day=half_day,
        status=AttendanceStatus.HALF_DAY if half_day else AttendanceStatus.CHECKED_OUT,
    )


class ManualChangeKind(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"


@dataclass(frozen=True)
class ManualChange:
    kind: ManualChangeKind
    record: AttendanceDay


_SYNTHESIZED_CHECK_OUT = (
    AttendanceStatus.PRESENT,
    AttendanceStatus.CHECKED_OUT,
    AttendanceStatus.HALF_DAY,
)


def manual_set(
    existing: Optional[AttendanceDay],
    employee_id: int,
    work_date: date,
    status: AttendanceStatus,
    day_start: datetime,
    note: Optional[str] = None,
) -> ManualChange:
    """
    Admin override: force a status for (employee, work_date).

    Updates only status/is_half_day on an existing record. A new record gets
    check-in (and, for finished statuses, check-out) stamped at day_start,
    the midnight of work_date in the reference timezone.
    """
    status = AttendanceStatus(status)
    is_half_day = status == AttendanceStatus.HALF_DAY

    if existing is not None:
        changes = {"status": status, "is_half_day": is_half_day}
        if note is not None:
            changes["note"] = note
        return ManualChange(ManualChangeKind.UPDATE, existing.evolve(**changes))

    not_absent = status != AttendanceStatus.ABSENT
    return ManualChange(
        ManualChangeKind.CREATE,
        AttendanceDay(
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            check_in=day_start if not_absent else None,
            check_out=day_start if status in _SYNTHESIZED_CHECK_OUT else None,
            is_half_day=is_half_day,
            note=note,
        ),
    )
