"""
Daily accrual classifier: one day's attendance -> paid-day contribution.
"""
from typing import Optional

from attendance_payroll.engine.records import AttendanceDay, AttendanceStatus

FULL_DAY = 1.0
HALF_DAY = 0.5
UNPAID = 0.0

_FULL_DAY_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.CHECKED_OUT)


def classify(record: Optional[AttendanceDay], is_working_day: bool) -> float:
    """
    Rules, first match wins:
    1. half-day status or flag -> 0.5
    2. present / checked-out -> 1.0
    3. no record on an off-day or holiday -> 1.0
    4. otherwise -> 0

    A record on a non-working day is classified by its status, never by the calendar.
    """
    if record is not None:
        if record.status == AttendanceStatus.HALF_DAY or record.is_half_day:
            return HALF_DAY
        if record.status in _FULL_DAY_STATUSES:
            return FULL_DAY
        return UNPAID
    if not is_working_day:
        return FULL_DAY
    return UNPAID
