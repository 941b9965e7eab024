"""
Plain attendance record types shared by the shift state machine, the accrual
classifier and the payroll aggregator. No storage or transport concerns here.
"""
import enum
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional, Tuple


class AttendanceStatus(str, enum.Enum):
    ABSENT = "absent"
    PRESENT = "present"
    ON_BREAK = "on-break"
    CHECKED_OUT = "checked-out"
    HALF_DAY = "half-day"


@dataclass(frozen=True)
class BreakPeriod:
    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class AttendanceDay:
    """One employee's attendance for one work date (immutable snapshot)."""

    employee_id: int
    work_date: date
    status: AttendanceStatus = AttendanceStatus.PRESENT
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    breaks: Tuple[BreakPeriod, ...] = field(default_factory=tuple)
    total_break_time: int = 0  # minutes
    total_work_time: int = 0  # minutes
    is_half_day: bool = False
    note: Optional[str] = None

    @property
    def open_break(self) -> Optional[BreakPeriod]:
        for period in self.breaks:
            if period.is_open:
                return period
        return None

    def evolve(self, **changes) -> "AttendanceDay":
        return replace(self, **changes)


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two timestamps, floored."""
    return int((end - start).total_seconds() // 60)
