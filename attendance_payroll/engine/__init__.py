"""
Attendance & payroll accrual engine (pure, storage-agnostic)
"""
from attendance_payroll.engine.records import (
    AttendanceDay,
    AttendanceStatus,
    BreakPeriod,
)
from attendance_payroll.engine.calendar_resolver import (
    CalendarDay,
    Holiday,
    PayrollSettings,
    count_working_days,
    days_in_month,
    resolve_calendar,
)
from attendance_payroll.engine.shift import (
    HALF_DAY_THRESHOLD_MINUTES,
    ManualChange,
    ManualChangeKind,
    check_in,
    check_out,
    end_break,
    manual_set,
    start_break,
)
from attendance_payroll.engine.accrual import classify
from attendance_payroll.engine.payroll import (
    DailyAccrual,
    PayrollResult,
    PayrollStats,
    compute_payroll,
    compute_payroll_batch,
)

__all__ = [
    "AttendanceDay",
    "AttendanceStatus",
    "BreakPeriod",
    "CalendarDay",
    "Holiday",
    "PayrollSettings",
    "count_working_days",
    "days_in_month",
    "resolve_calendar",
    "HALF_DAY_THRESHOLD_MINUTES",
    "ManualChange",
    "ManualChangeKind",
    "check_in",
    "check_out",
    "end_break",
    "manual_set",
    "start_break",
    "classify",
    "DailyAccrual",
    "PayrollResult",
    "PayrollStats",
    "compute_payroll",
    "compute_payroll_batch",
]
