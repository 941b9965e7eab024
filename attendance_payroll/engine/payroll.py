"""
Monthly payroll aggregator.

Drives the accrual classifier once per day of the month for one employee and
prorates the base salary by paid days. Pure: works on already-fetched records.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional

from attendance_payroll.core.exceptions import (
    EmployeeNotFound,
    InvalidCalendarInput,
    InvalidPeriod,
)
from attendance_payroll.engine.accrual import FULL_DAY, HALF_DAY, classify
from attendance_payroll.engine.calendar_resolver import (
    PayrollSettings,
    count_working_days,
    resolve_calendar,
)
from attendance_payroll.engine.records import AttendanceDay, AttendanceStatus


@dataclass(frozen=True)
class DailyAccrual:
    day: int
    date: date
    is_working_day: bool
    status: Optional[AttendanceStatus]
    contribution: float


@dataclass
class PayrollStats:
    present: int = 0
    half_day: int = 0
    absent: int = 0
    paid_days: float = 0.0


@dataclass
class PayrollResult:
    employee_id: Any
    year: int
    month: int
    paid_days: float
    calculated_salary: int
    working_days: int
    days_in_month: int
    base_salary: Decimal
    stats: PayrollStats
    daily: List[DailyAccrual] = field(default_factory=list)
    name: Optional[str] = None


def _base_salary(employee) -> Decimal:
    raw = getattr(employee, "salary", None)
    if raw is None or raw == "":
        return Decimal("0")
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        return Decimal("0")
    return value if value.is_finite() else Decimal("0")


def _resolve_period(year, month, settings: Optional[PayrollSettings]) -> List:
    if year is None or month is None:
        raise InvalidPeriod("year and month are required")
    try:
        return resolve_calendar(year, month, settings)
    except InvalidCalendarInput as exc:
        raise InvalidPeriod(exc.detail) from exc


def _check_override(working_days_override) -> None:
    if working_days_override is not None and (
        isinstance(working_days_override, bool)
        or not isinstance(working_days_override, int)
        or working_days_override < 0
    ):
        raise InvalidPeriod(f"Invalid working days override: {working_days_override!r}")


def prorate_salary(base_salary: Decimal, days_in_month: int, paid_days: float) -> int:
    """round(base / days_in_month * paid_days), halves rounded up"""
    # multiply before dividing; base / days_in_month rarely terminates
    amount = Decimal(base_salary) * Decimal(str(paid_days)) / Decimal(days_in_month)
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_payroll(
    employee,
    year: int,
    month: int,
    records: Iterable[AttendanceDay],
    settings: Optional[PayrollSettings] = None,
    working_days_override: Optional[int] = None,
) -> PayrollResult:
    """
    Compute one employee's payroll line for a month

    Args:
        employee: Object with id, salary and optionally name
        year: Calendar year
        month: Month number 1..12
        records: Attendance records of this employee; records outside the month are ignored
        settings: Off-days and holidays (None -> defaults)
        working_days_override: Reported instead of the computed working-day count

    Returns:
        PayrollResult. The salary divisor is always days_in_month.

    Raises:
        EmployeeNotFound: If employee is None
        InvalidPeriod: If year or month is missing or invalid
    """
    if employee is None:
        raise EmployeeNotFound()
    calendar_days = _resolve_period(year, month, settings)
    _check_override(working_days_override)

    by_date: Dict[date, AttendanceDay] = {}
    for record in records:
        if record.work_date.year == year and record.work_date.month == month:
            by_date.setdefault(record.work_date, record)

    stats = PayrollStats()
    daily = []
    paid_days = 0.0
    for cal_day in calendar_days:
        record = by_date.get(cal_day.date)
        contribution = classify(record, cal_day.is_working_day)
        paid_days += contribution

        if record is not None and contribution == HALF_DAY:
            stats.half_day += 1
        elif record is not None and contribution == FULL_DAY:
            stats.present += 1
        elif contribution == 0 and cal_day.is_working_day:
            stats.absent += 1

        daily.append(DailyAccrual(
            day=cal_day.day,
            date=cal_day.date,
            is_working_day=cal_day.is_working_day,
            status=record.status if record is not None else None,
            contribution=contribution,
        ))
    stats.paid_days = paid_days

    total_days = len(calendar_days)
    base_salary = _base_salary(employee)
    working_days = (
        working_days_override if working_days_override is not None
        else count_working_days(calendar_days)
    )

    return PayrollResult(
        employee_id=employee.id,
        year=year,
        month=month,
        paid_days=paid_days,
        calculated_salary=prorate_salary(base_salary, total_days, paid_days),
        working_days=working_days,
        days_in_month=total_days,
        base_salary=base_salary,
        stats=stats,
        daily=daily,
        name=getattr(employee, "name", None),
    )


def compute_payroll_batch(
    employees: Iterable,
    year: int,
    month: int,
    records_by_employee: Mapping[Any, Iterable[AttendanceDay]],
    settings: Optional[PayrollSettings] = None,
    working_days_override: Optional[int] = None,
) -> List[PayrollResult]:
    """One independent compute_payroll per employee; settings are shared read-only."""
    # an empty batch still rejects a bad period or override
    _resolve_period(year, month, settings)
    _check_override(working_days_override)
    return [
        compute_payroll(
            employee,
            year,
            month,
            records_by_employee.get(employee.id, ()),
            settings,
            working_days_override,
        )
        for employee in employees
    ]
