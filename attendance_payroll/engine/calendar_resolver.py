"""
Calendar resolver: splits a month into working and non-working days from the
configured weekly off-days and named holidays.
"""
import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Tuple, Union

from attendance_payroll.core.constants import DEFAULT_OFF_DAYS
from attendance_payroll.core.exceptions import InvalidCalendarInput


@dataclass(frozen=True)
class Holiday:
    date: date
    label: str = ""


@dataclass(frozen=True)
class PayrollSettings:
    """Weekly off-days (0=Sunday..6=Saturday) and holidays for one payroll run"""

    off_days: Tuple[int, ...] = DEFAULT_OFF_DAYS
    holidays: Tuple[Holiday, ...] = field(default_factory=tuple)

    @classmethod
    def default(cls) -> "PayrollSettings":
        return cls()

    @classmethod
    def build(
        cls,
        off_days: Optional[Iterable[int]] = None,
        holidays: Optional[Iterable[Union[Holiday, dict]]] = None,
    ) -> "PayrollSettings":
        """Build settings from loose input (lists, dicts with ISO date strings)."""
        parsed = []
        for h in holidays or ():
            if isinstance(h, Holiday):
                parsed.append(h)
                continue
            raw = h["date"]
            parsed.append(Holiday(
                date=raw if isinstance(raw, date) else date.fromisoformat(str(raw)),
                label=h.get("label") or "",
            ))
        return cls(
            off_days=tuple(DEFAULT_OFF_DAYS if off_days is None else sorted(set(off_days))),
            holidays=tuple(sorted(parsed, key=lambda x: x.date)),
        )

    def holiday_label(self, day: date) -> Optional[str]:
        iso = day.isoformat()
        for h in self.holidays:
            if h.date.isoformat() == iso:
                return h.label
        return None


@dataclass(frozen=True)
class CalendarDay:
    day: int
    date: date
    weekday: int  # 0=Sunday..6=Saturday
    is_off_day: bool
    holiday_label: Optional[str]

    @property
    def is_holiday(self) -> bool:
        return self.holiday_label is not None

    @property
    def is_working_day(self) -> bool:
        return not (self.is_off_day or self.is_holiday)


def weekday_index(day: date) -> int:
    """Sunday-based weekday index (0=Sunday..6=Saturday)"""
    return day.isoweekday() % 7


def _validate(year, month) -> None:
    for name, value in (("year", year), ("month", month)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidCalendarInput(f"{name} must be an integer, got {value!r}")
    if not 1 <= year <= 9999:
        raise InvalidCalendarInput(f"Invalid year: {year}")
    if not 1 <= month <= 12:
        raise InvalidCalendarInput(f"Invalid month: {month}. Must be between 1 and 12.")


def days_in_month(year: int, month: int) -> int:
    _validate(year, month)
    return calendar.monthrange(year, month)[1]


def resolve_calendar(year: int, month: int, settings: Optional[PayrollSettings] = None) -> List[CalendarDay]:
    """
    Resolve every day of a month into working / non-working

    Args:
        year: Calendar year
        month: Month number, 1=January..12=December
        settings: Off-days and holidays; None falls back to PayrollSettings.default()

    Returns:
        One CalendarDay per day 1..days_in_month, in order

    Raises:
        InvalidCalendarInput: If year or month is invalid
    """
    settings = settings or PayrollSettings.default()
    off_days = set(settings.off_days)
    total = days_in_month(year, month)

    days = []
    for d in range(1, total + 1):
        current = date(year, month, d)
        weekday = weekday_index(current)
        days.append(CalendarDay(
            day=d,
            date=current,
            weekday=weekday,
            is_off_day=weekday in off_days,
            holiday_label=settings.holiday_label(current),
        ))
    return days


def count_working_days(days: Iterable[CalendarDay]) -> int:
    return sum(1 for d in days if d.is_working_day)
