"""
Timezone-aware datetime helpers.
- Store and compute in UTC in DB.
- Work dates and API responses use the reference timezone (settings.REFERENCE_TZ).
"""
from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from attendance_payroll.core.config import settings

UTC = timezone.utc


def reference_tz() -> ZoneInfo:
    return settings.reference_tz


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware). Use for check-in/out and break timestamps."""
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """If dt is naive, treat as UTC and return timezone-aware UTC. If already aware, convert to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    else:
        dt = dt.astimezone(UTC)
    return dt


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to the reference timezone. Naive datetimes are treated as UTC before converting."""
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(reference_tz())


def iso_local(dt: Optional[datetime]) -> Optional[str]:
    """Serialize as ISO-8601 with the reference timezone offset. Use for API response datetime fields."""
    if dt is None:
        return None
    return to_local(dt).isoformat()


def work_date_for(now: Optional[datetime] = None) -> date:
    """Calendar date of `now` in the reference timezone (midnight-normalized work date)."""
    return to_local(now or now_utc()).date()


def day_start_utc(work_date: date) -> datetime:
    """Midnight of work_date in the reference timezone, as a UTC timestamp."""
    return datetime.combine(work_date, time.min, tzinfo=reference_tz()).astimezone(UTC)


def current_period(now: Optional[datetime] = None) -> tuple:
    """(year, month) of `now` in the reference timezone."""
    today = work_date_for(now)
    return today.year, today.month


def resolve_period(year: Optional[int], month: Optional[int]) -> tuple:
    """Fill a missing year or month from the current period. Explicit values pass through unchecked."""
    current_year, current_month = current_period()
    return (
        current_year if year is None else year,
        current_month if month is None else month,
    )
