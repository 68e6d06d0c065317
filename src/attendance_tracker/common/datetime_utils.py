from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.constants import CLOCK_FORMAT, DATE_FORMAT, MISSING_TIME
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from exc


def parse_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid month: {value!r} (expected YYYY-MM)") from exc


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so the value matches a DATETIME(3) column."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def month_bounds(reference: date) -> tuple[date, date]:
    """First and last calendar day of the month containing ``reference``."""
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def trailing_days(reference: date, count: int) -> list[date]:
    """The last ``count`` calendar days ending at ``reference``, oldest first."""
    return [reference - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def format_clock(value: Optional[datetime]) -> str:
    return value.strftime(CLOCK_FORMAT) if value else MISSING_TIME
