"""Pure derivations over already-fetched attendance records.

Nothing here reads the clock or the store: callers pass the records and a
reference date, so every result is reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds, trailing_days
from ..core.constants import DEFAULT_TREND_DAYS, WEEKDAY_FORMAT
from ..core.enums import AttendanceStatus
from ..core.exceptions import IntegrityViolation
from .model import AttendanceRecord

_MS_PER_HOUR = Decimal(3_600_000)
_HUNDREDTHS = Decimal("0.01")


@dataclass(frozen=True)
class MonthlyStats:
    present: int = 0
    absent: int = 0
    late: int = 0
    total_hours: Decimal = Decimal("0")


@dataclass(frozen=True)
class TrendPoint:
    day: date
    label: str
    present: int
    absent: int
    late: int


def worked_hours(check_in: datetime, check_out: datetime) -> Decimal:
    """Hours between two timestamps, at millisecond precision, rounded half-up to 2 places."""
    if check_out < check_in:
        raise IntegrityViolation(f"Check-out {check_out.isoformat()} is earlier than check-in {check_in.isoformat()}")
    millis = (check_out - check_in) // timedelta(milliseconds=1)
    return (Decimal(millis) / _MS_PER_HOUR).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP)


def status_for_date(records: Iterable[AttendanceRecord], on_date: date) -> Optional[AttendanceRecord]:
    """The record for ``on_date``, or None when the employee has no record (absent).

    If the store ever returns two records for the same day, the first one in
    arrival order wins.
    """
    return next((r for r in records if r.work_date == on_date), None)


def count_statuses(records: Iterable[AttendanceRecord]) -> dict[AttendanceStatus, int]:
    counts = {status: 0 for status in AttendanceStatus}
    for r in records:
        counts[r.status] += 1
    return counts


def monthly_stat_rollup(records: Iterable[AttendanceRecord], reference_date: date) -> MonthlyStats:
    """Status counts and hours for the calendar month containing ``reference_date``.

    ``absent`` only counts records explicitly stored as absent; days with no
    record at all are not part of this rollup.
    """
    start, end = month_bounds(reference_date)
    in_month = [r for r in records if start <= r.work_date <= end]
    counts = count_statuses(in_month)
    return MonthlyStats(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        total_hours=sum((r.hours_or_zero() for r in in_month), Decimal("0")),
    )


def weekly_trend_rollup(
    records: Sequence[AttendanceRecord],
    reference_date: date,
    days: int = DEFAULT_TREND_DAYS,
) -> list[TrendPoint]:
    """Per-day present/absent/late counts for the ``days`` days ending at ``reference_date``, oldest first."""
    if days < 1:
        raise ValueError("days must be at least 1")

    points: list[TrendPoint] = []
    for day in trailing_days(reference_date, days):
        counts = count_statuses(r for r in records if r.work_date == day)
        points.append(
            TrendPoint(
                day=day,
                label=day.strftime(WEEKDAY_FORMAT),
                present=counts[AttendanceStatus.PRESENT],
                absent=counts[AttendanceStatus.ABSENT],
                late=counts[AttendanceStatus.LATE],
            )
        )
    return points
