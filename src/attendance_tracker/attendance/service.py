from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iter_days, month_bounds, now_local, to_millis
from ..core.constants import CHECKIN_STATUS, DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import IntegrityViolation, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .derivation import MonthlyStats, monthly_stat_rollup, status_for_date, worked_hours
from .model import AttendanceRecord, AttendanceWithProfile, validate_record
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeDashboard:
    today: Optional[AttendanceRecord]
    monthly: MonthlyStats
    recent: list[AttendanceRecord] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarDay:
    day: date
    record: Optional[AttendanceRecord] = None


@dataclass(frozen=True)
class MonthHistory:
    month_start: date
    days: list[CalendarDay]


class AttendanceService:
    """Use cases for a single employee's attendance plus the manager's daily roster."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._attendance = attendance
        self._employees = employees
        self._history_limit = int(history_limit)

    def get_today_record(self, user_id: str, today: date) -> Optional[AttendanceRecord]:
        return status_for_date(self._attendance.fetch_records(user_id=user_id, on_date=today), today)

    def check_in(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = to_millis(now or now_local())
        today = now.date()

        if not self._employees.get_by_id(user_id):
            raise ValidationError(f"Unknown employee: {user_id}")

        if self.get_today_record(user_id, today):
            logger.warning("Rejected second check-in for user %s on %s", user_id, today)
            raise IntegrityViolation("Already checked in today")

        record = self._attendance.create_record(
            user_id=user_id,
            work_date=today,
            check_in_time=now,
            status=CHECKIN_STATUS,
        )
        logger.info("User %s checked in at %s", user_id, now.isoformat())
        return record

    def check_out(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = to_millis(now or now_local())
        today = now.date()

        record = self.get_today_record(user_id, today)
        if not record:
            raise NotFoundError("No check-in found for today")
        if record.is_checked_out:
            logger.warning("Rejected second check-out for user %s on %s", user_id, today)
            raise IntegrityViolation("Already checked out today")
        if not record.is_checked_in:
            raise IntegrityViolation(f"Record {record.id} has no check-in time")

        hours = worked_hours(record.check_in_time, now)
        updated = self._attendance.update_record(record.id, check_out_time=now, total_hours=hours)
        logger.info("User %s checked out at %s (%s h)", user_id, now.isoformat(), hours)
        return validate_record(updated)

    def employee_dashboard(self, user_id: str, today: date) -> EmployeeDashboard:
        """Today's record, this month's stats and recent history, derived from one month fetch."""
        start, end = month_bounds(today)
        month_records = self._attendance.fetch_records(user_id=user_id, start_date=start, end_date=end)
        recent = self._attendance.get_recent_for_user(user_id, self._history_limit)
        return EmployeeDashboard(
            today=status_for_date(month_records, today),
            monthly=monthly_stat_rollup(month_records, today),
            recent=list(recent),
        )

    def month_history(self, user_id: str, month: date) -> MonthHistory:
        start, end = month_bounds(month)
        records = self._attendance.fetch_records(user_id=user_id, start_date=start, end_date=end)
        return MonthHistory(
            month_start=start,
            days=[CalendarDay(day=d, record=status_for_date(records, d)) for d in iter_days(start, end)],
        )

    def daily_roster(
        self,
        on_date: date,
        *,
        search: str = "",
        status: Optional[AttendanceStatus] = None,
    ) -> list[AttendanceWithProfile]:
        """Everyone's records for a day, latest check-in first, filtered by text and status."""
        rows = self._attendance.fetch_records_with_profile(on_date=on_date)

        needle = (search or "").strip().lower()
        if needle:
            rows = [
                r
                for r in rows
                if needle in r.employee.name.lower()
                or needle in r.employee.employee_id.lower()
                or needle in r.employee.department.lower()
            ]
        if status is not None:
            rows = [r for r in rows if r.record.status == status]

        # Records without a check-in time sort last.
        return sorted(
            rows,
            key=lambda r: (r.record.check_in_time is not None, r.record.check_in_time or datetime.min),
            reverse=True,
        )
