from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from ..attendance.derivation import TrendPoint, weekly_trend_rollup
from ..attendance.reconciler import RosterReconciliation, reconcile_roster
from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_TREND_DAYS
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManagerDashboard:
    day: date
    reconciliation: RosterReconciliation
    weekly_trend: list[TrendPoint]


class DashboardService:
    """Use case: roster-wide status for a manager."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        trend_days: int = DEFAULT_TREND_DAYS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._trend_days = int(trend_days)

    def manager_dashboard(self, today: date, *, trend_days: int | None = None) -> ManagerDashboard:
        days = int(trend_days if trend_days is not None else self._trend_days)
        if days < 1:
            raise ValidationError(f"Trend window must cover at least one day, got {days}")

        roster = self._employees.fetch_roster(Role.EMPLOYEE)
        todays = self._attendance.fetch_records(on_date=today)
        window = self._attendance.fetch_records(start_date=today - timedelta(days=days - 1), end_date=today)

        reconciliation = reconcile_roster(roster, todays)
        logger.debug(
            "Dashboard %s: %d employees, %d records, %d absent",
            today,
            reconciliation.total_employees,
            len(todays),
            reconciliation.absent_count,
        )
        return ManagerDashboard(
            day=today,
            reconciliation=reconciliation,
            weekly_trend=weekly_trend_rollup(window, today, days),
        )
