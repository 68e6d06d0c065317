from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TREND_DAYS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService
    dashboard_service: DashboardService
    report_service: ReportService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    trend_days: int = DEFAULT_TREND_DAYS,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> Container:
    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        attendance_service=AttendanceService(attendance_repo, employees_repo, history_limit=history_limit),
        dashboard_service=DashboardService(attendance_repo, employees_repo, trend_days=trend_days),
        report_service=ReportService(attendance_repo),
    )


def build_container(
    *,
    db_config: dict,
    trend_days: int = DEFAULT_TREND_DAYS,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        trend_days=trend_days,
        history_limit=history_limit,
    )
