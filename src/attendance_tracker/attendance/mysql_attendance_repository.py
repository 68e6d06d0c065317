from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.model import Employee
from .model import AttendanceRecord, AttendanceWithProfile
from .repository import AttendanceRepository

_RECORD_COLUMNS = "a.id, a.user_id, a.work_date, a.check_in_time, a.check_out_time, a.status, a.total_hours"


def row_to_record(r: dict) -> AttendanceRecord:
    total_hours = r.get("total_hours")
    return AttendanceRecord(
        id=str(r["id"]),
        user_id=str(r["user_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        total_hours=Decimal(str(total_hours)) if total_hours is not None else None,
    )


def _build_where(
    *,
    user_id: Optional[str],
    on_date: Optional[date],
    start_date: Optional[date],
    end_date: Optional[date],
) -> tuple[str, tuple]:
    clauses: list[str] = []
    params: list[object] = []

    if user_id is not None:
        clauses.append("a.user_id=%s")
        params.append(user_id)
    if on_date is not None:
        clauses.append("a.work_date=%s")
        params.append(on_date)
    if start_date is not None:
        clauses.append("a.work_date >= %s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("a.work_date <= %s")
        params.append(end_date)

    where = " AND ".join(clauses) if clauses else "1=1"
    return where, tuple(params)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def fetch_records(
        self,
        *,
        user_id: Optional[str] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        where, params = _build_where(user_id=user_id, on_date=on_date, start_date=start_date, end_date=end_date)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance a
                WHERE {where}
                ORDER BY a.work_date ASC, a.id ASC
                """,
                params,
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def fetch_records_with_profile(
        self,
        *,
        user_id: Optional[str] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceWithProfile]:
        where, params = _build_where(user_id=user_id, on_date=on_date, start_date=start_date, end_date=end_date)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {_RECORD_COLUMNS},
                    p.name, p.employee_id, p.department, p.role
                FROM attendance a
                JOIN profiles p ON p.id = a.user_id
                WHERE {where}
                ORDER BY a.work_date ASC, a.id ASC
                """,
                params,
            )
            return [
                AttendanceWithProfile(
                    record=row_to_record(r),
                    employee=Employee(
                        id=str(r["user_id"]),
                        name=r["name"],
                        employee_id=r["employee_id"],
                        department=r.get("department") or "",
                        role=Role(r["role"]),
                    ),
                )
                for r in fetchall(cur)
            ]

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance a
                WHERE a.user_id=%s
                ORDER BY a.work_date DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [row_to_record(r) for r in fetchall(cur)]

    def _get_by_id(self, cur, attendance_id: str) -> Optional[AttendanceRecord]:
        cur.execute(f"SELECT {_RECORD_COLUMNS} FROM attendance a WHERE a.id=%s", (attendance_id,))
        r = fetchone(cur)
        return row_to_record(r) if r else None

    def create_record(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, work_date, check_in_time, status)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, work_date, check_in_time, status.value),
            )
            return AttendanceRecord(
                id=str(cur.lastrowid),
                user_id=user_id,
                work_date=work_date,
                status=status,
                check_in_time=check_in_time,
            )

    def update_record(
        self,
        attendance_id: str,
        *,
        check_out_time: datetime,
        total_hours: Decimal,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, total_hours=%s
                WHERE id=%s
                """,
                (check_out_time, total_hours, attendance_id),
            )
            record = self._get_by_id(cur, attendance_id)
            if record is None:
                raise NotFoundError(f"No attendance record with id {attendance_id}")
            return record
