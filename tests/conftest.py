from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from attendance_tracker.attendance.model import AttendanceRecord, AttendanceWithProfile
from attendance_tracker.core.enums import AttendanceStatus, Role
from attendance_tracker.core.exceptions import IntegrityViolation, NotFoundError
from attendance_tracker.employees.model import Employee


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self._employees = list(employees)

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        return next((e for e in self._employees if e.id == user_id), None)

    def fetch_roster(self, role: Role = Role.EMPLOYEE):
        return [e for e in self._employees if e.role == role]


class InMemoryAttendance:
    """Keeps records in arrival order; ``seed`` bypasses the uniqueness check."""

    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self._records: list[AttendanceRecord] = []
        self._employees = employees
        self._id = 0
        self.fetch_calls = 0

    def seed(self, *records: AttendanceRecord) -> None:
        self._records.extend(records)

    def _matching(self, *, user_id=None, on_date=None, start_date=None, end_date=None):
        self.fetch_calls += 1
        out = []
        for r in self._records:
            if user_id is not None and r.user_id != user_id:
                continue
            if on_date is not None and r.work_date != on_date:
                continue
            if start_date is not None and r.work_date < start_date:
                continue
            if end_date is not None and r.work_date > end_date:
                continue
            out.append(r)
        return out

    def fetch_records(self, *, user_id=None, on_date=None, start_date=None, end_date=None):
        return self._matching(user_id=user_id, on_date=on_date, start_date=start_date, end_date=end_date)

    def fetch_records_with_profile(self, *, user_id=None, on_date=None, start_date=None, end_date=None):
        rows = self._matching(user_id=user_id, on_date=on_date, start_date=start_date, end_date=end_date)
        return [AttendanceWithProfile(record=r, employee=self._employees.get_by_id(r.user_id)) for r in rows]

    def get_recent_for_user(self, user_id: str, limit: int):
        items = [r for r in self._records if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def create_record(self, *, user_id: str, work_date: date, check_in_time: datetime, status: AttendanceStatus):
        if any(r.user_id == user_id and r.work_date == work_date for r in self._records):
            raise IntegrityViolation("duplicate")
        self._id += 1
        rec = AttendanceRecord(
            id=str(self._id),
            user_id=user_id,
            work_date=work_date,
            status=status,
            check_in_time=check_in_time,
        )
        self._records.append(rec)
        return rec

    def update_record(self, attendance_id: str, *, check_out_time: datetime, total_hours: Decimal):
        for i, r in enumerate(self._records):
            if r.id == attendance_id:
                updated = AttendanceRecord(
                    id=r.id,
                    user_id=r.user_id,
                    work_date=r.work_date,
                    status=r.status,
                    check_in_time=r.check_in_time,
                    check_out_time=check_out_time,
                    total_hours=total_hours,
                )
                self._records[i] = updated
                return updated
        raise NotFoundError(attendance_id)


@pytest.fixture
def make_record():
    counter = {"n": 100}

    def _make(
        user_id: str,
        work_date: date,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
        *,
        check_in: Optional[datetime] = None,
        check_out: Optional[datetime] = None,
        hours: Optional[str] = None,
    ) -> AttendanceRecord:
        counter["n"] += 1
        return AttendanceRecord(
            id=f"r{counter['n']}",
            user_id=user_id,
            work_date=work_date,
            status=status,
            check_in_time=check_in,
            check_out_time=check_out,
            total_hours=Decimal(hours) if hours is not None else None,
        )

    return _make


@pytest.fixture
def roster() -> list[Employee]:
    return [
        Employee(id="u1", name="Alice Nguyen", employee_id="EMP001", department="Engineering"),
        Employee(id="u2", name="Bob Tran", employee_id="EMP002", department="Sales"),
        Employee(id="u3", name="Carol Le", employee_id="EMP003", department="Engineering"),
        Employee(id="u4", name="Dan Pham", employee_id="EMP004", department="HR"),
        Employee(id="u5", name="Eve Vo", employee_id="EMP005", department="Finance, Ops"),
    ]


@pytest.fixture
def manager() -> Employee:
    return Employee(id="m1", name="Mia Manager", employee_id="MGR001", department="Management", role=Role.MANAGER)


@pytest.fixture
def employees_repo(roster, manager) -> InMemoryEmployees:
    return InMemoryEmployees([*roster, manager])


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)
