from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from attendance_tracker.attendance.mysql_attendance_repository import (
    MySQLAttendanceRepository,
    _build_where,
    row_to_record,
)
from attendance_tracker.core.enums import AttendanceStatus, Role
from attendance_tracker.core.exceptions import NotFoundError

DAY = date(2026, 3, 9)
MONTH_START = date(2026, 3, 1)
MONTH_END = date(2026, 3, 31)


class FakeCursor:
    """Records executed statements and hands back queued result sets."""

    def __init__(self, *, rows=None, one=None, lastrowid=None):
        self.executed: list[tuple[str, tuple]] = []
        self._rows = list(rows or [])
        self._one = one
        self.lastrowid = lastrowid
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))

    def fetchall(self):
        return self._rows

    def fetchone(self):
        return self._one

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self.cursor_obj = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn: FakeConnection):
        self._conn = conn

    def connect(self):
        return self._conn


def _row(**overrides):
    row = {
        "id": 17,
        "user_id": 3,
        "work_date": DAY,
        "check_in_time": datetime(2026, 3, 9, 9, 0, 0),
        "check_out_time": datetime(2026, 3, 9, 17, 30, 0),
        "status": "present",
        "total_hours": Decimal("8.50"),
    }
    row.update(overrides)
    return row


def _repo(cursor: FakeCursor) -> tuple[MySQLAttendanceRepository, FakeConnection]:
    conn = FakeConnection(cursor)
    return MySQLAttendanceRepository(FakeFactory(conn)), conn


@pytest.mark.parametrize(
    "filters, where, params",
    [
        ({}, "1=1", ()),
        ({"user_id": "u1"}, "a.user_id=%s", ("u1",)),
        ({"on_date": DAY}, "a.work_date=%s", (DAY,)),
        ({"start_date": MONTH_START}, "a.work_date >= %s", (MONTH_START,)),
        ({"end_date": MONTH_END}, "a.work_date <= %s", (MONTH_END,)),
        (
            {"start_date": MONTH_START, "end_date": MONTH_END},
            "a.work_date >= %s AND a.work_date <= %s",
            (MONTH_START, MONTH_END),
        ),
        (
            {"user_id": "u1", "start_date": MONTH_START, "end_date": MONTH_END},
            "a.user_id=%s AND a.work_date >= %s AND a.work_date <= %s",
            ("u1", MONTH_START, MONTH_END),
        ),
        (
            {"user_id": "u1", "on_date": DAY, "start_date": MONTH_START, "end_date": MONTH_END},
            "a.user_id=%s AND a.work_date=%s AND a.work_date >= %s AND a.work_date <= %s",
            ("u1", DAY, MONTH_START, MONTH_END),
        ),
    ],
)
def test_build_where(filters, where, params):
    kwargs = {"user_id": None, "on_date": None, "start_date": None, "end_date": None, **filters}
    assert _build_where(**kwargs) == (where, params)


def test_row_to_record_maps_driver_types():
    rec = row_to_record(_row())

    assert rec.id == "17"
    assert rec.user_id == "3"
    assert rec.status is AttendanceStatus.PRESENT
    assert rec.total_hours == Decimal("8.5")
    assert isinstance(rec.total_hours, Decimal)


def test_row_to_record_float_hours_keep_their_decimal_text():
    # 7.1 as a float is not exactly 7.1; the text form is what was stored.
    assert row_to_record(_row(total_hours=7.1)).total_hours == Decimal("7.1")


def test_row_to_record_open_record():
    rec = row_to_record(_row(check_out_time=None, total_hours=None, status="late"))

    assert rec.total_hours is None
    assert rec.check_out_time is None
    assert rec.status is AttendanceStatus.LATE


def test_fetch_records_range_is_inclusive_and_ordered():
    cur = FakeCursor(rows=[_row(), _row(id=18, work_date=MONTH_END, total_hours=None, check_out_time=None)])
    repo, conn = _repo(cur)

    records = repo.fetch_records(user_id="3", start_date=MONTH_START, end_date=MONTH_END)

    sql, params = cur.executed[0]
    assert "WHERE a.user_id=%s AND a.work_date >= %s AND a.work_date <= %s" in sql
    assert sql.endswith("ORDER BY a.work_date ASC, a.id ASC")
    assert params == ("3", MONTH_START, MONTH_END)
    assert [r.id for r in records] == ["17", "18"]
    assert conn.committed and conn.closed


def test_fetch_records_with_profile_builds_employee():
    cur = FakeCursor(
        rows=[_row(name="Carol Le", employee_id="EMP003", department=None, role="employee")]
    )
    repo, _ = _repo(cur)

    (row,) = repo.fetch_records_with_profile(on_date=DAY)

    assert "JOIN profiles p ON p.id = a.user_id" in cur.executed[0][0]
    assert cur.executed[0][1] == (DAY,)
    assert row.employee.id == row.record.user_id == "3"
    assert row.employee.department == ""
    assert row.employee.role is Role.EMPLOYEE


def test_get_recent_for_user_passes_limit():
    cur = FakeCursor(rows=[])
    repo, _ = _repo(cur)

    assert repo.get_recent_for_user("u1", 7) == []
    sql, params = cur.executed[0]
    assert "ORDER BY a.work_date DESC LIMIT %s" in sql
    assert params == ("u1", 7)


def test_create_record_uses_inserted_id():
    cur = FakeCursor(lastrowid=42)
    repo, conn = _repo(cur)
    check_in = datetime(2026, 3, 9, 9, 0, 0, 123000)

    rec = repo.create_record(user_id="u1", work_date=DAY, check_in_time=check_in, status=AttendanceStatus.PRESENT)

    assert rec.id == "42"
    assert rec.check_in_time == check_in
    assert cur.executed[0][1] == ("u1", DAY, check_in, "present")
    assert conn.committed


def test_update_record_returns_stored_row():
    cur = FakeCursor(one=_row(total_hours=Decimal("8.50")))
    repo, conn = _repo(cur)

    rec = repo.update_record("17", check_out_time=datetime(2026, 3, 9, 17, 30), total_hours=Decimal("8.50"))

    update_sql, update_params = cur.executed[0]
    select_sql, select_params = cur.executed[1]
    assert update_sql.startswith("UPDATE attendance SET check_out_time=%s, total_hours=%s WHERE id=%s")
    assert update_params == (datetime(2026, 3, 9, 17, 30), Decimal("8.50"), "17")
    assert select_params == ("17",)
    assert rec.total_hours == Decimal("8.5")
    assert conn.committed


def test_update_record_missing_id_is_not_found():
    cur = FakeCursor(one=None)
    repo, conn = _repo(cur)

    with pytest.raises(NotFoundError):
        repo.update_record("999", check_out_time=datetime(2026, 3, 9, 17, 30), total_hours=Decimal("8.5"))

    assert conn.rolled_back and not conn.committed and conn.closed
