from __future__ import annotations

from datetime import date

from attendance_tracker.attendance.reconciler import reconcile_roster
from attendance_tracker.core.enums import AttendanceStatus

TODAY = date(2026, 3, 9)


def test_three_of_five_checked_in(roster, make_record):
    records = [
        make_record("u1", TODAY, AttendanceStatus.PRESENT),
        make_record("u3", TODAY, AttendanceStatus.PRESENT),
        make_record("u4", TODAY, AttendanceStatus.LATE),
    ]

    result = reconcile_roster(roster, records)

    assert result.total_employees == 5
    assert result.present_count == 2
    assert result.late_count == 1
    assert result.absent_count == 2
    assert [e.id for e in result.absent_employees] == ["u2", "u5"]


def test_absent_status_record_is_not_counted_twice(roster, make_record):
    records = [
        make_record("u1", TODAY, AttendanceStatus.PRESENT),
        make_record("u2", TODAY, AttendanceStatus.ABSENT),
    ]

    result = reconcile_roster(roster, records)

    # roster minus records, regardless of status
    assert result.absent_count == 5 - 2
    assert [e.id for e in result.absent_employees] == ["u3", "u4", "u5"]
    assert result.present_count + result.late_count + len(result.absent_employees) != result.total_employees


def test_nobody_checked_in(roster):
    result = reconcile_roster(roster, [])

    assert result.absent_count == 5
    assert result.absent_employees == roster
    assert result.present_count == result.late_count == 0


def test_everyone_present(roster, make_record):
    records = [make_record(e.id, TODAY) for e in roster]

    result = reconcile_roster(roster, records)

    assert result.absent_count == 0
    assert result.absent_employees == []
    assert result.present_count == 5
