from __future__ import annotations

import csv
import io
from dataclasses import astuple, dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceWithProfile
from ..common.datetime_utils import format_clock
from ..core.constants import DATE_FORMAT

REPORT_HEADERS = (
    "Date",
    "Employee Name",
    "Employee ID",
    "Department",
    "Status",
    "Check In",
    "Check Out",
    "Total Hours",
)


@dataclass(frozen=True)
class ReportRow:
    """One exported line; field order is the column order of REPORT_HEADERS."""

    date: str
    employee_name: str
    employee_id: str
    department: str
    status: str
    check_in: str
    check_out: str
    total_hours: str


def format_hours(value: Optional[Decimal]) -> str:
    # 8.50 -> "8.5", 8.00 -> "8"
    if value is None:
        return ""
    return format(value.normalize(), "f")


def project_row(row: AttendanceWithProfile) -> ReportRow:
    record, employee = row.record, row.employee
    return ReportRow(
        date=record.work_date.strftime(DATE_FORMAT),
        employee_name=employee.name,
        employee_id=employee.employee_id,
        department=employee.department,
        status=record.status.value,
        check_in=format_clock(record.check_in_time),
        check_out=format_clock(record.check_out_time),
        total_hours=format_hours(record.total_hours),
    )


def project_rows(rows: Iterable[AttendanceWithProfile]) -> list[ReportRow]:
    return [project_row(r) for r in rows]


def render_csv(rows: Sequence[ReportRow]) -> str:
    """Header plus one line per row; fields with commas, quotes or newlines are quoted."""
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(REPORT_HEADERS)
    for row in rows:
        writer.writerow(astuple(row))
    return out.getvalue()


def report_filename(start: date, end: date) -> str:
    return f"attendance_report_{start.strftime(DATE_FORMAT)}_to_{end.strftime(DATE_FORMAT)}.csv"
