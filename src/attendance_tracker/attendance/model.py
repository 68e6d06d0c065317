from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import IntegrityViolation
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    Created at check-in (status fixed), updated once at check-out with the
    check-out time and worked hours, never deleted. At most one record
    exists per ``(user_id, work_date)``.
    """

    id: str
    user_id: str
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    total_hours: Optional[Decimal] = None

    @property
    def is_checked_in(self) -> bool:
        return self.check_in_time is not None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out_time is not None

    def hours_or_zero(self) -> Decimal:
        return self.total_hours if self.total_hours is not None else Decimal("0")


@dataclass(frozen=True)
class AttendanceWithProfile:
    """Read-model: an attendance record joined with its employee profile."""

    record: AttendanceRecord
    employee: Employee


def validate_record(record: AttendanceRecord) -> AttendanceRecord:
    """Raise IntegrityViolation if the check-in/check-out timestamps are inconsistent."""
    if record.check_out_time is None:
        return record
    if record.check_in_time is None:
        raise IntegrityViolation(f"Record {record.id} has a check-out time but no check-in time")
    if record.check_out_time < record.check_in_time:
        raise IntegrityViolation(f"Record {record.id} checks out before it checks in")
    return record
