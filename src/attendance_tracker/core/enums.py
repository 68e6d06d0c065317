from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Profile role used for roster selection and access checks."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record, fixed when the record is created."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"
