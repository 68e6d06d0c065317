from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..employees.model import Employee
from .model import AttendanceRecord


@dataclass(frozen=True)
class RosterReconciliation:
    total_employees: int
    present_count: int
    late_count: int
    absent_count: int
    absent_employees: list[Employee] = field(default_factory=list)


def reconcile_roster(roster: Sequence[Employee], records: Sequence[AttendanceRecord]) -> RosterReconciliation:
    """Derive a day's absence by comparing the roster with that day's records.

    Absence is never stored: an employee is absent when they have no record.
    ``absent_count`` is therefore roster size minus the number of records,
    whatever their status, so a record stored as ``absent`` is not counted twice.
    """
    attended_ids = {r.user_id for r in records}
    return RosterReconciliation(
        total_employees=len(roster),
        present_count=sum(1 for r in records if r.status == AttendanceStatus.PRESENT),
        late_count=sum(1 for r in records if r.status == AttendanceStatus.LATE),
        absent_count=len(roster) - len(records),
        absent_employees=[e for e in roster if e.id not in attended_ids],
    )
