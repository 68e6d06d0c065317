from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee profile.

    Note: plain data object, no DB access here. ``employee_id`` is the
    human-facing code; ``id`` is what attendance records reference.
    """

    id: str
    name: str
    employee_id: str
    department: str
    role: Role = Role.EMPLOYEE
