from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def row_to_employee(r: dict) -> Employee:
    return Employee(
        id=str(r["id"]),
        name=r["name"],
        employee_id=r["employee_id"],
        department=r.get("department") or "",
        role=Role(r["role"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, employee_id, department, role
                FROM profiles
                WHERE id=%s
                """,
                (user_id,),
            )
            r = fetchone(cur)
            return row_to_employee(r) if r else None

    def fetch_roster(self, role: Role = Role.EMPLOYEE) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, employee_id, department, role
                FROM profiles
                WHERE role=%s
                ORDER BY name ASC
                """,
                (role.value,),
            )
            return [row_to_employee(r) for r in fetchall(cur)]
