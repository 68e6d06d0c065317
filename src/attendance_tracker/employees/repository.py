from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employee profiles.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def fetch_roster(self, role: Role = Role.EMPLOYEE) -> Sequence[Employee]:
        raise NotImplementedError
