from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceWithProfile


class AttendanceRepository(Protocol):
    """Read/write contract with the attendance store.

    Filters combine with AND; ``on_date`` and the ``start_date``/``end_date``
    range are inclusive. Results come back ordered by date, then arrival.
    """

    def fetch_records(
        self,
        *,
        user_id: Optional[str] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def fetch_records_with_profile(
        self,
        *,
        user_id: Optional[str] = None,
        on_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceWithProfile]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        """Most recent records first."""
        raise NotImplementedError

    def create_record(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Insert a record; a duplicate (user_id, work_date) raises IntegrityViolation."""
        raise NotImplementedError

    def update_record(
        self,
        attendance_id: str,
        *,
        check_out_time: datetime,
        total_hours: Decimal,
    ) -> AttendanceRecord:
        """Set check-out fields; raises NotFoundError when no record has ``attendance_id``."""
        raise NotImplementedError
