from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..attendance.repository import AttendanceRepository
from ..core.constants import EMPTY_REPORT_MESSAGE
from ..core.exceptions import EmptyResultError, ValidationError
from .projection import project_rows, render_csv, report_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportExport:
    filename: str
    content: str
    row_count: int


class ReportService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def export_csv(self, *, start: date, end: date) -> ReportExport:
        if start > end:
            raise ValidationError("Start date must not be after end date")

        joined = self._attendance.fetch_records_with_profile(start_date=start, end_date=end)
        if not joined:
            logger.info("Attendance export %s..%s matched no rows", start, end)
            raise EmptyResultError(EMPTY_REPORT_MESSAGE)

        ordered = sorted(joined, key=lambda r: r.record.work_date)
        rows = project_rows(ordered)
        logger.info("Attendance export %s..%s: %d rows", start, end, len(rows))
        return ReportExport(
            filename=report_filename(start, end),
            content=render_csv(rows),
            row_count=len(rows),
        )
