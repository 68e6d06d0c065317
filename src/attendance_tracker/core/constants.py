"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus

DEFAULT_TREND_DAYS = 7
DEFAULT_HISTORY_LIMIT = 7

CHECKIN_STATUS = AttendanceStatus.PRESENT

DATE_FORMAT = "%Y-%m-%d"
CLOCK_FORMAT = "%I:%M %p"
WEEKDAY_FORMAT = "%a"

MISSING_TIME = "-"
EMPTY_REPORT_MESSAGE = "No data found for the selected date range"

MYSQL_DUPLICATE_KEY = 1062
