# hiltim/utils/date_utils.py
from __future__ import annotations

"""
Date helpers shared by the booking services.

Notes:
- Booking dates are calendar dates serialized as `YYYY-MM-DD`.
- "Today" is taken in UTC, matching the date-only stamps written on
  dateCreated / dateModified.
"""

from datetime import date, datetime, timezone

UTC = timezone.utc
DATE_FORMAT = "%Y-%m-%d"


class DateUtilsError(Exception):
    """Custom exception for date utilities errors."""
    pass


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def format_date(d: date, fmt: str = DATE_FORMAT) -> str:
    """Format a date as string with the given format."""
    if not isinstance(d, date):
        raise DateUtilsError("Input must be a date object")
    return d.strftime(fmt)


def timestamp_slug(dt: datetime | None = None) -> str:
    """Compact timestamp used in backup file names."""
    return (dt or now_utc()).strftime("%Y%m%d_%H%M%S_%f")
