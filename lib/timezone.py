# =============================================================================
# lib/timezone.py - Fixed-Offset Calendar Dates
# =============================================================================
# Converts instants into calendar-day strings for a fixed UTC offset.
# Activity is bucketed by the user's local day (IST by default), not by the
# server's local timezone.
#
# Usage:
#   from lib.timezone import local_date_string, utc_now
#   today = local_date_string(utc_now())  # "2024-03-15"
# =============================================================================

from datetime import datetime, timedelta, timezone

IST = timezone(timedelta(hours=5, minutes=30), "IST")

DATE_FORMAT = "%Y-%m-%d"


def fixed_offset(minutes: int) -> timezone:
    """Build a fixed-offset tzinfo from a number of minutes east of UTC."""
    return timezone(timedelta(minutes=minutes))


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def local_date_string(instant: datetime, tz: timezone = IST) -> str:
    """
    Return the calendar date of `instant` in `tz` as YYYY-MM-DD.

    Naive datetimes are interpreted as UTC, so the result never depends on
    the server process's local timezone.

    Example:
        # 2024-03-15 18:28 UTC is 23:58 IST
        local_date_string(datetime(2024, 3, 15, 18, 28, tzinfo=timezone.utc))
        # -> "2024-03-15"
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(tz).strftime(DATE_FORMAT)
