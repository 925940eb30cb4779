"""Utilities for dealing with timezones and the on-screen clock.

The rates view shows the shop's local date and time in its header. The helpers
below provide a single source of truth for obtaining aware datetimes and for
formatting them the way the display renders them.
"""
from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

DEFAULT_TZ_NAME = "Asia/Kolkata"

CLOCK_DATE_FORMAT = "%A %d-%b-%Y"
CLOCK_TIME_FORMAT = "%H:%M:%S"


def get_app_timezone(tz_name: str | None = None) -> ZoneInfo:
    """Return the ZoneInfo object for the configured timezone."""

    target_name = tz_name or DEFAULT_TZ_NAME
    return ZoneInfo(target_name)


def now_utc() -> datetime:
    """Return the current UTC datetime with tzinfo."""

    return datetime.now(timezone.utc)


def now_in_timezone(tz_name: str | None = None) -> datetime:
    """Return the current datetime localized to the provided timezone."""

    tz = get_app_timezone(tz_name)
    return datetime.now(tz)


def format_clock(moment: datetime) -> tuple[str, str]:
    """Return ``(date_line, time_line)`` for the rates view header.

    ``date_line`` looks like ``Monday 19-Oct-2026`` and ``time_line`` like
    ``14:05:09``.
    """

    return moment.strftime(CLOCK_DATE_FORMAT), moment.strftime(CLOCK_TIME_FORMAT)
