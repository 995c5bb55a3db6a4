"""Timezone utilities for the service clock."""

from datetime import date, datetime, time, tzinfo
from typing import Optional

import pytz
from dateutil import tz as dateutil_tz


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Return the service time zone.

    A configured IANA name wins; otherwise the server's local time zone is used,
    with its DST rules, so every date gets its own offset.
    """
    if name:
        return pytz.timezone(name)
    return dateutil_tz.tzlocal()


def now_in(tz: tzinfo) -> datetime:
    """Return the current time as an aware datetime in ``tz``."""
    return datetime.now(tz)


def localize(dt: datetime, tz: tzinfo) -> datetime:
    """Attach ``tz`` to a naive datetime, or convert an aware one."""
    if dt.tzinfo is None:
        if hasattr(tz, "localize"):
            return tz.localize(dt)
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the first and last instant of ``day`` in ``tz``."""
    start = localize(datetime.combine(day, time.min), tz)
    end = localize(datetime.combine(day, time.max), tz)
    return start, end
