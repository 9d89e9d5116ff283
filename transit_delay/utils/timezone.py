"""
Timezone utilities.

All database timestamps are stored as naive UTC. These helpers normalize
incoming datetimes before storage and produce the current time.
"""

from datetime import datetime

import pytz

UTC_TZ = pytz.UTC


def utc_now() -> datetime:
    """Get current time in UTC (timezone-aware)."""
    return datetime.now(UTC_TZ)


def utc_now_naive() -> datetime:
    """Current UTC time without tzinfo, for database storage."""
    return utc_now().replace(tzinfo=None)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to naive UTC for database storage.

    Naive datetimes are assumed to already be in UTC.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(UTC_TZ).replace(tzinfo=None)
