"""Timezone helpers.

All instants inside the service are timezone-aware. Naive values coming from
forms or seed data are read as campus-local time.
"""

import os
from datetime import datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo


def get_campus_timezone(name: Optional[str] = None) -> ZoneInfo:
    """Zone used for end-of-day boundaries and date-only input (CAMPUS_TIMEZONE)."""
    return ZoneInfo(name or os.environ.get('CAMPUS_TIMEZONE', 'UTC'))


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """Attach the campus timezone to a naive datetime, leave aware ones alone."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz or get_campus_timezone())
    return dt


def end_of_day(dt: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """Last representable instant of the campus-local day containing ``dt``."""
    tz = tz or get_campus_timezone()
    local = ensure_aware(dt, tz).astimezone(tz)
    return datetime.combine(local.date(), time.max, tzinfo=tz)
