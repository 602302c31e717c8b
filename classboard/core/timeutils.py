# /classboard-backend/classboard/core/timeutils.py

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def local_day_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Returns `[start_of_local_day, start_of_local_day + 24h)` for `now`,
    expressed in UTC so the bounds compare correctly with stored timestamps.
    """
    local_now = (now or utcnow()).astimezone()
    start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)
