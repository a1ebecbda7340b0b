from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now_iso(offset: Optional[timedelta] = None) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    if offset is not None:
        now = now + offset
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
