from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone


def now_millis() -> int:
    return time.time_ns() // 1_000_000


def millis_to_iso(timestamp_ms: int) -> str:
    """Render epoch milliseconds as an ISO-8601 UTC string with a ``Z`` suffix."""
    seconds, millis = divmod(timestamp_ms, 1000)
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(milliseconds=millis)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
