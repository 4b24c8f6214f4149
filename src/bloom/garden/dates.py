# src/bloom/garden/dates.py

from __future__ import annotations

from datetime import datetime, timezone, tzinfo


def local_date_key(now: datetime | None = None, tz: tzinfo | None = None) -> str:
    """
    Return the YYYY-MM-DD key for "today" in the local civil calendar.

    The instant is shifted by the local UTC offset before the date is taken,
    so 23:30 in UTC-5 stays on the local day instead of rolling to tomorrow.
    Naive datetimes are treated as local time. `tz` overrides the system zone.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    local = now.astimezone(tz) if (tz is not None or now.tzinfo is not None) else now
    return local.date().isoformat()
