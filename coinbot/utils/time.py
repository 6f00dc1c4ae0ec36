from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo


DISPLAY_FORMAT = "%d.%m.%Y %H:%M:%S"


def utcnow() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@lru_cache(maxsize=None)
def _zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def from_epoch_ms(ts_ms: int) -> datetime:
    """Epoch milliseconds -> UTC datetime, truncated to whole seconds."""
    return datetime.fromtimestamp(ts_ms // 1000, tz=timezone.utc)


def format_local(dt: datetime, tz_name: str) -> str:
    """
    Render an instant as DD.MM.YYYY HH:MM:SS in the given IANA zone.
    Naive datetimes are assumed to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(_zone(tz_name)).strftime(DISPLAY_FORMAT)
