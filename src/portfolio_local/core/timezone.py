"""Timezone and epoch helpers.

Snapshot timestamps are epoch milliseconds, matching the backup format.
"""

from datetime import datetime
from typing import Optional

import pytz

from portfolio_local.config.settings import get_settings

UTC = pytz.utc


def local_tz() -> pytz.BaseTzInfo:
    """Return the configured display timezone."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return current time in the configured timezone."""
    return datetime.now(local_tz())


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to the configured timezone."""
    tz = local_tz()
    if dt.tzinfo is None:
        # Assume naive datetime is already local
        return tz.localize(dt)
    return dt.astimezone(tz)


def to_epoch_ms(dt: datetime) -> int:
    """Convert an aware (or local naive) datetime to epoch milliseconds."""
    return int(to_local(dt).timestamp() * 1000)


def from_epoch_ms(value: int, tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """Convert epoch milliseconds to an aware datetime."""
    return datetime.fromtimestamp(value / 1000, tz=tz or local_tz())


def start_of_year(dt: datetime) -> datetime:
    """Return midnight on January 1st of dt's year, in dt's timezone."""
    dt = to_local(dt) if dt.tzinfo is None else dt
    naive = datetime(dt.year, 1, 1)
    tz = dt.tzinfo
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)
