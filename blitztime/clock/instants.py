"""
Instant / duration helpers.

The server speaks in (fractional) seconds: epoch seconds for instants, plain seconds for durations.
Inside the client everything is a timezone-aware UTC datetime or a timedelta.
"""

from datetime import datetime, timedelta, timezone

# Sentinel instant for "this clock is not running, so it never times out"
NEVER = datetime.max.replace(tzinfo=timezone.utc)
ZERO = timedelta(0)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def load_datetime(seconds: float) -> datetime:
    """Epoch seconds -> aware UTC datetime"""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def load_duration(seconds: float) -> timedelta:
    return timedelta(seconds=seconds)


def dump_duration(duration: timedelta) -> float:
    return duration.total_seconds()
