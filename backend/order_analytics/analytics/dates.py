"""
Date helpers for the analytics engine.

All timestamps are handled in UTC: naive datetimes are read as UTC and aware
ones are converted before truncation or comparison.
"""
from __future__ import annotations

import enum
from datetime import datetime, timedelta, timezone
from typing import Optional

# Spans up to this many days bucket per day, longer spans bucket per month.
DAY_RESOLUTION_MAX_DAYS = 60


class Resolution(str, enum.Enum):
    day = "day"
    month = "month"


def as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def from_epoch_ms(ms: Optional[int]) -> Optional[datetime]:
    if ms is None:
        return None
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def to_epoch_ms(ts: Optional[datetime]) -> Optional[int]:
    if ts is None:
        return None
    return int(as_utc(ts).timestamp() * 1000)


def calculate_resolution(
    start: datetime,
    end: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Resolution:
    """
    Pick the bucket size for a date span.
    `end` defaults to `now` (and `now` to the current UTC time).
    """
    stop = as_utc(end) if end is not None else as_utc(now or utc_now())
    span = stop - as_utc(start)
    if span <= timedelta(days=DAY_RESOLUTION_MAX_DAYS):
        return Resolution.day
    return Resolution.month


def truncate(ts: datetime, resolution: Resolution) -> datetime:
    """Start of the day or month bucket that contains `ts`."""
    ts = as_utc(ts)
    day_start = ts.replace(hour=0, minute=0, second=0, microsecond=0)
    if resolution == Resolution.month:
        return day_start.replace(day=1)
    return day_start


def day_after(ts: datetime) -> datetime:
    """Exclusive upper bound covering the whole UTC calendar day of `ts`."""
    return truncate(ts, Resolution.day) + timedelta(days=1)
