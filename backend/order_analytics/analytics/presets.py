"""
Named date ranges offered by the admin date picker, computed in UTC.
"""
from __future__ import annotations

import enum
from datetime import datetime, timedelta
from typing import Optional, Tuple

from .dates import Resolution, as_utc, truncate, utc_now

# "Last month" is the last 29 days plus today, not a calendar month.
# Existing dashboards depend on this window, keep it.
LAST_MONTH_APPROX_DAYS = 29

DateRange = Tuple[datetime, datetime]


class DatePreset(str, enum.Enum):
    today = "today"
    this_week = "this_week"
    this_month = "this_month"
    this_year = "this_year"
    last_week = "last_week"
    last_30_days = "last_30_days"
    last_month = "last_month"
    last_60_days = "last_60_days"
    last_year = "last_year"
    all = "all"


def _start_of_week(ts: datetime) -> datetime:
    # weeks start on Sunday
    today = truncate(ts, Resolution.day)
    return today - timedelta(days=(today.weekday() + 1) % 7)


def date_range_for(preset: DatePreset, now: Optional[datetime] = None) -> Optional[DateRange]:
    """(from, to) for a preset; None for `all` (the engine resolves the start)."""
    now = as_utc(now or utc_now())
    today = truncate(now, Resolution.day)
    if preset == DatePreset.today:
        return today, now
    if preset == DatePreset.this_week:
        return _start_of_week(now), now
    if preset == DatePreset.this_month:
        return truncate(now, Resolution.month), now
    if preset == DatePreset.this_year:
        return today.replace(month=1, day=1), now
    if preset == DatePreset.last_week:
        this_week = _start_of_week(now)
        return this_week - timedelta(days=7), this_week - timedelta(microseconds=1)
    if preset == DatePreset.last_30_days:
        return today - timedelta(days=30), now
    if preset == DatePreset.last_month:
        return today - timedelta(days=LAST_MONTH_APPROX_DAYS), now
    if preset == DatePreset.last_60_days:
        return today - timedelta(days=60), now
    if preset == DatePreset.last_year:
        start = today.replace(year=today.year - 1, month=1, day=1)
        return start, today.replace(month=1, day=1) - timedelta(microseconds=1)
    return None


def custom_compare_range(start: datetime, end: datetime) -> DateRange:
    """Window of the same length ending where `start` begins."""
    start, end = as_utc(start), as_utc(end)
    return start - (end - start), start


def compare_range_for(preset: DatePreset, now: Optional[datetime] = None) -> Optional[DateRange]:
    current = date_range_for(preset, now)
    if current is None:
        return None
    start, end = current
    if preset == DatePreset.last_month:
        return start - timedelta(days=LAST_MONTH_APPROX_DAYS), start
    if preset == DatePreset.last_year:
        return start.replace(year=start.year - 1), start
    return custom_compare_range(start, end)
