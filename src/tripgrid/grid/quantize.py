from __future__ import annotations

from datetime import date, datetime, timedelta

from tripgrid.items.model import DAY, day_start

LAST_INSTANT = timedelta(milliseconds=1)


def _offset(instant: datetime, minutes: int) -> timedelta:
    since_hour = timedelta(
        minutes=instant.minute,
        seconds=instant.second,
        microseconds=instant.microsecond,
    )
    return since_hour % timedelta(minutes=minutes)


def floor_to_step(instant: datetime, minutes: int = 15) -> datetime:
    """Round down to the previous ``minutes`` boundary; aligned values pass through."""
    return instant - _offset(instant, minutes)


def ceil_to_step(instant: datetime, minutes: int = 15) -> datetime:
    """Round up to the next ``minutes`` boundary; aligned values pass through."""
    rem = _offset(instant, minutes)
    if not rem:
        return instant
    return instant + (timedelta(minutes=minutes) - rem)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """First and last representable instant (00:00 .. 23:59:59.999) of ``day``."""
    start = day_start(day)
    return start, start + DAY - LAST_INSTANT


def clamp_to_day(day: date, instant: datetime) -> datetime:
    lo, hi = day_bounds(day)
    return min(max(instant, lo), hi)
