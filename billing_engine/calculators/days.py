from __future__ import annotations

from datetime import datetime, timedelta, timezone

_DAY = timedelta(days=1)
_US = timedelta(microseconds=1)
_DAY_US = _DAY // _US


def as_utc(ts: datetime) -> datetime:
    """Naive timestamps are taken to be UTC (the store keeps epoch millis)."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def _delta_us(later: datetime, earlier: datetime) -> int:
    return (as_utc(later) - as_utc(earlier)) // _US


def ceil_days(later: datetime, earlier: datetime) -> int:
    """ceil((later - earlier) / 1 day), exact integer arithmetic."""
    return -((-_delta_us(later, earlier)) // _DAY_US)


def floor_days(later: datetime, earlier: datetime) -> int:
    """floor((later - earlier) / 1 day)."""
    return _delta_us(later, earlier) // _DAY_US


def add_days(ts: datetime, days: int) -> datetime:
    return ts + timedelta(days=int(days))
