from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..calculators.days import add_days, as_utc
from ..core.settings import get_settings


def next_review_date(now: datetime, frequency_days: Optional[int] = None) -> datetime:
    if frequency_days is None:
        frequency_days = get_settings().default_review_frequency_days
    return add_days(now, frequency_days)


def needs_review(review_date: Optional[datetime], now: datetime) -> bool:
    """A configuration without a scheduled review never needs one."""
    if review_date is None:
        return False
    return as_utc(now) >= as_utc(review_date)
