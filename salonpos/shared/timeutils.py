"""Business timezone helpers"""

from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from ..config import BUSINESS_TIMEZONE

BUSINESS_TZ = ZoneInfo(BUSINESS_TIMEZONE)


def to_business_time(value: Optional[datetime]) -> Optional[datetime]:
    """
    Express a timestamp in the business timezone.

    Naive values are taken as business-local wall time; aware values are converted.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=BUSINESS_TZ)
    return value.astimezone(BUSINESS_TZ)


def start_of_day(day: date) -> datetime:
    """Midnight of ``day`` in the business timezone"""
    return datetime.combine(day, time.min, tzinfo=BUSINESS_TZ)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open [start, end) interval covering one business calendar day"""
    return start_of_day(day), start_of_day(day + timedelta(days=1))
