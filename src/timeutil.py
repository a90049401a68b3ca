"""UTC-aware date helpers shared by the engine."""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Annotated

from pydantic import AfterValidator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utctoday() -> date:
    return utcnow().date()


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


def days_between(start: datetime, end: datetime) -> int:
    """Whole days between two instants, rounded up, order-insensitive."""
    seconds = abs((ensure_utc(end) - ensure_utc(start)).total_seconds())
    return math.ceil(seconds / 86400)


def add_days(moment: datetime, days: float) -> datetime:
    # Fractional days are kept; callers decide rounding.
    return moment + timedelta(days=days)
