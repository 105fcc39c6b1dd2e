"""Date manipulation utilities"""

import calendar
from datetime import datetime, timedelta, timezone


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def subtract_months(value: datetime, months: int) -> datetime:
    """Move back whole calendar months, clamping the day (31 Aug - 6 months = 28/29 Feb)"""
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def month_key(value: datetime) -> str:
    """Calendar month key in YYYY-MM form, taken in UTC"""
    utc = as_utc(value)
    return f"{utc.year:04d}-{utc.month:02d}"


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)
