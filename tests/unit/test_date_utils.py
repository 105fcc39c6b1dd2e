"""Unit tests for calendar month helpers"""

from datetime import datetime, timedelta, timezone
from finbot_forecast.utils.date_utils import as_utc, month_key, subtract_months


def test_subtract_months_within_year():
    assert subtract_months(datetime(2026, 10, 15), 6) == datetime(2026, 4, 15)


def test_subtract_months_across_year():
    assert subtract_months(datetime(2026, 3, 10, 8, 30), 6) == datetime(2025, 9, 10, 8, 30)


def test_subtract_months_clamps_day():
    assert subtract_months(datetime(2026, 8, 31), 6) == datetime(2026, 2, 28)
    assert subtract_months(datetime(2028, 8, 31), 6) == datetime(2028, 2, 29)


def test_month_key_pads_month():
    assert month_key(datetime(2026, 3, 1, tzinfo=timezone.utc)) == "2026-03"


def test_as_utc_converts_offsets():
    local = datetime(2026, 1, 1, 1, 0, tzinfo=timezone(timedelta(hours=3)))

    assert as_utc(local) == datetime(2025, 12, 31, 22, 0, tzinfo=timezone.utc)
    assert as_utc(datetime(2026, 1, 1)).tzinfo == timezone.utc
