"""Unit tests for historical aggregation"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from conftest import FIXED_NOW, make_transaction
from finbot_forecast.domain.aggregation import calculate_monthly_averages, recent_transactions


def test_monthly_averages_over_sample_window(sample_transactions):
    """Averages are taken per calendar month inside the trailing window"""
    averages = calculate_monthly_averages(recent_transactions(sample_transactions, FIXED_NOW))

    assert averages.total_months == 3
    assert averages.avg_monthly_income == Decimal("10000")
    assert averages.avg_monthly_expenses == Decimal("6000")


def test_empty_window_yields_zero_averages():
    averages = calculate_monthly_averages([])

    assert averages.total_months == 0
    assert averages.avg_monthly_income == 0
    assert averages.avg_monthly_expenses == 0


def test_months_without_income_still_count():
    """A month with only expenses pulls the income average down"""
    transactions = [
        make_transaction("1", "income", "9000", datetime(2026, 9, 3, tzinfo=timezone.utc)),
        make_transaction("2", "expense", "3000", datetime(2026, 10, 3, tzinfo=timezone.utc)),
    ]

    averages = calculate_monthly_averages(transactions)

    assert averages.total_months == 2
    assert averages.avg_monthly_income == Decimal("4500")
    assert averages.avg_monthly_expenses == Decimal("1500")


def test_transfers_are_ignored():
    transactions = [
        make_transaction("1", "income", "6000", datetime(2026, 10, 1, tzinfo=timezone.utc)),
        make_transaction("2", "transfer_out", "5000", datetime(2026, 10, 2, tzinfo=timezone.utc)),
    ]

    averages = calculate_monthly_averages(transactions)

    assert averages.avg_monthly_income == Decimal("6000")
    assert averages.avg_monthly_expenses == 0


def test_transfer_only_month_does_not_count():
    """A month holding nothing but transfers must not dilute the averages"""
    transactions = [
        make_transaction("1", "income", "10000", datetime(2026, 9, 1, tzinfo=timezone.utc)),
        make_transaction("2", "expense", "6000", datetime(2026, 9, 2, tzinfo=timezone.utc)),
        make_transaction("3", "transfer_out", "100", datetime(2026, 10, 2, tzinfo=timezone.utc)),
    ]

    averages = calculate_monthly_averages(transactions)

    assert averages.total_months == 1
    assert averages.avg_monthly_income == Decimal("10000")
    assert averages.avg_monthly_expenses == Decimal("6000")


def test_window_is_six_calendar_months_inclusive():
    transactions = [
        make_transaction("edge", "income", "100", datetime(2026, 4, 15, 12, 0, tzinfo=timezone.utc)),
        make_transaction("before", "income", "100", datetime(2026, 4, 15, 11, 59, tzinfo=timezone.utc)),
    ]

    recent = recent_transactions(transactions, FIXED_NOW)

    assert [t.id for t in recent] == ["edge"]


def test_naive_dates_are_treated_as_utc():
    transactions = [make_transaction("naive", "expense", "250", datetime(2026, 10, 1))]

    recent = recent_transactions(transactions, FIXED_NOW)
    averages = calculate_monthly_averages(recent)

    assert len(recent) == 1
    assert averages.avg_monthly_expenses == Decimal("250")


def test_month_grouping_uses_utc():
    """23:30 on 31 Oct in UTC+3 is still October in UTC; 02:00 on 1 Nov in UTC+3 is October too"""
    istanbul = timezone(timedelta(hours=3))
    transactions = [
        make_transaction("1", "income", "1000", datetime(2026, 10, 31, 23, 30, tzinfo=istanbul)),
        make_transaction("2", "income", "1000", datetime(2026, 11, 1, 2, 0, tzinfo=istanbul)),
    ]

    averages = calculate_monthly_averages(transactions)

    assert averages.total_months == 1
    assert averages.avg_monthly_income == Decimal("2000")
