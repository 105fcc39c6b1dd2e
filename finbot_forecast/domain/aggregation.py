"""Historical aggregation - reduces the trailing transaction window to monthly averages"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List

from finbot_forecast.domain.models import MonthlyAverages, Transaction
from finbot_forecast.utils.date_utils import as_utc, month_key, subtract_months

HISTORY_WINDOW_MONTHS = 6


def recent_transactions(
    transactions: Iterable[Transaction],
    now: datetime,
    months: int = HISTORY_WINDOW_MONTHS,
) -> List[Transaction]:
    """Keep transactions dated on or after `now` minus `months` calendar months"""
    window_start = subtract_months(as_utc(now), months)
    return [t for t in transactions if as_utc(t.date) >= window_start]


def calculate_monthly_averages(transactions: Iterable[Transaction]) -> MonthlyAverages:
    """
    Group transactions by calendar month and average the per-month totals.

    An empty window yields zero averages rather than an error, so callers
    never divide by zero. Types other than income/expense are ignored and
    do not make a month count on their own.
    """
    monthly_totals: Dict[str, Dict[str, Decimal]] = {}

    for txn in transactions:
        if txn.type not in ("income", "expense"):
            continue
        totals = monthly_totals.setdefault(
            month_key(txn.date), {"income": Decimal("0"), "expense": Decimal("0")}
        )
        totals[txn.type] += txn.amount

    total_months = len(monthly_totals)
    if total_months == 0:
        return MonthlyAverages(
            avg_monthly_income=Decimal("0"),
            avg_monthly_expenses=Decimal("0"),
            total_months=0,
        )

    total_income = sum((m["income"] for m in monthly_totals.values()), Decimal("0"))
    total_expenses = sum((m["expense"] for m in monthly_totals.values()), Decimal("0"))

    return MonthlyAverages(
        avg_monthly_income=total_income / total_months,
        avg_monthly_expenses=total_expenses / total_months,
        total_months=total_months,
    )
