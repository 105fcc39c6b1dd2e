"""Projection engine - month-by-month cash flow under scenario multipliers"""

from decimal import Decimal
from typing import Iterable, List, Sequence

from finbot_forecast.domain.models import (
    Credit,
    FixedExpense,
    MonthlyAverages,
    MonthlyProjection,
    ScenarioParameters,
)


def monthly_fixed_expenses(fixed_expenses: Iterable[FixedExpense]) -> Decimal:
    """
    Sum of active monthly fixed expenses.

    Weekly, quarterly, yearly and one-time items contribute nothing; only
    monthly obligations are projected.
    """
    return sum(
        (
            e.amount
            for e in fixed_expenses
            if e.is_active and e.type == "expense" and e.recurrence == "monthly"
        ),
        Decimal("0"),
    )


def monthly_credit_payments(credits: Iterable[Credit]) -> Decimal:
    """Sum of minimum payments over active credits"""
    return sum(
        (
            c.minimum_payment or Decimal("0")
            for c in credits
            if c.is_active and c.status == "active"
        ),
        Decimal("0"),
    )


def project_monthly_cash_flows(
    averages: MonthlyAverages,
    fixed_expenses: Sequence[FixedExpense],
    credits: Sequence[Credit],
    parameters: ScenarioParameters,
) -> List[MonthlyProjection]:
    """
    Project `months_to_project` months of cash flow.

    Every month applies the same multipliers to the same baseline, so the
    per-month figures are constant; only the cumulative balance grows.
    cumulative_balance starts from zero and does not include account balances.
    """
    income = averages.avg_monthly_income * parameters.income_multiplier
    expenses = averages.avg_monthly_expenses * parameters.expense_multiplier
    fixed = monthly_fixed_expenses(fixed_expenses) * parameters.fixed_expense_multiplier
    credit_payments = monthly_credit_payments(credits) * parameters.credit_payment_multiplier
    net_cash_flow = income - expenses - fixed - credit_payments

    projections: List[MonthlyProjection] = []
    cumulative = Decimal("0")
    for month in range(1, parameters.months_to_project + 1):
        cumulative += net_cash_flow
        projections.append(
            MonthlyProjection(
                month=month,
                income=income,
                expenses=expenses,
                fixed_expenses=fixed,
                credit_payments=credit_payments,
                net_cash_flow=net_cash_flow,
                cumulative_balance=cumulative,
            )
        )

    return projections


def calculate_projected_balance(current_balance: Decimal, projections: Iterable[MonthlyProjection]) -> Decimal:
    """Current total account balance plus every projected net cash flow"""
    return current_balance + sum((p.net_cash_flow for p in projections), Decimal("0"))
