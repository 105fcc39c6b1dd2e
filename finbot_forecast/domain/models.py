"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional

from finbot_forecast.domain.exceptions import InvalidScenarioParametersError


def to_decimal(value: Any) -> Decimal:
    """Convert numbers and numeric strings to Decimal without float noise (0.7 -> Decimal('0.7'))"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidOperation(f"Boolean is not a monetary value: {value!r}")
    return Decimal(str(value))


@dataclass
class Account:
    """Bank account snapshot; only the balance feeds the projection"""

    id: str
    balance: Decimal
    currency: str = "TRY"
    is_active: bool = True


@dataclass
class Transaction:
    """Recorded income or expense"""

    id: str
    account_id: str
    type: str  # "income" or "expense"
    amount: Decimal
    date: datetime
    category: Optional[str] = None
    description: str = ""


@dataclass
class FixedExpense:
    """Recurring obligation (rent, salaries) or recurring support income"""

    id: str
    amount: Decimal
    recurrence: str  # "monthly", "weekly", "quarterly", "yearly", "one_time"
    type: str  # "expense" or "income"
    is_active: bool = True


@dataclass
class Credit:
    """Loan, credit card or payable with a minimum monthly payment"""

    id: str
    minimum_payment: Optional[Decimal]
    is_active: bool = True
    status: str = "active"  # "active", "paid_off", "overdue", "closed"


@dataclass
class ScenarioParameters:
    """
    Multipliers applied to the historical baseline.

    1.0 leaves a figure unchanged, < 1.0 reduces it, > 1.0 increases it.
    Values are normalised to Decimal and validated on construction.
    """

    income_multiplier: Decimal
    expense_multiplier: Decimal
    fixed_expense_multiplier: Decimal
    credit_payment_multiplier: Decimal
    months_to_project: int

    def __post_init__(self) -> None:
        for name in (
            "income_multiplier",
            "expense_multiplier",
            "fixed_expense_multiplier",
            "credit_payment_multiplier",
        ):
            raw = getattr(self, name)
            try:
                value = to_decimal(raw)
            except (InvalidOperation, ValueError, TypeError) as e:
                raise InvalidScenarioParametersError(f"{name} must be a number, got {raw!r}") from e
            if not value.is_finite() or value <= 0:
                raise InvalidScenarioParametersError(f"{name} must be a positive number, got {raw!r}")
            setattr(self, name, value)

        months = self.months_to_project
        if isinstance(months, bool) or not isinstance(months, int) or months <= 0:
            raise InvalidScenarioParametersError(
                f"months_to_project must be a positive integer, got {months!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation stored with the forecast record"""
        return {
            "incomeMultiplier": float(self.income_multiplier),
            "expenseMultiplier": float(self.expense_multiplier),
            "fixedExpenseMultiplier": float(self.fixed_expense_multiplier),
            "creditPaymentMultiplier": float(self.credit_payment_multiplier),
            "monthsToProject": self.months_to_project,
        }


@dataclass
class MonthlyAverages:
    """Baseline derived from the trailing transaction window"""

    avg_monthly_income: Decimal
    avg_monthly_expenses: Decimal
    total_months: int


@dataclass
class MonthlyProjection:
    """One projected month; cumulative_balance excludes the starting account balance"""

    month: int
    income: Decimal
    expenses: Decimal
    fixed_expenses: Decimal
    credit_payments: Decimal
    net_cash_flow: Decimal
    cumulative_balance: Decimal


class RiskLevel(str, Enum):
    """Ordered risk lattice: low < medium < high"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANKS[self]

    def at_least(self, floor: "RiskLevel") -> "RiskLevel":
        """Raise to `floor` if currently lower; never lowers"""
        return floor if floor.rank > self.rank else self


_RISK_RANKS = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


@dataclass
class RiskAssessment:
    """Output of the risk assessor"""

    risk_level: RiskLevel
    risk_factors: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class ForecastInput:
    """Forecast record to be persisted by the finance store"""

    title: str
    description: str
    type: str
    scenario: str
    forecast_date: datetime
    target_date: datetime
    predicted_value: Decimal
    confidence_interval: Decimal
    lower_bound: Decimal
    upper_bound: Decimal
    currency: str
    category: str
    parameters: str  # JSON string
    is_active: bool = True


@dataclass
class Forecast(ForecastInput):
    """Persisted forecast with store-assigned identity"""

    id: str = ""
    created_at: Optional[datetime] = None


@dataclass
class PredefinedScenario:
    """Catalog entry usable without custom parameter entry"""

    name: str
    description: str
    parameters: ScenarioParameters


@dataclass
class ScenarioResult:
    """Complete outcome of one scenario analysis"""

    scenario: str
    parameters: ScenarioParameters
    projected_balance: Decimal
    monthly_projections: List[MonthlyProjection]
    risk_assessment: RiskAssessment
    forecast: Forecast
