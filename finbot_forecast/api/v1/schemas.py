"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from finbot_forecast.domain.models import ScenarioParameters


class ScenarioParametersSchema(BaseModel):
    """Scenario multipliers; 1.0 = unchanged"""

    income_multiplier: float = Field(1.0, gt=0, description="Applied to average monthly income")
    expense_multiplier: float = Field(1.0, gt=0, description="Applied to average monthly expenses")
    fixed_expense_multiplier: float = Field(1.0, gt=0, description="Applied to monthly fixed expenses")
    credit_payment_multiplier: float = Field(1.0, gt=0, description="Applied to minimum credit payments")
    months_to_project: int = Field(12, ge=1, le=120, description="Projection horizon in months")

    def to_domain(self) -> ScenarioParameters:
        return ScenarioParameters(
            income_multiplier=self.income_multiplier,
            expense_multiplier=self.expense_multiplier,
            fixed_expense_multiplier=self.fixed_expense_multiplier,
            credit_payment_multiplier=self.credit_payment_multiplier,
            months_to_project=self.months_to_project,
        )

    @classmethod
    def from_domain(cls, parameters: ScenarioParameters) -> "ScenarioParametersSchema":
        return cls(
            income_multiplier=float(parameters.income_multiplier),
            expense_multiplier=float(parameters.expense_multiplier),
            fixed_expense_multiplier=float(parameters.fixed_expense_multiplier),
            credit_payment_multiplier=float(parameters.credit_payment_multiplier),
            months_to_project=parameters.months_to_project,
        )


class AnalyzeScenarioRequest(BaseModel):
    """Request body for POST /v1/scenarios/analyze"""

    scenario_name: str = Field(..., min_length=1, max_length=255, description="Scenario title")
    parameters: ScenarioParametersSchema


class MonthlyProjectionSchema(BaseModel):
    """Single projected month"""

    month: int
    income: float
    expenses: float
    fixed_expenses: float
    credit_payments: float
    net_cash_flow: float
    cumulative_balance: float


class RiskAssessmentSchema(BaseModel):
    risk_level: str
    risk_factors: List[str]
    recommendations: List[str]


class ForecastSchema(BaseModel):
    """Persisted forecast record"""

    id: str
    title: str
    description: str
    type: str
    scenario: str
    forecast_date: datetime
    target_date: datetime
    predicted_value: float
    confidence_interval: float
    lower_bound: float
    upper_bound: float
    currency: str
    category: str
    parameters: str
    is_active: bool
    created_at: Optional[datetime] = None


class ScenarioResultResponse(BaseModel):
    """Response for scenario analysis endpoints"""

    scenario: str
    parameters: ScenarioParametersSchema
    projected_balance: float
    monthly_projections: List[MonthlyProjectionSchema]
    risk_assessment: RiskAssessmentSchema
    forecast: ForecastSchema


class BatchAnalysisResponse(BaseModel):
    """Response for POST /v1/scenarios/batch"""

    results: List[ScenarioResultResponse]


class PredefinedScenarioSchema(BaseModel):
    name: str
    description: str
    parameters: ScenarioParametersSchema


class ScenarioCatalogResponse(BaseModel):
    """Response for GET /v1/scenarios"""

    scenarios: List[PredefinedScenarioSchema]


class ForecastHistoryResponse(BaseModel):
    """Response for GET /v1/forecasts"""

    forecasts: List[ForecastSchema]
