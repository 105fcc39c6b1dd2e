"""Risk assessment - qualitative risk level, factors and recommendations for a projection"""

from decimal import Decimal
from typing import Sequence

from finbot_forecast.domain.models import (
    MonthlyProjection,
    RiskAssessment,
    RiskLevel,
    ScenarioParameters,
)

# Strict inequalities: a multiplier of exactly 0.8 / 1.2 does not trigger
INCOME_DROP_THRESHOLD = Decimal("0.8")
EXPENSE_RISE_THRESHOLD = Decimal("1.2")
FIXED_EXPENSE_RATIO_THRESHOLD = Decimal("0.7")

LEVEL_RECOMMENDATIONS = {
    RiskLevel.HIGH: ["Kriz yönetim planı hazırlayın", "Alternatif gelir kaynakları araştırın"],
    RiskLevel.MEDIUM: ["Düzenli nakit akışı takibi yapın", "Acil durum fonu oluşturun"],
    RiskLevel.LOW: ["Mevcut durumu koruyun", "Fırsatları değerlendirin"],
}


def fixed_expense_ratio(projections: Sequence[MonthlyProjection]) -> Decimal:
    """Mean fixed expenses over mean income; 0 when there is no income to compare against"""
    if not projections:
        return Decimal("0")

    count = len(projections)
    avg_fixed = sum((p.fixed_expenses for p in projections), Decimal("0")) / count
    avg_income = sum((p.income for p in projections), Decimal("0")) / count

    return avg_fixed / avg_income if avg_income > 0 else Decimal("0")


def assess_risk(
    parameters: ScenarioParameters,
    projections: Sequence[MonthlyProjection],
    projected_balance: Decimal,
) -> RiskAssessment:
    """
    Classify scenario risk.

    Rules run in a fixed order and only ever raise the level:
    - Any month with negative net cash flow: at least medium
    - Income multiplier below 0.8: high
    - Expense multiplier above 1.2: high if already medium, otherwise medium
    - Negative projected balance: high
    - Fixed expenses above 70% of income: factor only, level unchanged

    Level-specific general recommendations are appended last.
    """
    risk_factors = []
    recommendations = []
    risk_level = RiskLevel.LOW

    negative_months = sum(1 for p in projections if p.net_cash_flow < 0)
    if negative_months > 0:
        risk_factors.append(f"{negative_months} ay boyunca negatif nakit akışı")
        risk_level = risk_level.at_least(RiskLevel.MEDIUM)

    if parameters.income_multiplier < INCOME_DROP_THRESHOLD:
        risk_factors.append("Gelirde %20+ azalma")
        risk_level = risk_level.at_least(RiskLevel.HIGH)
        recommendations.append("Gelir artırıcı önlemler alın")

    if parameters.expense_multiplier > EXPENSE_RISE_THRESHOLD:
        risk_factors.append("Giderlerde %20+ artış")
        escalated = RiskLevel.HIGH if risk_level.rank >= RiskLevel.MEDIUM.rank else RiskLevel.MEDIUM
        risk_level = risk_level.at_least(escalated)
        recommendations.append("Gider kontrolü yapın")

    if projected_balance < 0:
        risk_factors.append("Projeksiyonda negatif bakiye")
        risk_level = risk_level.at_least(RiskLevel.HIGH)
        recommendations.append("Acil nakit akışı planlaması yapın")

    if fixed_expense_ratio(projections) > FIXED_EXPENSE_RATIO_THRESHOLD:
        risk_factors.append("Sabit giderlerin gelire oranı %70+")
        recommendations.append("Sabit giderleri gözden geçirin")

    recommendations.extend(LEVEL_RECOMMENDATIONS[risk_level])

    return RiskAssessment(
        risk_level=risk_level,
        risk_factors=risk_factors,
        recommendations=recommendations,
    )
