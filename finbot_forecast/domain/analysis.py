"""Scenario analysis - orchestrates fetch, aggregation, projection, risk and forecast persistence"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional, Sequence

from finbot_forecast.domain.aggregation import HISTORY_WINDOW_MONTHS, calculate_monthly_averages, recent_transactions
from finbot_forecast.domain.catalog import get_predefined_scenarios, slugify_scenario_name
from finbot_forecast.domain.exceptions import ScenarioAnalysisError
from finbot_forecast.domain.models import ForecastInput, PredefinedScenario, ScenarioParameters, ScenarioResult
from finbot_forecast.domain.projection import calculate_projected_balance, project_monthly_cash_flows
from finbot_forecast.domain.risk import assess_risk
from finbot_forecast.domain.store import FinanceStore
from finbot_forecast.utils.date_utils import add_days

SCENARIO_CONFIDENCE_INTERVAL = Decimal("85")
LOWER_BOUND_FACTOR = Decimal("0.85")
UPPER_BOUND_FACTOR = Decimal("1.15")
DAYS_PER_PROJECTED_MONTH = 30
# Width of the forecasts.scenario column
SCENARIO_SLUG_MAX_LENGTH = 50


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_forecast_input(
    scenario_name: str,
    parameters: ScenarioParameters,
    projected_balance: Decimal,
    now: datetime,
    currency: str = "TRY",
) -> ForecastInput:
    """Forecast record for a scenario run; bounds are +/-15% around the projected balance"""
    return ForecastInput(
        title=scenario_name,
        description=f"Scenario analysis: {scenario_name}",
        type="scenario",
        scenario=slugify_scenario_name(scenario_name)[:SCENARIO_SLUG_MAX_LENGTH],
        forecast_date=now,
        target_date=add_days(now, parameters.months_to_project * DAYS_PER_PROJECTED_MONTH),
        predicted_value=projected_balance,
        confidence_interval=SCENARIO_CONFIDENCE_INTERVAL,
        lower_bound=projected_balance * LOWER_BOUND_FACTOR,
        upper_bound=projected_balance * UPPER_BOUND_FACTOR,
        currency=currency,
        category="balance",
        parameters=json.dumps(parameters.to_dict()),
        is_active=True,
    )


class ScenarioAnalyzer:
    """What-if cash flow analysis over the finance store's current snapshot"""

    def __init__(
        self,
        store: FinanceStore,
        currency: str = "TRY",
        history_months: int = HISTORY_WINDOW_MONTHS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.currency = currency
        self.history_months = history_months
        self.clock = clock

    async def analyze(self, scenario_name: str, parameters: ScenarioParameters) -> ScenarioResult:
        """
        Analyze one scenario and persist its forecast.

        Flow:
        1. Fetch accounts, transactions, fixed expenses and credits concurrently
        2. Average monthly income/expenses over the trailing window
        3. Project monthly cash flows under the scenario multipliers
        4. Assess risk against the projection and the projected balance
        5. Persist the forecast record

        Raises:
            ScenarioAnalysisError: On any fetch, computation or persistence failure
        """
        try:
            accounts, transactions, fixed_expenses, credits = await asyncio.gather(
                self.store.get_accounts(),
                self.store.get_transactions(),
                self.store.get_fixed_expenses(),
                self.store.get_credits(),
            )

            now = self.clock()
            current_balance = sum((a.balance for a in accounts), Decimal("0"))

            averages = calculate_monthly_averages(
                recent_transactions(transactions, now, self.history_months)
            )
            projections = project_monthly_cash_flows(averages, fixed_expenses, credits, parameters)
            projected_balance = calculate_projected_balance(current_balance, projections)
            risk_assessment = assess_risk(parameters, projections, projected_balance)

            forecast = await self.store.create_forecast(
                build_forecast_input(scenario_name, parameters, projected_balance, now, self.currency)
            )

            return ScenarioResult(
                scenario=scenario_name,
                parameters=parameters,
                projected_balance=projected_balance,
                monthly_projections=projections,
                risk_assessment=risk_assessment,
                forecast=forecast,
            )

        except Exception as e:
            logging.exception(
                f"Scenario analysis error: {e}",
                extra={"scenario": scenario_name, "scenario_parameters": repr(parameters)},
            )
            raise ScenarioAnalysisError() from e

    async def analyze_catalog(
        self, scenarios: Optional[Sequence[PredefinedScenario]] = None
    ) -> List[ScenarioResult]:
        """Run every catalog scenario in order; the first failure aborts the batch"""
        if scenarios is None:
            scenarios = get_predefined_scenarios()

        results = []
        for scenario in scenarios:
            results.append(await self.analyze(scenario.name, scenario.parameters))
        return results
