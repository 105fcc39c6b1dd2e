"""Scenario analysis endpoints - catalog, single analysis and batch run"""

import time
import logging
from typing import Awaitable, Callable, List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finbot_forecast.api.v1.schemas import (
    AnalyzeScenarioRequest,
    BatchAnalysisResponse,
    ForecastSchema,
    MonthlyProjectionSchema,
    PredefinedScenarioSchema,
    RiskAssessmentSchema,
    ScenarioCatalogResponse,
    ScenarioParametersSchema,
    ScenarioResultResponse,
)
from finbot_forecast.api.dependencies import get_request_id, get_scenario_analyzer
from finbot_forecast.config import settings
from finbot_forecast.domain.analysis import ScenarioAnalyzer
from finbot_forecast.domain.catalog import find_scenario, get_predefined_scenarios
from finbot_forecast.domain.exceptions import (
    SCENARIO_ANALYSIS_FAILED_MESSAGE,
    InvalidScenarioParametersError,
    ScenarioAnalysisError,
    ScenarioNotFoundError,
)
from finbot_forecast.domain.models import Forecast, ScenarioResult
from finbot_forecast.infrastructure.database.session import get_db
from finbot_forecast.infrastructure.observability.metrics import record_scenario_analysis, scenario_analysis_failure_counter
from finbot_forecast.infrastructure.observability.logging import log_scenario_analysis

router = APIRouter()


def require_scenarios_enabled() -> None:
    if not settings.enable_scenarios:
        raise HTTPException(status_code=503, detail="Scenario analysis is disabled")


def forecast_to_schema(forecast: Forecast) -> ForecastSchema:
    return ForecastSchema(
        id=forecast.id,
        title=forecast.title,
        description=forecast.description,
        type=forecast.type,
        scenario=forecast.scenario,
        forecast_date=forecast.forecast_date,
        target_date=forecast.target_date,
        predicted_value=float(forecast.predicted_value),
        confidence_interval=float(forecast.confidence_interval),
        lower_bound=float(forecast.lower_bound),
        upper_bound=float(forecast.upper_bound),
        currency=forecast.currency,
        category=forecast.category,
        parameters=forecast.parameters,
        is_active=forecast.is_active,
        created_at=forecast.created_at,
    )


def result_to_response(result: ScenarioResult) -> ScenarioResultResponse:
    return ScenarioResultResponse(
        scenario=result.scenario,
        parameters=ScenarioParametersSchema.from_domain(result.parameters),
        projected_balance=float(result.projected_balance),
        monthly_projections=[
            MonthlyProjectionSchema(
                month=p.month,
                income=float(p.income),
                expenses=float(p.expenses),
                fixed_expenses=float(p.fixed_expenses),
                credit_payments=float(p.credit_payments),
                net_cash_flow=float(p.net_cash_flow),
                cumulative_balance=float(p.cumulative_balance),
            )
            for p in result.monthly_projections
        ],
        risk_assessment=RiskAssessmentSchema(
            risk_level=result.risk_assessment.risk_level.value,
            risk_factors=result.risk_assessment.risk_factors,
            recommendations=result.risk_assessment.recommendations,
        ),
        forecast=forecast_to_schema(result.forecast),
    )


async def _run_analysis(
    run: Callable[[], Awaitable[List[ScenarioResult]]],
    db: Session,
    request_id: str,
) -> List[ScenarioResult]:
    """Run analyses, commit persisted forecasts, and record metrics and logs"""
    start_time = time.perf_counter()

    try:
        results = await run()
        db.commit()
    except (ScenarioAnalysisError, SQLAlchemyError) as e:
        scenario_analysis_failure_counter.inc()
        db.rollback()
        logging.error(f"Scenario analysis failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail=SCENARIO_ANALYSIS_FAILED_MESSAGE)

    duration = time.perf_counter() - start_time
    for result in results:
        record_scenario_analysis(result.risk_assessment.risk_level.value, duration / len(results))
        log_scenario_analysis(
            request_id,
            result.scenario,
            result.risk_assessment.risk_level.value,
            float(result.projected_balance),
            result.parameters.months_to_project,
            duration * 1000,
        )
    return results


@router.get("/scenarios", response_model=ScenarioCatalogResponse)
def list_scenarios():
    """Predefined what-if scenarios for selection UIs"""
    return ScenarioCatalogResponse(
        scenarios=[
            PredefinedScenarioSchema(
                name=s.name,
                description=s.description,
                parameters=ScenarioParametersSchema.from_domain(s.parameters),
            )
            for s in get_predefined_scenarios()
        ]
    )


@router.post(
    "/scenarios/analyze",
    response_model=ScenarioResultResponse,
    dependencies=[Depends(require_scenarios_enabled)],
)
async def analyze_scenario(
    request_body: AnalyzeScenarioRequest,
    request: Request,
    db: Session = Depends(get_db),
    analyzer: ScenarioAnalyzer = Depends(get_scenario_analyzer),
):
    """
    Analyze a custom scenario.

    Flow:
    1. Validate multipliers and projection horizon
    2. Project cash flows over the current finance snapshot
    3. Persist the scenario forecast and return the full result
    """
    request_id = get_request_id(request)

    try:
        parameters = request_body.parameters.to_domain()
    except InvalidScenarioParametersError as e:
        raise HTTPException(status_code=422, detail=str(e))

    async def run() -> List[ScenarioResult]:
        return [await analyzer.analyze(request_body.scenario_name, parameters)]

    results = await _run_analysis(run, db, request_id)
    return result_to_response(results[0])


@router.post(
    "/scenarios/batch",
    response_model=BatchAnalysisResponse,
    dependencies=[Depends(require_scenarios_enabled)],
)
async def analyze_catalog(
    request: Request,
    db: Session = Depends(get_db),
    analyzer: ScenarioAnalyzer = Depends(get_scenario_analyzer),
):
    """Run every predefined scenario against the current snapshot"""
    results = await _run_analysis(analyzer.analyze_catalog, db, get_request_id(request))
    return BatchAnalysisResponse(results=[result_to_response(r) for r in results])


@router.post(
    "/scenarios/{scenario_name}/analyze",
    response_model=ScenarioResultResponse,
    dependencies=[Depends(require_scenarios_enabled)],
)
async def analyze_predefined_scenario(
    scenario_name: str,
    request: Request,
    db: Session = Depends(get_db),
    analyzer: ScenarioAnalyzer = Depends(get_scenario_analyzer),
):
    """Analyze one predefined scenario, looked up by name or slug"""
    try:
        scenario = find_scenario(scenario_name)
    except ScenarioNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    async def run() -> List[ScenarioResult]:
        return [await analyzer.analyze(scenario.name, scenario.parameters)]

    results = await _run_analysis(run, db, get_request_id(request))
    return result_to_response(results[0])
