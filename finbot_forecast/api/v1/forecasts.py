"""GET /v1/forecasts - Scenario forecast history"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from finbot_forecast.api.v1.schemas import ForecastHistoryResponse, ForecastSchema
from finbot_forecast.api.v1.scenarios import forecast_to_schema
from finbot_forecast.infrastructure.database.session import get_db
from finbot_forecast.infrastructure.database.repositories import SqlFinanceStore

router = APIRouter()


@router.get("/forecasts", response_model=ForecastHistoryResponse)
def get_forecast_history(
    limit: int = Query(20, ge=1, le=100, description="Maximum number of forecasts"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent scenario forecasts.

    Returns:
        Newest first, only active forecasts of type "scenario"
    """
    store = SqlFinanceStore(db)
    forecasts = store.get_scenario_forecasts(limit=limit)
    return ForecastHistoryResponse(forecasts=[forecast_to_schema(f) for f in forecasts])


@router.get("/forecasts/{forecast_id}", response_model=ForecastSchema)
def get_forecast(forecast_id: str, db: Session = Depends(get_db)):
    """Retrieve a single persisted forecast"""
    store = SqlFinanceStore(db)
    forecast = store.get_forecast_by_id(forecast_id)

    if not forecast:
        raise HTTPException(status_code=404, detail="Forecast not found")

    return forecast_to_schema(forecast)
