"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from finbot_forecast.config import settings
from finbot_forecast.domain.analysis import ScenarioAnalyzer
from finbot_forecast.domain.store import FinanceStore
from finbot_forecast.infrastructure.clients.finance_api import FinanceApiClient
from finbot_forecast.infrastructure.database.repositories import SqlFinanceStore
from finbot_forecast.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_finance_store(db: Session = Depends(get_db)) -> FinanceStore:
    """Provide the configured finance store backend"""
    if settings.store_backend == "http":
        return FinanceApiClient()
    return SqlFinanceStore(db)


def get_scenario_analyzer(store: FinanceStore = Depends(get_finance_store)) -> ScenarioAnalyzer:
    """Provide a scenario analyzer bound to the request's finance store"""
    return ScenarioAnalyzer(
        store,
        currency=settings.default_currency,
        history_months=settings.history_window_months,
    )
