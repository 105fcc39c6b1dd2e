"""Unit tests for the database-backed finance store"""

import pytest
from decimal import Decimal
from unittest.mock import patch
from sqlalchemy.exc import OperationalError
from conftest import FIXED_NOW, make_params
from finbot_forecast.domain.analysis import ScenarioAnalyzer, build_forecast_input
from finbot_forecast.domain.exceptions import DataFetchError, PersistenceError
from finbot_forecast.domain.models import RiskLevel
from finbot_forecast.infrastructure.database.models import ForecastRecord
from finbot_forecast.infrastructure.database.repositories import SqlFinanceStore


async def test_soft_deleted_rows_are_excluded(seeded_db):
    store = SqlFinanceStore(seeded_db)

    accounts = await store.get_accounts()
    transactions = await store.get_transactions()
    credits = await store.get_credits()

    assert sorted(a.id for a in accounts) == ["acc_1", "acc_2"]
    assert "t_deleted" not in {t.id for t in transactions}
    assert sorted(c.id for c in credits) == ["c_card", "c_paid"]


async def test_amounts_are_decimals(seeded_db):
    store = SqlFinanceStore(seeded_db)

    fixed = await store.get_fixed_expenses()

    assert {f.id: f.amount for f in fixed} == {"f_rent": Decimal("1000"), "f_tax": Decimal("5000")}


async def test_create_forecast_assigns_id_without_committing(db):
    store = SqlFinanceStore(db)
    forecast_input = build_forecast_input("Gelir %10 Azalması", make_params(months=12), Decimal("62000"), FIXED_NOW)

    forecast = await store.create_forecast(forecast_input)

    assert forecast.id
    assert forecast.scenario == "gelir_%10_azalması"
    assert forecast.predicted_value == Decimal("62000")
    assert forecast.lower_bound == Decimal("52700")

    db.rollback()
    assert db.query(ForecastRecord).count() == 0


async def test_forecast_history_and_lookup(db):
    store = SqlFinanceStore(db)
    for name in ["Birinci", "İkinci"]:
        await store.create_forecast(build_forecast_input(name, make_params(), Decimal("100"), FIXED_NOW))
    db.commit()

    history = store.get_scenario_forecasts(limit=10)

    assert {f.title for f in history} == {"Birinci", "İkinci"}
    assert store.get_forecast_by_id(history[0].id).title == history[0].title
    assert store.get_forecast_by_id("missing") is None
    assert len(store.get_scenario_forecasts(limit=1)) == 1


async def test_query_failure_raises_data_fetch_error(db):
    store = SqlFinanceStore(db)

    with patch.object(db, "query", side_effect=OperationalError("SELECT", {}, Exception("locked"))):
        with pytest.raises(DataFetchError):
            await store.get_accounts()


async def test_flush_failure_raises_persistence_error(db):
    store = SqlFinanceStore(db)
    forecast_input = build_forecast_input("Test", make_params(), Decimal("0"), FIXED_NOW)

    with patch.object(db, "flush", side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))):
        with pytest.raises(PersistenceError):
            await store.create_forecast(forecast_input)


async def test_analyzer_over_database(seeded_db):
    """10,000 - 6,000 - 1,000 rent - 500 card = 2,500 per month on 50,000"""
    analyzer = ScenarioAnalyzer(SqlFinanceStore(seeded_db))

    result = await analyzer.analyze("Veritabanı", make_params(months=4))

    assert [p.net_cash_flow for p in result.monthly_projections] == [Decimal("2500")] * 4
    assert result.projected_balance == Decimal("60000")
    assert result.risk_assessment.risk_level == RiskLevel.LOW
    assert seeded_db.query(ForecastRecord).count() == 1
