"""Data access layer for finance entities and scenario forecasts"""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from finbot_forecast.infrastructure.database.models import (
    AccountRecord,
    CreditRecord,
    FixedExpenseRecord,
    ForecastRecord,
    TransactionRecord,
)
from finbot_forecast.domain.models import Account, Credit, FixedExpense, Forecast, ForecastInput, Transaction
from finbot_forecast.domain.exceptions import DataFetchError, PersistenceError


def to_forecast(record: ForecastRecord) -> Forecast:
    """Map a stored forecast row to the domain model"""
    return Forecast(
        id=record.id,
        title=record.title,
        description=record.description or "",
        type=record.type,
        scenario=record.scenario or "",
        forecast_date=record.forecast_date,
        target_date=record.target_date,
        predicted_value=Decimal(record.predicted_value),
        confidence_interval=Decimal(record.confidence_interval or 0),
        lower_bound=Decimal(record.lower_bound or 0),
        upper_bound=Decimal(record.upper_bound or 0),
        currency=record.currency,
        category=record.category or "",
        parameters=record.parameters or "{}",
        is_active=record.is_active,
        created_at=record.created_at,
    )


class SqlFinanceStore:
    """
    Finance store backed by the application database.

    Reads exclude soft-deleted rows. create_forecast flushes without
    committing; the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    async def get_accounts(self) -> List[Account]:
        try:
            rows = self.db.query(AccountRecord).filter(AccountRecord.deleted_at.is_(None)).all()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to load accounts: {e}") from e

        return [
            Account(id=r.id, balance=Decimal(r.balance), currency=r.currency, is_active=r.is_active)
            for r in rows
        ]

    async def get_transactions(self) -> List[Transaction]:
        try:
            rows = (
                self.db.query(TransactionRecord)
                .filter(TransactionRecord.deleted_at.is_(None))
                .order_by(TransactionRecord.date.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to load transactions: {e}") from e

        return [
            Transaction(
                id=r.id,
                account_id=r.account_id,
                type=r.type,
                amount=Decimal(r.amount),
                date=r.date,
                category=r.category,
                description=r.description,
            )
            for r in rows
        ]

    async def get_fixed_expenses(self) -> List[FixedExpense]:
        try:
            rows = self.db.query(FixedExpenseRecord).all()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to load fixed expenses: {e}") from e

        return [
            FixedExpense(
                id=r.id,
                amount=Decimal(r.amount),
                recurrence=r.recurrence,
                type=r.type,
                is_active=r.is_active,
            )
            for r in rows
        ]

    async def get_credits(self) -> List[Credit]:
        try:
            rows = self.db.query(CreditRecord).filter(CreditRecord.deleted_at.is_(None)).all()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Failed to load credits: {e}") from e

        return [
            Credit(
                id=r.id,
                minimum_payment=Decimal(r.minimum_payment) if r.minimum_payment is not None else None,
                is_active=r.is_active,
                status=r.status,
            )
            for r in rows
        ]

    async def create_forecast(self, forecast: ForecastInput) -> Forecast:
        """Persist forecast record and return it with its assigned ID"""
        record = ForecastRecord(
            title=forecast.title,
            description=forecast.description,
            type=forecast.type,
            scenario=forecast.scenario,
            forecast_date=forecast.forecast_date,
            target_date=forecast.target_date,
            predicted_value=forecast.predicted_value,
            confidence_interval=forecast.confidence_interval,
            lower_bound=forecast.lower_bound,
            upper_bound=forecast.upper_bound,
            currency=forecast.currency,
            category=forecast.category,
            parameters=forecast.parameters,
            is_active=forecast.is_active,
        )
        try:
            self.db.add(record)
            self.db.flush()  # Get ID without committing
            self.db.refresh(record)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to save forecast: {e}") from e

        return to_forecast(record)

    def get_scenario_forecasts(self, limit: int = 20) -> List[Forecast]:
        """Fetch most recent scenario forecasts"""
        rows = (
            self.db.query(ForecastRecord)
            .filter(ForecastRecord.type == "scenario", ForecastRecord.is_active.is_(True))
            .order_by(ForecastRecord.created_at.desc(), ForecastRecord.forecast_date.desc())
            .limit(limit)
            .all()
        )
        return [to_forecast(r) for r in rows]

    def get_forecast_by_id(self, forecast_id: str) -> Optional[Forecast]:
        record = self.db.query(ForecastRecord).filter(ForecastRecord.id == forecast_id).first()
        return to_forecast(record) if record else None
