"""Pytest fixtures for testing"""

import pytest
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Generator
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finbot_forecast.api.main import create_app
from finbot_forecast.infrastructure.database.models import (
    AccountRecord,
    Base,
    CreditRecord,
    FixedExpenseRecord,
    TransactionRecord,
)
from finbot_forecast.infrastructure.database.session import get_db
from finbot_forecast.domain.models import (
    Account,
    Credit,
    FixedExpense,
    Forecast,
    ForecastInput,
    ScenarioParameters,
    Transaction,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FIXED_NOW = datetime(2026, 10, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def make_params(
    income: str = "1.0",
    expense: str = "1.0",
    fixed: str = "1.0",
    credit: str = "1.0",
    months: int = 3,
) -> ScenarioParameters:
    return ScenarioParameters(
        income_multiplier=income,
        expense_multiplier=expense,
        fixed_expense_multiplier=fixed,
        credit_payment_multiplier=credit,
        months_to_project=months,
    )


def make_transaction(txn_id: str, type_: str, amount: str, date: datetime) -> Transaction:
    return Transaction(
        id=txn_id,
        account_id="acc_1",
        type=type_,
        amount=Decimal(amount),
        date=date,
        category="test",
        description="Test",
    )


def stored_forecast(forecast: ForecastInput) -> Forecast:
    """Mimic a store assigning identity to a forecast"""
    return Forecast(**asdict(forecast), id="forecast_1", created_at=FIXED_NOW)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Three months of 10,000 income and 6,000 expenses inside the window, one stale month outside"""
    transactions = []
    for i, month_start in enumerate(
        [datetime(2026, 8, 5, tzinfo=timezone.utc), datetime(2026, 9, 5, tzinfo=timezone.utc), datetime(2026, 10, 5, tzinfo=timezone.utc)]
    ):
        transactions.append(make_transaction(f"salary_{i}", "income", "10000", month_start))
        transactions.append(make_transaction(f"rent_{i}", "expense", "4000", month_start + timedelta(days=1)))
        transactions.append(make_transaction(f"groceries_{i}", "expense", "2000", month_start + timedelta(days=10)))

    # Older than six months: ignored
    transactions.append(make_transaction("stale", "income", "999999", datetime(2026, 3, 1, tzinfo=timezone.utc)))
    return transactions


@pytest.fixture
def store(sample_transactions: list[Transaction]) -> AsyncMock:
    """Finance store double with a 50,000 balance and no fixed expenses or credits"""
    store = AsyncMock()
    store.get_accounts.return_value = [
        Account(id="acc_1", balance=Decimal("30000")),
        Account(id="acc_2", balance=Decimal("20000")),
    ]
    store.get_transactions.return_value = sample_transactions
    store.get_fixed_expenses.return_value = []
    store.get_credits.return_value = []
    store.create_forecast.side_effect = stored_forecast
    return store


@pytest.fixture
def fixed_expenses() -> list[FixedExpense]:
    return [
        FixedExpense(id="rent", amount=Decimal("3000"), recurrence="monthly", type="expense"),
        FixedExpense(id="insurance", amount=Decimal("1200"), recurrence="yearly", type="expense"),
        FixedExpense(id="grant", amount=Decimal("500"), recurrence="monthly", type="income"),
        FixedExpense(id="old_lease", amount=Decimal("800"), recurrence="monthly", type="expense", is_active=False),
    ]


@pytest.fixture
def credits() -> list[Credit]:
    return [
        Credit(id="card", minimum_payment=Decimal("1000")),
        Credit(id="loan", minimum_payment=Decimal("500"), status="active"),
        Credit(id="paid", minimum_payment=Decimal("700"), status="paid_off"),
        Credit(id="closed", minimum_payment=Decimal("900"), is_active=False),
        Credit(id="receivable", minimum_payment=None),
    ]


@pytest.fixture
def seeded_db(db: Session) -> Session:
    """
    One month of history: 10,000 income, 6,000 expenses, 1,000 monthly rent
    and a 500 minimum payment across 50,000 of balances, plus rows that
    must be ignored.
    """
    recently = datetime.now(timezone.utc) - timedelta(hours=1)
    deleted = datetime.now(timezone.utc)

    db.add_all(
        [
            AccountRecord(id="acc_1", user_id="u1", type="personal", bank_name="Ziraat", account_name="Vadesiz", balance=Decimal("30000")),
            AccountRecord(id="acc_2", user_id="u1", type="company", bank_name="Garanti", account_name="Ticari", balance=Decimal("20000")),
            AccountRecord(id="acc_gone", user_id="u1", type="personal", bank_name="Akbank", account_name="Eski", balance=Decimal("99999"), deleted_at=deleted),
            TransactionRecord(id="t_income", account_id="acc_1", type="income", amount=Decimal("10000"), description="Maaş", date=recently),
            TransactionRecord(id="t_expense", account_id="acc_1", type="expense", amount=Decimal("6000"), description="Market", date=recently),
            TransactionRecord(id="t_transfer", account_id="acc_1", type="transfer_out", amount=Decimal("500"), description="Virman", date=recently),
            TransactionRecord(id="t_deleted", account_id="acc_1", type="expense", amount=Decimal("1000000"), description="Hatalı", date=recently, deleted_at=deleted),
            FixedExpenseRecord(id="f_rent", title="Kira", amount=Decimal("1000"), type="expense", recurrence="monthly"),
            FixedExpenseRecord(id="f_tax", title="Emlak vergisi", amount=Decimal("5000"), type="expense", recurrence="yearly"),
            CreditRecord(id="c_card", title="Kredi kartı", type="credit_card", amount=Decimal("20000"), remaining_amount=Decimal("8000"), minimum_payment=Decimal("500")),
            CreditRecord(id="c_paid", title="İhtiyaç kredisi", type="bank_loan", amount=Decimal("10000"), remaining_amount=Decimal("0"), minimum_payment=Decimal("700"), status="paid_off"),
            CreditRecord(id="c_deleted", title="Eski kart", type="credit_card", amount=Decimal("5000"), remaining_amount=Decimal("5000"), minimum_payment=Decimal("900"), deleted_at=deleted),
        ]
    )
    db.commit()
    return db
