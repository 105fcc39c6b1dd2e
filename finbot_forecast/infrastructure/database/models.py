"""SQLAlchemy ORM models matching the finance tracker schema"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


class AccountRecord(Base):
    """Bank account with its current balance"""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(255), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # personal | company
    bank_name = Column(String(100), nullable=False)
    account_name = Column(String(255), nullable=False)
    balance = Column(Numeric(19, 4), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="TRY")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)


class TransactionRecord(Base):
    """Income, expense or transfer leg"""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_uuid)
    account_id = Column(String(36), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # income | expense | transfer_in | transfer_out
    amount = Column(Numeric(19, 4), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    is_active = Column(Boolean, nullable=False, default=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)


class FixedExpenseRecord(Base):
    """Recurring obligation or recurring support income"""

    __tablename__ = "fixed_expenses"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(255), nullable=False)
    amount = Column(Numeric(19, 4), nullable=False)
    currency = Column(String(3), nullable=False, default="TRY")
    category = Column(String(50), nullable=True)
    type = Column(String(20), nullable=False)  # expense | income
    recurrence = Column(String(20), nullable=False)  # monthly | quarterly | yearly | weekly | one_time
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class CreditRecord(Base):
    """Credit card, loan, receivable or payable"""

    __tablename__ = "credits"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)
    amount = Column(Numeric(19, 4), nullable=False)
    remaining_amount = Column(Numeric(19, 4), nullable=False)
    currency = Column(String(3), nullable=False, default="TRY")
    minimum_payment = Column(Numeric(19, 4), nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active | paid_off | overdue | closed
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)


class ForecastRecord(Base):
    """Persisted forecast; scenario analyses are stored with type='scenario'"""

    __tablename__ = "forecasts"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False)  # monte_carlo | prophet | scenario | trend
    scenario = Column(String(50), nullable=True)
    forecast_date = Column(DateTime(timezone=True), nullable=False)
    target_date = Column(DateTime(timezone=True), nullable=False)
    predicted_value = Column(Numeric(19, 4), nullable=False)
    confidence_interval = Column(Numeric(5, 2), nullable=True)
    lower_bound = Column(Numeric(19, 4), nullable=True)
    upper_bound = Column(Numeric(19, 4), nullable=True)
    currency = Column(String(3), nullable=False, default="TRY")
    category = Column(String(50), nullable=True)
    parameters = Column(Text, nullable=True)  # JSON string
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
