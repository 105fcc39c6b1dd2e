"""Finance tracker REST API client used as a finance store"""

import httpx
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from finbot_forecast.domain.models import Account, Credit, FixedExpense, Forecast, ForecastInput, Transaction
from finbot_forecast.domain.exceptions import DataFetchError, PersistenceError
from finbot_forecast.config import settings


def _parse_datetime(value: str) -> datetime:
    # JSON.stringify emits a trailing "Z" for UTC
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _optional_decimal(value: Any) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class FinanceApiClient:
    """
    Client for the finance tracker's REST API.

    Payloads are camelCase JSON arrays with decimals serialised as strings.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.finance_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    async def _get_list(self, path: str) -> List[Dict[str, Any]]:
        """
        GET a collection endpoint.

        Raises:
            DataFetchError: On timeout, HTTP errors, or a non-list response
        """
        async with self._client() as client:
            try:
                response = await client.get(path)
                response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as e:
                raise DataFetchError(f"Finance API timeout after {self.timeout}s on {path}") from e
            except httpx.HTTPStatusError as e:
                raise DataFetchError(f"Finance API error on {path}: {e.response.status_code}") from e
            except (httpx.RequestError, ValueError) as e:
                raise DataFetchError(f"Finance API request failed on {path}: {e}") from e

        if not isinstance(data, list):
            raise DataFetchError(f"Expected a list from {path}, got {type(data).__name__}")
        return data

    async def get_accounts(self) -> List[Account]:
        data = await self._get_list("/api/accounts")
        try:
            return [
                Account(
                    id=str(item["id"]),
                    balance=Decimal(str(item["balance"])),
                    currency=item.get("currency", "TRY"),
                    is_active=item.get("isActive", True),
                )
                for item in data
            ]
        except (KeyError, TypeError, InvalidOperation) as e:
            raise DataFetchError(f"Invalid account data from finance API: {e}") from e

    async def get_transactions(self) -> List[Transaction]:
        data = await self._get_list("/api/transactions")
        try:
            return [
                Transaction(
                    id=str(item["id"]),
                    account_id=str(item["accountId"]),
                    type=item["type"],
                    amount=Decimal(str(item["amount"])),
                    date=_parse_datetime(item["date"]),
                    category=item.get("category"),
                    description=item.get("description") or "",
                )
                for item in data
            ]
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise DataFetchError(f"Invalid transaction data from finance API: {e}") from e

    async def get_fixed_expenses(self) -> List[FixedExpense]:
        data = await self._get_list("/api/fixed-expenses")
        try:
            return [
                FixedExpense(
                    id=str(item["id"]),
                    amount=Decimal(str(item["amount"])),
                    recurrence=item["recurrence"],
                    type=item["type"],
                    is_active=item.get("isActive", True),
                )
                for item in data
            ]
        except (KeyError, TypeError, InvalidOperation) as e:
            raise DataFetchError(f"Invalid fixed expense data from finance API: {e}") from e

    async def get_credits(self) -> List[Credit]:
        data = await self._get_list("/api/credits")
        try:
            return [
                Credit(
                    id=str(item["id"]),
                    minimum_payment=_optional_decimal(item.get("minimumPayment")),
                    is_active=item.get("isActive", True),
                    status=item.get("status", "active"),
                )
                for item in data
            ]
        except (KeyError, TypeError, InvalidOperation) as e:
            raise DataFetchError(f"Invalid credit data from finance API: {e}") from e

    async def create_forecast(self, forecast: ForecastInput) -> Forecast:
        """
        POST the forecast record and return the stored copy.

        Raises:
            PersistenceError: On timeout, HTTP errors, or invalid response
        """
        payload = {
            "title": forecast.title,
            "description": forecast.description,
            "type": forecast.type,
            "scenario": forecast.scenario,
            "forecastDate": forecast.forecast_date.isoformat(),
            "targetDate": forecast.target_date.isoformat(),
            "predictedValue": str(forecast.predicted_value),
            "confidenceInterval": str(forecast.confidence_interval),
            "lowerBound": str(forecast.lower_bound),
            "upperBound": str(forecast.upper_bound),
            "currency": forecast.currency,
            "category": forecast.category,
            "parameters": forecast.parameters,
            "isActive": forecast.is_active,
        }

        async with self._client() as client:
            try:
                response = await client.post("/api/forecasts", json=payload)
                response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as e:
                raise PersistenceError(f"Finance API timeout after {self.timeout}s saving forecast") from e
            except httpx.HTTPStatusError as e:
                raise PersistenceError(f"Finance API error saving forecast: {e.response.status_code}") from e
            except (httpx.RequestError, ValueError) as e:
                raise PersistenceError(f"Finance API request failed saving forecast: {e}") from e

        try:
            return Forecast(
                id=str(data["id"]),
                title=data.get("title", forecast.title),
                description=data.get("description") or forecast.description,
                type=data.get("type", forecast.type),
                scenario=data.get("scenario") or forecast.scenario,
                forecast_date=forecast.forecast_date,
                target_date=forecast.target_date,
                predicted_value=forecast.predicted_value,
                confidence_interval=forecast.confidence_interval,
                lower_bound=forecast.lower_bound,
                upper_bound=forecast.upper_bound,
                currency=data.get("currency", forecast.currency),
                category=data.get("category") or forecast.category,
                parameters=forecast.parameters,
                is_active=data.get("isActive", forecast.is_active),
                created_at=_parse_datetime(data["createdAt"]) if data.get("createdAt") else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Invalid forecast response from finance API: {e}") from e
