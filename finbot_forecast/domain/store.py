"""Finance store interface consumed by the scenario analyzer"""

from typing import List, Protocol

from finbot_forecast.domain.models import Account, Credit, FixedExpense, Forecast, ForecastInput, Transaction


class FinanceStore(Protocol):
    """
    Read-only snapshot fetches plus forecast persistence.

    Implementations raise DataFetchError for failed reads and
    PersistenceError for a failed forecast write.
    """

    async def get_accounts(self) -> List[Account]:
        ...

    async def get_transactions(self) -> List[Transaction]:
        ...

    async def get_fixed_expenses(self) -> List[FixedExpense]:
        ...

    async def get_credits(self) -> List[Credit]:
        ...

    async def create_forecast(self, forecast: ForecastInput) -> Forecast:
        ...
