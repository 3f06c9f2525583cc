# pos_ledger/business_logic/forecast.py
"""
Forecast collaborators for AffordabilityProjector.

Anything with a forecast_net_cash_flow(duration_months) method can be passed in;
two simple providers ship here.
"""

from datetime import date
from typing import List, Optional, Protocol, Sequence

from pos_ledger.business_logic.entities import SaleEntity, ExpenseEntity
from pos_ledger.business_logic.period_aggregator import PeriodAggregator
from pos_ledger.business_logic.profit_calculator import filter_sales
from pos_ledger.constants import SalesFilterMode
from pos_ledger.utils.date_converter import DateLike, add_months
import logging

logger = logging.getLogger(__name__)


class ForecastProvider(Protocol):
    def forecast_net_cash_flow(self, duration_months: int) -> List[float]:
        ...


class StaticForecast:
    """A forecast supplied as plain numbers (manual entry or an external model's output)."""

    def __init__(self, values: Sequence[float]):
        self.values = [float(v) for v in values]

    def forecast_net_cash_flow(self, duration_months: int) -> List[float]:
        return self.values[:duration_months]


class TrendForecaster:
    """
    Flat forecast: the average monthly net flow (sales minus expenses) of the last
    `lookback_months` complete months, repeated for every projected month.
    Voided sales and quotations do not count as income.
    """

    def __init__(self,
                 sales: Sequence[SaleEntity],
                 expenses: Sequence[ExpenseEntity],
                 lookback_months: int = 3,
                 today: Optional[DateLike] = None):
        if lookback_months <= 0:
            raise ValueError("lookback_months must be positive.")
        self.sales = filter_sales(sales, SalesFilterMode.ALL_EXCEPT_VOID_AND_QUOTE)
        self.expenses = list(expenses)
        self.lookback_months = lookback_months
        self.today = today or date.today()
        self.aggregator = PeriodAggregator()

    def historical_net_flows(self) -> List[float]:
        """Net flow per month for the lookback window, oldest first."""
        last_complete = add_months(self.today, -1)
        income = self.aggregator.trailing_months(self.sales, self.lookback_months, last_complete)
        spend = self.aggregator.trailing_months(self.expenses, self.lookback_months, last_complete)
        return [income[month] - spend[month] for month in income]

    def forecast_net_cash_flow(self, duration_months: int) -> List[float]:
        flows = self.historical_net_flows()
        average = sum(flows) / len(flows) if flows else 0.0
        logger.debug(f"Trend forecast: average net flow {average:.2f} over {len(flows)} month(s).")
        return [average] * max(duration_months, 0)
