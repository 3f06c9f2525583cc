# pos_ledger/business_logic/profit_calculator.py

from typing import Callable, Dict, Iterable, List, Optional, Sequence

from pos_ledger.business_logic.entities import (
    SaleEntity, SaleItemEntity, ExpenseEntity, ProductEntity, CategoryEntity,
    MonthlyFinancialReport, PeriodMetrics, CategoryAmount,
)
from pos_ledger.business_logic.period_aggregator import PeriodAggregator
from pos_ledger.constants import Granularity, SaleStatus, SalesFilterMode, UNCATEGORIZED
from pos_ledger.utils.date_converter import DateLike, as_date, in_month
import logging

logger = logging.getLogger(__name__)

ProductCostLookup = Callable[[int], Optional[float]]

_EXCLUDED_STATUSES = {
    SalesFilterMode.ALL_EXCEPT_VOID_AND_QUOTE: {SaleStatus.VOIDED, SaleStatus.QUOTATION},
    SalesFilterMode.EXCLUDE_VOIDED: {SaleStatus.VOIDED},
}


def compute_change(current: float, previous: float) -> float:
    """
    Percentage change from previous to current.
    A zero previous value yields 100 when current is positive and 0 otherwise.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def filter_sales(sales: Iterable[SaleEntity], mode: SalesFilterMode) -> List[SaleEntity]:
    if mode == SalesFilterMode.REALIZED_ONLY:
        return [s for s in sales if s.status == SaleStatus.COMPLETED]
    excluded = _EXCLUDED_STATUSES[mode]
    return [s for s in sales if s.status not in excluded]


class ProfitCalculator:
    """
    Derives revenue, cost of goods sold, gross/net profit and margins from sales
    and expenses.

    COGS for an item is its recorded `cogs` when present, otherwise
    product_cost_lookup(product_id) * quantity. A lookup that finds nothing
    contributes zero; such misses are counted in `cost_lookup_misses` so an
    incomplete catalog shows up instead of silently understating COGS.
    """

    def __init__(self, product_cost_lookup: Optional[ProductCostLookup] = None):
        self.product_cost_lookup = product_cost_lookup or (lambda product_id: None)
        self.aggregator = PeriodAggregator()
        # Keyed by object identity; holding the item keeps its id from being reused.
        self._missed_items: Dict[int, SaleItemEntity] = {}

    @property
    def cost_lookup_misses(self) -> int:
        """Distinct sale items that fell back to zero COGS, however often they were evaluated."""
        return len(self._missed_items)

    def item_cogs(self, item: SaleItemEntity) -> float:
        if item.cogs is not None:
            return item.cogs
        buy_price = self.product_cost_lookup(item.product_id)
        if buy_price is None:
            self._missed_items[id(item)] = item
            logger.debug(f"No buy price for product ID {item.product_id}; item contributes zero COGS.")
            return 0.0
        return buy_price * item.quantity

    def sale_cogs(self, sale: SaleEntity) -> float:
        return sum((self.item_cogs(item) for item in sale.items), 0.0)

    def compute_report(self,
                       sales: Iterable[SaleEntity],
                       expenses: Iterable[ExpenseEntity],
                       mode: SalesFilterMode = SalesFilterMode.ALL_EXCEPT_VOID_AND_QUOTE) -> Dict[str, MonthlyFinancialReport]:
        """
        Monthly reports for every month that has sales or expenses.
        The mapping is unsorted; ordering is left to the caller.
        """
        counted = filter_sales(sales, mode)
        revenue = self.aggregator.aggregate(counted, Granularity.MONTH)
        cogs = self.aggregator.aggregate(counted, Granularity.MONTH, amount_of=self.sale_cogs)
        expense_totals = self.aggregator.aggregate(expenses, Granularity.MONTH)
        return self._build_reports(set(revenue) | set(expense_totals), revenue, cogs, expense_totals)

    def compute_trailing_reports(self,
                                 sales: Iterable[SaleEntity],
                                 expenses: Iterable[ExpenseEntity],
                                 months: int = 12,
                                 today: Optional[DateLike] = None,
                                 mode: SalesFilterMode = SalesFilterMode.ALL_EXCEPT_VOID_AND_QUOTE) -> List[MonthlyFinancialReport]:
        """The last `months` months, oldest first, with empty months reported as zeros."""
        counted = filter_sales(sales, mode)
        revenue = self.aggregator.trailing_months(counted, months, today)
        cogs = self.aggregator.trailing_months(counted, months, today, amount_of=self.sale_cogs)
        expense_totals = self.aggregator.trailing_months(expenses, months, today)
        reports = self._build_reports(revenue.keys(), revenue, cogs, expense_totals)
        return [reports[month] for month in revenue]

    @staticmethod
    def _build_reports(months: Iterable[str],
                       revenue: Dict[str, float],
                       cogs: Dict[str, float],
                       expenses: Dict[str, float]) -> Dict[str, MonthlyFinancialReport]:
        return {
            month: MonthlyFinancialReport(
                month=month,
                revenue=revenue.get(month, 0.0),
                cogs=cogs.get(month, 0.0),
                expenses=expenses.get(month, 0.0),
            )
            for month in months
        }

    def period_metrics(self,
                       sales: Iterable[SaleEntity],
                       start: DateLike,
                       end: DateLike,
                       mode: SalesFilterMode = SalesFilterMode.REALIZED_ONLY) -> PeriodMetrics:
        """Revenue, COGS and transaction count of sales dated in [start, end)."""
        start_d, end_d = as_date(start), as_date(end)
        in_period = [s for s in filter_sales(sales, mode) if start_d <= as_date(s.date) < end_d]
        return PeriodMetrics(
            revenue=sum((s.total for s in in_period), 0.0),
            cogs=sum((self.sale_cogs(s) for s in in_period), 0.0),
            transactions=len(in_period),
        )

    def profit_by_category(self,
                           sales: Iterable[SaleEntity],
                           products: Sequence[ProductEntity],
                           categories: Sequence[CategoryEntity],
                           month: str,
                           limit: int = 5) -> List[CategoryAmount]:
        """
        Item profit ((sell price - buy price) * quantity) of completed sales in
        `month`, grouped by product category. Items whose product is unknown are
        skipped; only categories with a positive profit are returned, best first.
        """
        products_by_id = {p.id: p for p in products}
        category_names = {c.id: c.name for c in categories}
        profit: Dict[Optional[int], float] = {}

        for sale in filter_sales(sales, SalesFilterMode.REALIZED_ONLY):
            if not in_month(sale.date, month):
                continue
            for item in sale.items:
                product = products_by_id.get(item.product_id)
                if product is None:
                    continue
                profit[product.category_id] = profit.get(product.category_id, 0.0) + (item.sell_price - product.buy_price) * item.quantity

        ranked = sorted(
            (CategoryAmount(category_id=cid, name=category_names.get(cid, UNCATEGORIZED), amount=amount)
             for cid, amount in profit.items() if amount > 0),
            key=lambda c: c.amount,
            reverse=True,
        )
        return ranked[:limit]

