# pos_ledger/business_logic/report_manager.py

from datetime import date, timedelta
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Tuple

from pos_ledger.business_logic.entities import (
    SaleEntity, ExpenseEntity, MonthlyFinancialReport, ReportTotals, CashFlowEntry,
    DashboardMetrics, CategoryAmount, BestSeller, LowStockAlert, BalanceSheet,
)
from pos_ledger.business_logic.period_aggregator import PeriodAggregator
from pos_ledger.business_logic.profit_calculator import ProfitCalculator, compute_change, filter_sales
from pos_ledger.config import (
    DEFAULT_CURRENCY, LOW_STOCK_THRESHOLD, MONTH_LABEL_CALENDAR, TOP_N_ITEMS, TRAILING_DAYS, TRAILING_MONTHS,
)
from pos_ledger.constants import (
    Granularity, MonthLabelCalendar, SalesFilterMode, UNCATEGORIZED, UNKNOWN_PRODUCT, UNKNOWN_STORE,
)
from pos_ledger.data_access.data_store import FinancialDataStore
from pos_ledger.utils.date_converter import (
    DateLike, add_months, as_date, format_date, in_month, month_bounds, month_key, month_label,
    month_start, next_month_start,
)
import logging

logger = logging.getLogger(__name__)


class ReportManager:
    """
    Finance and dashboard reports over snapshots read from a FinancialDataStore.

    Results are cached until the store's `version` changes and are handed out as
    tuples, frozen records and read-only mappings, so a caller cannot alter what
    the next caller reads. Dashboard views count completed sales only and can be
    narrowed to one store; the finance-page reports (net profit, cash flow,
    balance sheet) always cover every store.
    """

    def __init__(self,
                 store: FinancialDataStore,
                 label_calendar: Optional[MonthLabelCalendar] = None,
                 currency: str = DEFAULT_CURRENCY):
        if store is None: raise ValueError("store cannot be None")
        self.store = store
        self.label_calendar = MonthLabelCalendar(label_calendar or MONTH_LABEL_CALENDAR)
        self.currency = currency
        self.aggregator = PeriodAggregator()
        self.cost_lookup_misses = 0
        self._cache: Dict[Hashable, Any] = {}
        self._cache_version: Optional[int] = None

    # --- plumbing ---
    def _cached(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        version = self.store.version
        if version != self._cache_version:
            if self._cache:
                logger.debug(f"Store version changed ({self._cache_version} -> {version}); dropping cached reports.")
            self._cache.clear()
            self._cache_version = version
        if key not in self._cache:
            self._cache[key] = compute()
        return self._cache[key]

    # --- display helpers ---
    def label_month(self, month: str) -> str:
        """Label for a 'YYYY-MM' report row in the configured calendar."""
        return month_label(month, self.label_calendar)

    def format_amount(self, amount: float) -> str:
        return f"{amount:,.2f} {self.currency}"

    def _profit_calculator(self) -> ProfitCalculator:
        buy_prices = {p.id: p.buy_price for p in self.store.get_products()}
        return ProfitCalculator(product_cost_lookup=buy_prices.get)

    def _record_misses(self, calculator: ProfitCalculator, report_name: str) -> None:
        self.cost_lookup_misses = calculator.cost_lookup_misses
        if calculator.cost_lookup_misses:
            logger.warning(f"{report_name}: {calculator.cost_lookup_misses} sale item(s) had no buy price; "
                           f"COGS is understated.")

    def _dashboard_sales(self, store_id: Optional[int], start: date, end: date) -> List[SaleEntity]:
        """Completed sales dated in [start, end), optionally for one store."""
        sales = filter_sales(self.store.get_sales_between(start, end), SalesFilterMode.REALIZED_ONLY)
        if store_id is None:
            return sales
        return [s for s in sales if s.store_id == store_id]

    def _dashboard_expenses(self, store_id: Optional[int]) -> List[ExpenseEntity]:
        expenses = self.store.get_expenses()
        if store_id is None:
            return expenses
        return [e for e in expenses if e.store_id == store_id]

    # --- finance page ---
    def net_profit_report(self) -> Tuple[Tuple[MonthlyFinancialReport, ...], ReportTotals]:
        """Every month with sales or expenses, newest first, plus column totals."""
        def compute():
            logger.info("Generating net profit report.")
            calculator = self._profit_calculator()
            by_month = calculator.compute_report(self.store.get_sales(), self.store.get_expenses(),
                                                 SalesFilterMode.ALL_EXCEPT_VOID_AND_QUOTE)
            self._record_misses(calculator, "Net profit report")
            reports = tuple(sorted(by_month.values(), key=lambda r: r.month, reverse=True))
            totals = ReportTotals(
                revenue=sum(r.revenue for r in reports),
                cogs=sum(r.cogs for r in reports),
                gross_profit=sum(r.gross_profit for r in reports),
                expenses=sum(r.expenses for r in reports),
                net_profit=sum(r.net_profit for r in reports),
            )
            return reports, totals
        return self._cached(("net_profit_report",), compute)

    def cash_flow_report(self) -> Tuple[CashFlowEntry, ...]:
        """
        Monthly inflows (sales other than voided ones) against outflows
        (purchases plus expenses), newest first.
        """
        def compute():
            logger.info("Generating cash flow report.")
            inflows = self.aggregator.aggregate(
                filter_sales(self.store.get_sales(), SalesFilterMode.EXCLUDE_VOIDED), Granularity.MONTH)
            purchases = self.aggregator.aggregate(self.store.get_purchases(), Granularity.MONTH)
            expenses = self.aggregator.aggregate(self.store.get_expenses(), Granularity.MONTH)
            months = set(inflows) | set(purchases) | set(expenses)
            return tuple(
                CashFlowEntry(month=month,
                              inflows=inflows.get(month, 0.0),
                              outflows=purchases.get(month, 0.0) + expenses.get(month, 0.0))
                for month in sorted(months, reverse=True)
            )
        return self._cached(("cash_flow_report",), compute)

    def balance_sheet(self, as_of: Optional[DateLike] = None) -> BalanceSheet:
        """Cash plus inventory at buy price, less liabilities. Uses current balances."""
        as_of_date = as_date(as_of) if as_of is not None else date.today()

        def compute():
            logger.info(f"Generating balance sheet as of {format_date(as_of_date, self.label_calendar)}.")
            accounts = self.store.get_cash_accounts()
            liabilities = self.store.get_liabilities()
            buy_prices = {p.id: p.buy_price for p in self.store.get_products()}
            inventory_value = sum(
                (item.stock * buy_prices[item.product_id]
                 for item in self.store.get_inventory() if item.product_id in buy_prices),
                0.0,
            )
            return BalanceSheet(
                as_of_date=as_of_date,
                cash_total=sum((a.balance for a in accounts), 0.0),
                inventory_value=inventory_value,
                total_liabilities=sum((liability.amount for liability in liabilities), 0.0),
                cash_accounts=tuple((a.name, a.balance) for a in accounts),
                liabilities=tuple((liability.name, liability.amount) for liability in liabilities),
            )
        return self._cached(("balance_sheet", as_of_date), compute)

    def expense_breakdown(self, today: Optional[DateLike] = None) -> Tuple[CategoryAmount, ...]:
        """Current-month expenses per category, largest first."""
        month = month_key(today if today is not None else date.today())

        def compute():
            names = {c.id: c.name for c in self.store.get_expense_categories()}
            totals: Dict[Optional[int], float] = {}
            for expense in self.store.get_expenses():
                if in_month(expense.date, month):
                    totals[expense.category_id] = totals.get(expense.category_id, 0.0) + expense.amount
            return tuple(sorted(
                (CategoryAmount(category_id=cid, name=names.get(cid, UNCATEGORIZED), amount=amount)
                 for cid, amount in totals.items()),
                key=lambda c: c.amount, reverse=True,
            ))
        return self._cached(("expense_breakdown", month), compute)

    # --- dashboard ---
    def dashboard_metrics(self, store_id: Optional[int] = None, today: Optional[DateLike] = None) -> DashboardMetrics:
        today_d = as_date(today) if today is not None else date.today()

        def compute():
            logger.info(f"Generating dashboard metrics for {format_date(today_d, self.label_calendar)} "
                        f"(store: {'all' if store_id is None else store_id}).")
            tomorrow = today_d + timedelta(days=1)
            this_month = month_start(today_d)
            previous_month = add_months(this_month, -1)
            sales = self._dashboard_sales(store_id, previous_month, tomorrow)
            calculator = self._profit_calculator()

            today_m = calculator.period_metrics(sales, today_d, tomorrow)
            yesterday_m = calculator.period_metrics(sales, today_d - timedelta(days=1), today_d)
            month_m = calculator.period_metrics(sales, this_month, tomorrow)
            previous_m = calculator.period_metrics(sales, previous_month, this_month)
            self._record_misses(calculator, "Dashboard metrics")

            month_expenses = sum(
                (e.amount for e in self._dashboard_expenses(store_id) if this_month <= as_date(e.date) < tomorrow),
                0.0,
            )
            month_net_profit = month_m.gross_profit - month_expenses
            return DashboardMetrics(
                today_sales=today_m.revenue,
                today_profit=today_m.gross_profit,
                today_transactions=today_m.transactions,
                avg_transaction_value=today_m.average_transaction_value,
                sales_change=compute_change(today_m.revenue, yesterday_m.revenue),
                profit_change=compute_change(today_m.gross_profit, yesterday_m.gross_profit),
                transactions_change=compute_change(today_m.transactions, yesterday_m.transactions),
                monthly_sales_change=compute_change(month_m.revenue, previous_m.revenue),
                monthly_profit_change=compute_change(month_m.gross_profit, previous_m.gross_profit),
                monthly_transactions_change=compute_change(month_m.transactions, previous_m.transactions),
                month_net_profit=month_net_profit,
                month_net_profit_percentage=(month_net_profit / month_m.revenue * 100) if month_m.revenue > 0 else 0.0,
            )
        return self._cached(("dashboard_metrics", store_id, today_d), compute)

    def sales_chart(self, days: int = TRAILING_DAYS, store_id: Optional[int] = None,
                    today: Optional[DateLike] = None) -> Mapping[str, float]:
        """Daily sales totals for the last `days` days, oldest first, gaps as zero."""
        today_d = as_date(today) if today is not None else date.today()

        def compute():
            sales = self._dashboard_sales(store_id, today_d - timedelta(days=days - 1), today_d + timedelta(days=1))
            return MappingProxyType(self.aggregator.trailing_days(sales, days, today_d))
        return self._cached(("sales_chart", days, store_id, today_d), compute)

    def net_profit_chart(self, months: int = TRAILING_MONTHS, store_id: Optional[int] = None,
                         today: Optional[DateLike] = None) -> Tuple[MonthlyFinancialReport, ...]:
        """The last `months` months including the current one, oldest first."""
        today_d = as_date(today) if today is not None else date.today()

        def compute():
            calculator = self._profit_calculator()
            sales = self._dashboard_sales(store_id, month_start(add_months(today_d, -(months - 1))),
                                          next_month_start(today_d))
            reports = calculator.compute_trailing_reports(
                sales, self._dashboard_expenses(store_id), months, today_d,
                SalesFilterMode.ALL_EXCEPT_VOID_AND_QUOTE,
            )
            self._record_misses(calculator, "Net profit chart")
            return tuple(reports)
        return self._cached(("net_profit_chart", months, store_id, today_d), compute)

    def best_sellers(self, limit: int = TOP_N_ITEMS, store_id: Optional[int] = None,
                     today: Optional[DateLike] = None) -> Tuple[BestSeller, ...]:
        """Products ranked by sales value in the current month."""
        month = month_key(today if today is not None else date.today())

        def compute():
            names = {p.id: p.name for p in self.store.get_products()}
            quantities: Dict[int, float] = {}
            totals: Dict[int, float] = {}
            for sale in self._dashboard_sales(store_id, *month_bounds(month)):
                for item in sale.items:
                    quantities[item.product_id] = quantities.get(item.product_id, 0.0) + item.quantity
                    totals[item.product_id] = totals.get(item.product_id, 0.0) + item.total
            ranked = sorted(
                (BestSeller(product_id=pid, name=names.get(pid, UNKNOWN_PRODUCT),
                            quantity=quantities[pid], total=totals[pid]) for pid in totals),
                key=lambda b: b.total, reverse=True,
            )
            return tuple(ranked[:limit])
        return self._cached(("best_sellers", limit, store_id, month), compute)

    def profit_by_category(self, limit: int = TOP_N_ITEMS, store_id: Optional[int] = None,
                           today: Optional[DateLike] = None) -> Tuple[CategoryAmount, ...]:
        month = month_key(today if today is not None else date.today())

        def compute():
            calculator = self._profit_calculator()
            return tuple(calculator.profit_by_category(self._dashboard_sales(store_id, *month_bounds(month)),
                                                       self.store.get_products(), self.store.get_categories(),
                                                       month, limit))
        return self._cached(("profit_by_category", limit, store_id, month), compute)

    def low_stock_alerts(self, threshold: float = LOW_STOCK_THRESHOLD) -> Tuple[LowStockAlert, ...]:
        """Inventory lines at or below `threshold`, lowest stock first."""
        def compute():
            product_names = {p.id: p.name for p in self.store.get_products()}
            store_names = {s.id: s.name for s in self.store.get_stores()}
            alerts = [
                LowStockAlert(
                    product_id=item.product_id,
                    store_id=item.store_id,
                    variant_name=item.variant_name,
                    stock=item.stock,
                    product_name=product_names.get(item.product_id, UNKNOWN_PRODUCT),
                    store_name=store_names.get(item.store_id, UNKNOWN_STORE),
                )
                for item in self.store.get_inventory_at_or_below(threshold)
            ]
            return tuple(sorted(alerts, key=lambda a: a.stock))
        return self._cached(("low_stock_alerts", threshold), compute)
