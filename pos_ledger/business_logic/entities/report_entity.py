# pos_ledger/business_logic/entities/report_entity.py
"""Derived (computed, never primary) records produced by the calculators."""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class MonthlyFinancialReport:
    month: str  # YYYY-MM
    revenue: float
    cogs: float
    expenses: float

    @property
    def gross_profit(self) -> float:
        return self.revenue - self.cogs

    @property
    def net_profit(self) -> float:
        return self.gross_profit - self.expenses

    @property
    def net_profit_percentage(self) -> float:
        return (self.net_profit / self.revenue * 100) if self.revenue > 0 else 0.0


@dataclass(frozen=True)
class ReportTotals:
    revenue: float = 0.0
    cogs: float = 0.0
    gross_profit: float = 0.0
    expenses: float = 0.0
    net_profit: float = 0.0


@dataclass(frozen=True)
class CashFlowEntry:
    month: str
    inflows: float
    outflows: float

    @property
    def net_flow(self) -> float:
        return self.inflows - self.outflows


@dataclass(frozen=True)
class PeriodMetrics:
    revenue: float = 0.0
    cogs: float = 0.0
    transactions: int = 0

    @property
    def gross_profit(self) -> float:
        return self.revenue - self.cogs

    @property
    def average_transaction_value(self) -> float:
        return self.revenue / self.transactions if self.transactions > 0 else 0.0


@dataclass(frozen=True)
class DashboardMetrics:
    today_sales: float
    today_profit: float
    today_transactions: int
    avg_transaction_value: float
    sales_change: float
    profit_change: float
    transactions_change: float
    monthly_sales_change: float
    monthly_profit_change: float
    monthly_transactions_change: float
    month_net_profit: float
    month_net_profit_percentage: float


@dataclass(frozen=True)
class CategoryAmount:
    category_id: Optional[int]
    name: str
    amount: float


@dataclass(frozen=True)
class BestSeller:
    product_id: int
    name: str
    quantity: float
    total: float


@dataclass(frozen=True)
class LowStockAlert:
    product_id: int
    store_id: int
    variant_name: str
    stock: float
    product_name: str
    store_name: str


@dataclass(frozen=True)
class BalanceSheet:
    as_of_date: date
    cash_total: float
    inventory_value: float
    total_liabilities: float
    cash_accounts: Tuple[Tuple[str, float], ...] = ()
    liabilities: Tuple[Tuple[str, float], ...] = ()

    @property
    def total_assets(self) -> float:
        return self.cash_total + self.inventory_value

    @property
    def equity(self) -> float:
        return self.total_assets - self.total_liabilities


@dataclass(frozen=True)
class PayrollResult:
    employee_id: int
    employee_name: str
    base_salary: float
    total_advance: float
    has_taken_leave: bool
    bonus: float
    final_salary: float  # may be negative; never clamped


@dataclass(frozen=True)
class PostedExpense:
    month: str
    date: date  # last day of the month
    description: str
    amount: float


@dataclass(frozen=True)
class AffordabilityProjectionEntry:
    month: str
    projected_cash_balance: float
    is_negative: bool


@dataclass(frozen=True)
class AffordabilityResult:
    is_affordable: bool
    projection: List[AffordabilityProjectionEntry] = field(default_factory=list)

    @property
    def first_negative_month(self) -> Optional[str]:
        for entry in self.projection:
            if entry.is_negative:
                return entry.month
        return None
