# pos_ledger/business_logic/entities/__init__.py
from .base_entity import BaseEntity
from .sale_entity import SaleEntity, SaleItemEntity
from .purchase_entity import PurchaseEntity
from .expense_entity import ExpenseEntity, ExpenseCategoryEntity
from .product_entity import ProductEntity, CategoryEntity
from .inventory_entity import StoreEntity, InventoryItemEntity
from .employee_entity import EmployeeEntity, SalaryAdvanceEntity, LeaveRecordEntity
from .cash_entity import CashAccountEntity, CashTransactionEntity, LiabilityEntity
from .setting_entity import SettingEntity
from .report_entity import (
    MonthlyFinancialReport, ReportTotals, CashFlowEntry, PeriodMetrics, DashboardMetrics,
    CategoryAmount, BestSeller, LowStockAlert, BalanceSheet, PayrollResult, PostedExpense,
    AffordabilityProjectionEntry, AffordabilityResult,
)

__all__ = [
    "BaseEntity", "SaleEntity", "SaleItemEntity", "PurchaseEntity",
    "ExpenseEntity", "ExpenseCategoryEntity", "ProductEntity", "CategoryEntity",
    "StoreEntity", "InventoryItemEntity", "EmployeeEntity", "SalaryAdvanceEntity",
    "LeaveRecordEntity", "CashAccountEntity", "CashTransactionEntity", "LiabilityEntity", "SettingEntity",
    "MonthlyFinancialReport", "ReportTotals", "CashFlowEntry", "PeriodMetrics",
    "DashboardMetrics", "CategoryAmount", "BestSeller", "LowStockAlert", "BalanceSheet",
    "PayrollResult", "PostedExpense", "AffordabilityProjectionEntry", "AffordabilityResult",
]
