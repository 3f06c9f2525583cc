# pos_ledger/data_access/data_store.py
"""
FinancialDataStore: the persistence collaborator the managers read snapshots from.

Every getter returns a new list of frozen entities, so callers can never mutate
the store's state through what they read. `version` changes on every write and is
the invalidation key for cached reports.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, TypeVar
import logging

from pos_ledger.business_logic.entities import (
    BaseEntity, SaleEntity, PurchaseEntity, ExpenseEntity, ExpenseCategoryEntity,
    ProductEntity, CategoryEntity, StoreEntity, InventoryItemEntity,
    EmployeeEntity, SalaryAdvanceEntity, LeaveRecordEntity,
    CashAccountEntity, CashTransactionEntity, LiabilityEntity,
)
from pos_ledger.utils.date_converter import as_date

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=BaseEntity)

# Collection names double as SQLite table names.
SALES = "sales"
PURCHASES = "purchases"
EXPENSES = "expenses"
EXPENSE_CATEGORIES = "expense_categories"
PRODUCTS = "products"
CATEGORIES = "categories"
STORES = "stores"
INVENTORY = "inventory"
EMPLOYEES = "employees"
SALARY_ADVANCES = "salary_advances"
LEAVE_RECORDS = "leave_records"
CASH_ACCOUNTS = "cash_accounts"
CASH_TRANSACTIONS = "cash_transactions"
LIABILITIES = "liabilities"

ALL_COLLECTIONS = (
    SALES, PURCHASES, EXPENSES, EXPENSE_CATEGORIES, PRODUCTS, CATEGORIES, STORES, INVENTORY,
    EMPLOYEES, SALARY_ADVANCES, LEAVE_RECORDS, CASH_ACCOUNTS, CASH_TRANSACTIONS, LIABILITIES,
)


class FinancialDataStore(ABC):

    # --- primitives implemented by concrete stores ---
    @abstractmethod
    def _fetch_all(self, collection: str) -> List[Any]: ...

    @abstractmethod
    def _insert(self, collection: str, entity: E) -> E: ...

    @abstractmethod
    def _replace(self, collection: str, entity: E) -> E: ...

    @abstractmethod
    def _remove(self, collection: str, entity_id: int) -> bool: ...

    @property
    @abstractmethod
    def version(self) -> int: ...

    # --- reads ---
    def get_sales(self) -> List[SaleEntity]:
        return self._fetch_all(SALES)

    def get_sales_between(self, start: date, end: date) -> List[SaleEntity]:
        """Sales dated in [start, end)."""
        start_d, end_d = as_date(start), as_date(end)
        return [s for s in self.get_sales() if start_d <= as_date(s.date) < end_d]

    def get_purchases(self) -> List[PurchaseEntity]:
        return self._fetch_all(PURCHASES)

    def get_expenses(self) -> List[ExpenseEntity]:
        return self._fetch_all(EXPENSES)

    def get_expense_categories(self) -> List[ExpenseCategoryEntity]:
        return self._fetch_all(EXPENSE_CATEGORIES)

    def get_expenses_in_category(self, category_id: int) -> List[ExpenseEntity]:
        return [e for e in self.get_expenses() if e.category_id == category_id]

    def find_expense_category(self, name: str) -> Optional[ExpenseCategoryEntity]:
        wanted = name.strip().lower()
        for category in self.get_expense_categories():
            if category.name.strip().lower() == wanted:
                return category
        return None

    def get_products(self) -> List[ProductEntity]:
        return self._fetch_all(PRODUCTS)

    def get_categories(self) -> List[CategoryEntity]:
        return self._fetch_all(CATEGORIES)

    def get_stores(self) -> List[StoreEntity]:
        return self._fetch_all(STORES)

    def get_inventory(self) -> List[InventoryItemEntity]:
        return self._fetch_all(INVENTORY)

    def get_inventory_at_or_below(self, threshold: float) -> List[InventoryItemEntity]:
        return [item for item in self.get_inventory() if item.stock <= threshold]

    def get_employees(self) -> List[EmployeeEntity]:
        return self._fetch_all(EMPLOYEES)

    def get_employee(self, employee_id: int) -> Optional[EmployeeEntity]:
        return next((e for e in self.get_employees() if e.id == employee_id), None)

    def get_salary_advances(self) -> List[SalaryAdvanceEntity]:
        return self._fetch_all(SALARY_ADVANCES)

    def get_leave_records(self) -> List[LeaveRecordEntity]:
        return self._fetch_all(LEAVE_RECORDS)

    def get_cash_accounts(self) -> List[CashAccountEntity]:
        return self._fetch_all(CASH_ACCOUNTS)

    def get_cash_account(self, account_id: int) -> Optional[CashAccountEntity]:
        return next((a for a in self.get_cash_accounts() if a.id == account_id), None)

    def get_cash_transactions(self) -> List[CashTransactionEntity]:
        return self._fetch_all(CASH_TRANSACTIONS)

    def get_cash_transactions_for(self, account_id: int) -> List[CashTransactionEntity]:
        return [t for t in self.get_cash_transactions() if t.account_id == account_id]

    def get_cash_balance_total(self) -> float:
        return sum((a.balance for a in self.get_cash_accounts()), 0.0)

    def get_liabilities(self) -> List[LiabilityEntity]:
        return self._fetch_all(LIABILITIES)

    # --- writes ---
    def add_sale(self, sale: SaleEntity) -> SaleEntity:
        return self._insert(SALES, sale)

    def add_purchase(self, purchase: PurchaseEntity) -> PurchaseEntity:
        return self._insert(PURCHASES, purchase)

    def add_expense(self, expense: ExpenseEntity) -> ExpenseEntity:
        return self._insert(EXPENSES, expense)

    def add_expense_category(self, category: ExpenseCategoryEntity) -> ExpenseCategoryEntity:
        return self._insert(EXPENSE_CATEGORIES, category)

    def add_product(self, product: ProductEntity) -> ProductEntity:
        return self._insert(PRODUCTS, product)

    def add_category(self, category: CategoryEntity) -> CategoryEntity:
        return self._insert(CATEGORIES, category)

    def add_store(self, store: StoreEntity) -> StoreEntity:
        return self._insert(STORES, store)

    def add_inventory_item(self, item: InventoryItemEntity) -> InventoryItemEntity:
        return self._insert(INVENTORY, item)

    def add_employee(self, employee: EmployeeEntity) -> EmployeeEntity:
        return self._insert(EMPLOYEES, employee)

    def update_employee(self, employee: EmployeeEntity) -> EmployeeEntity:
        return self._replace(EMPLOYEES, employee)

    def delete_employee(self, employee_id: int) -> bool:
        # Advances and leave records are left in place; consumers filter orphans.
        return self._remove(EMPLOYEES, employee_id)

    def add_salary_advance(self, advance: SalaryAdvanceEntity) -> SalaryAdvanceEntity:
        return self._insert(SALARY_ADVANCES, advance)

    def delete_salary_advance(self, advance_id: int) -> bool:
        return self._remove(SALARY_ADVANCES, advance_id)

    def add_leave_record(self, leave: LeaveRecordEntity) -> LeaveRecordEntity:
        return self._insert(LEAVE_RECORDS, leave)

    def delete_leave_record(self, leave_id: int) -> bool:
        return self._remove(LEAVE_RECORDS, leave_id)

    def add_cash_account(self, account: CashAccountEntity) -> CashAccountEntity:
        return self._insert(CASH_ACCOUNTS, account)

    def update_cash_account(self, account: CashAccountEntity) -> CashAccountEntity:
        return self._replace(CASH_ACCOUNTS, account)

    def add_cash_transaction(self, transaction: CashTransactionEntity) -> CashTransactionEntity:
        return self._insert(CASH_TRANSACTIONS, transaction)

    def record_cash_transaction(self,
                                transaction: CashTransactionEntity,
                                account: CashAccountEntity) -> Tuple[CashTransactionEntity, CashAccountEntity]:
        """
        Writes a cash transaction together with the account's new balance.
        The account is replaced first, so an unknown account leaves no transaction behind.
        """
        updated = self.update_cash_account(account)
        stored = self.add_cash_transaction(transaction)
        return stored, updated

    def add_liability(self, liability: LiabilityEntity) -> LiabilityEntity:
        return self._insert(LIABILITIES, liability)


class InMemoryDataStore(FinancialDataStore):
    """Dict-backed store; ids are assigned per collection starting at 1."""

    def __init__(self):
        self._collections: Dict[str, Dict[int, Any]] = {name: {} for name in ALL_COLLECTIONS}
        self._next_ids: Dict[str, int] = {name: 1 for name in ALL_COLLECTIONS}
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def _touch(self) -> None:
        self._version += 1

    def _fetch_all(self, collection: str) -> List[Any]:
        return list(self._collections[collection].values())

    def _insert(self, collection: str, entity: E) -> E:
        new_id = self._next_ids[collection]
        self._next_ids[collection] = new_id + 1
        stored = replace(entity, id=new_id)
        if isinstance(stored, SaleEntity):
            stored = replace(stored, items=tuple(replace(item, id=index + 1, sale_id=new_id)
                                                 for index, item in enumerate(stored.items)))
        self._collections[collection][new_id] = stored
        self._touch()
        logger.debug(f"InMemoryDataStore: added {type(entity).__name__} ID {new_id} to '{collection}'.")
        return stored

    def _replace(self, collection: str, entity: E) -> E:
        if entity.id is None or entity.id not in self._collections[collection]:
            raise ValueError(f"{type(entity).__name__} with ID {entity.id} does not exist in '{collection}'.")
        self._collections[collection][entity.id] = entity
        self._touch()
        return entity

    def _remove(self, collection: str, entity_id: int) -> bool:
        removed = self._collections[collection].pop(entity_id, None)
        if removed is None:
            logger.warning(f"InMemoryDataStore: ID {entity_id} not found in '{collection}' for deletion.")
            return False
        self._touch()
        return True
