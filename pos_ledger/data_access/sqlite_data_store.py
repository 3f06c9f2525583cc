# pos_ledger/data_access/sqlite_data_store.py

from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
import logging

from pos_ledger.business_logic.entities import (
    CashAccountEntity, CashTransactionEntity, EmployeeEntity, ExpenseCategoryEntity, ExpenseEntity,
    InventoryItemEntity, SaleEntity,
)
from pos_ledger.config import DATABASE_PATH
from pos_ledger.data_access import data_store as collections
from pos_ledger.data_access.base_repository import BaseRepository
from pos_ledger.data_access.cash_repository import (
    CashAccountsRepository, CashTransactionsRepository, LiabilitiesRepository,
)
from pos_ledger.data_access.data_store import FinancialDataStore, E
from pos_ledger.data_access.database_manager import DatabaseManager
from pos_ledger.data_access.employees_repository import (
    EmployeesRepository, SalaryAdvancesRepository, LeaveRecordsRepository,
)
from pos_ledger.data_access.expenses_repository import ExpensesRepository, ExpenseCategoriesRepository
from pos_ledger.data_access.products_repository import (
    ProductsRepository, CategoriesRepository, StoresRepository, InventoryRepository,
)
from pos_ledger.data_access.purchases_repository import PurchasesRepository
from pos_ledger.data_access.sales_repository import SalesRepository
from pos_ledger.data_access.settings_repository import SettingsRepository
from pos_ledger.utils.date_converter import as_date

logger = logging.getLogger(__name__)


class SqliteDataStore(FinancialDataStore):
    """
    FinancialDataStore persisted in SQLite through one repository per collection.

    Every write bumps the `data_version` setting, which is what `version` reports,
    so report caches stay valid across processes sharing the same database file.
    """

    def __init__(self, db_path: str = DATABASE_PATH, create_schema: bool = True):
        self.db_manager = DatabaseManager(db_path)
        if create_schema:
            self.db_manager.create_tables()

        self.settings_repository = SettingsRepository(self.db_manager)
        self.repositories: Dict[str, BaseRepository] = {
            collections.SALES: SalesRepository(self.db_manager),
            collections.PURCHASES: PurchasesRepository(self.db_manager),
            collections.EXPENSES: ExpensesRepository(self.db_manager),
            collections.EXPENSE_CATEGORIES: ExpenseCategoriesRepository(self.db_manager),
            collections.PRODUCTS: ProductsRepository(self.db_manager),
            collections.CATEGORIES: CategoriesRepository(self.db_manager),
            collections.STORES: StoresRepository(self.db_manager),
            collections.INVENTORY: InventoryRepository(self.db_manager),
            collections.EMPLOYEES: EmployeesRepository(self.db_manager),
            collections.SALARY_ADVANCES: SalaryAdvancesRepository(self.db_manager),
            collections.LEAVE_RECORDS: LeaveRecordsRepository(self.db_manager),
            collections.CASH_ACCOUNTS: CashAccountsRepository(self.db_manager),
            collections.CASH_TRANSACTIONS: CashTransactionsRepository(self.db_manager),
            collections.LIABILITIES: LiabilitiesRepository(self.db_manager),
        }
        logger.info(f"SqliteDataStore ready at {db_path}.")

    @property
    def version(self) -> int:
        return self.settings_repository.get_data_version()

    def _repository(self, collection: str) -> BaseRepository:
        try:
            return self.repositories[collection]
        except KeyError:
            raise ValueError(f"Unknown collection '{collection}'.") from None

    def _fetch_all(self, collection: str) -> List[Any]:
        return self._repository(collection).get_all()

    def _insert(self, collection: str, entity: E) -> E:
        stored = self._repository(collection).add(entity)
        self.settings_repository.bump_data_version()
        return stored

    def _replace(self, collection: str, entity: E) -> E:
        updated = self._repository(collection).update(entity)
        self.settings_repository.bump_data_version()
        return updated

    def _remove(self, collection: str, entity_id: int) -> bool:
        removed = self._repository(collection).delete(entity_id)
        if removed:
            self.settings_repository.bump_data_version()
        return removed

    # Narrower queries than the base class's scan-and-filter.
    def get_sales_between(self, start: date, end: date) -> List[SaleEntity]:
        return self.repositories[collections.SALES].get_in_range(as_date(start), as_date(end))

    def get_expenses_in_category(self, category_id: int) -> List[ExpenseEntity]:
        return self.repositories[collections.EXPENSES].get_by_category_id(category_id)

    def find_expense_category(self, name: str) -> Optional[ExpenseCategoryEntity]:
        return self.repositories[collections.EXPENSE_CATEGORIES].get_by_name(name)

    def get_inventory_at_or_below(self, threshold: float) -> List[InventoryItemEntity]:
        return self.repositories[collections.INVENTORY].get_below_threshold(threshold)

    def get_employee(self, employee_id: int) -> Optional[EmployeeEntity]:
        return self.repositories[collections.EMPLOYEES].get_by_id(employee_id)

    def get_cash_account(self, account_id: int) -> Optional[CashAccountEntity]:
        return self.repositories[collections.CASH_ACCOUNTS].get_by_id(account_id)

    def get_cash_transactions_for(self, account_id: int) -> List[CashTransactionEntity]:
        return self.repositories[collections.CASH_TRANSACTIONS].get_by_account_id(account_id)

    def get_cash_balance_total(self) -> float:
        return self.repositories[collections.CASH_ACCOUNTS].get_total_balance()

    def record_cash_transaction(self,
                                transaction: CashTransactionEntity,
                                account: CashAccountEntity) -> Tuple[CashTransactionEntity, CashAccountEntity]:
        """Inserts the transaction and updates the balance in one SQLite transaction."""
        transactions = self.repositories[collections.CASH_TRANSACTIONS]
        accounts = self.repositories[collections.CASH_ACCOUNTS]

        with self.db_manager as conn:
            cursor = conn.execute(*transactions.insert_statement(transaction))
            stored = replace(transaction, id=cursor.lastrowid)
            if conn.execute(*accounts.update_statement(account)).rowcount == 0:
                # Raising inside the block rolls the insert back.
                raise ValueError(f"CashAccountEntity with ID {account.id} does not exist in 'cash_accounts'.")

        self.settings_repository.bump_data_version()
        logger.debug(f"SqliteDataStore: cash transaction ID {stored.id} recorded for account ID {account.id}.")
        return stored, account
