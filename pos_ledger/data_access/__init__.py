# pos_ledger/data_access/__init__.py

from .database_manager import DatabaseManager
from .base_repository import BaseRepository

from .settings_repository import SettingsRepository
from .sales_repository import SalesRepository, SaleItemsRepository
from .purchases_repository import PurchasesRepository
from .expenses_repository import ExpensesRepository, ExpenseCategoriesRepository
from .products_repository import ProductsRepository, CategoriesRepository, StoresRepository, InventoryRepository
from .employees_repository import EmployeesRepository, SalaryAdvancesRepository, LeaveRecordsRepository
from .cash_repository import CashAccountsRepository, CashTransactionsRepository, LiabilitiesRepository

from .data_store import FinancialDataStore, InMemoryDataStore
from .sqlite_data_store import SqliteDataStore
