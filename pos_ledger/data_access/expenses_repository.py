# pos_ledger/data_access/expenses_repository.py

from typing import List, Optional

from pos_ledger.data_access.base_repository import BaseRepository
from pos_ledger.data_access.database_manager import DatabaseManager
from pos_ledger.business_logic.entities.expense_entity import ExpenseEntity, ExpenseCategoryEntity
import logging

logger = logging.getLogger(__name__)


class ExpenseCategoriesRepository(BaseRepository[ExpenseCategoryEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=ExpenseCategoryEntity,
                         table_name="expense_categories")

    def get_by_name(self, name: str) -> Optional[ExpenseCategoryEntity]:
        query = f"SELECT * FROM {self._table_name} WHERE lower(trim(name)) = lower(trim(?))"
        row = self.db_manager.fetch_one(query, (name,))
        return self._entity_from_row(dict(row)) if row else None


class ExpensesRepository(BaseRepository[ExpenseEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=ExpenseEntity,
                         table_name="expenses")

    def get_by_category_id(self, category_id: int) -> List[ExpenseEntity]:
        return self.find_by_criteria({"category_id": category_id}, order_by="date")
