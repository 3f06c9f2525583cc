# pos_ledger/data_access/cash_repository.py

from typing import List

from pos_ledger.data_access.base_repository import BaseRepository
from pos_ledger.data_access.database_manager import DatabaseManager
from pos_ledger.business_logic.entities.cash_entity import (
    CashAccountEntity, CashTransactionEntity, LiabilityEntity,
)
import logging

logger = logging.getLogger(__name__)


class CashAccountsRepository(BaseRepository[CashAccountEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=CashAccountEntity,
                         table_name="cash_accounts")

    def get_total_balance(self) -> float:
        row = self.db_manager.fetch_one(f"SELECT COALESCE(SUM(balance), 0) AS total FROM {self._table_name}")
        return float(row['total']) if row else 0.0


class CashTransactionsRepository(BaseRepository[CashTransactionEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=CashTransactionEntity,
                         table_name="cash_transactions")

    def get_by_account_id(self, account_id: int) -> List[CashTransactionEntity]:
        return self.find_by_criteria({"account_id": account_id}, order_by="date")


class LiabilitiesRepository(BaseRepository[LiabilityEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=LiabilityEntity,
                         table_name="liabilities")
