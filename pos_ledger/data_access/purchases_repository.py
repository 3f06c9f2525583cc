# pos_ledger/data_access/purchases_repository.py

from pos_ledger.data_access.base_repository import BaseRepository
from pos_ledger.data_access.database_manager import DatabaseManager
from pos_ledger.business_logic.entities.purchase_entity import PurchaseEntity


class PurchasesRepository(BaseRepository[PurchaseEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=PurchaseEntity,
                         table_name="purchases")
