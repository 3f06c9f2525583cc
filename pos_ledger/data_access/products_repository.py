# pos_ledger/data_access/products_repository.py

from typing import List

from pos_ledger.data_access.base_repository import BaseRepository
from pos_ledger.data_access.database_manager import DatabaseManager
from pos_ledger.business_logic.entities.product_entity import ProductEntity, CategoryEntity
from pos_ledger.business_logic.entities.inventory_entity import StoreEntity, InventoryItemEntity
import logging

logger = logging.getLogger(__name__)


class ProductsRepository(BaseRepository[ProductEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=ProductEntity,
                         table_name="products")


class CategoriesRepository(BaseRepository[CategoryEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=CategoryEntity,
                         table_name="categories")


class StoresRepository(BaseRepository[StoreEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=StoreEntity,
                         table_name="stores")


class InventoryRepository(BaseRepository[InventoryItemEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=InventoryItemEntity,
                         table_name="inventory")

    def get_below_threshold(self, threshold: float) -> List[InventoryItemEntity]:
        return self.find_by_criteria({"stock": ("<=", threshold)}, order_by="stock")
