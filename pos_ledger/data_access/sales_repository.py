# pos_ledger/data_access/sales_repository.py

from dataclasses import replace
from datetime import date
from typing import Dict, List

from pos_ledger.data_access.base_repository import BaseRepository
from pos_ledger.data_access.database_manager import DatabaseManager
from pos_ledger.business_logic.entities.sale_entity import SaleEntity, SaleItemEntity
import logging

logger = logging.getLogger(__name__)


class SaleItemsRepository(BaseRepository[SaleItemEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=SaleItemEntity,
                         table_name="sale_items")

    def get_by_sale_id(self, sale_id: int) -> List[SaleItemEntity]:
        return self.find_by_criteria({"sale_id": sale_id})

    def get_grouped_by_sale(self) -> Dict[int, List[SaleItemEntity]]:
        grouped: Dict[int, List[SaleItemEntity]] = {}
        for item in self.get_all():
            grouped.setdefault(item.sale_id, []).append(item)
        return grouped


class SalesRepository(BaseRepository[SaleEntity]):
    """Sales with their line items; items live in sale_items and are attached on read."""

    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=SaleEntity,
                         table_name="sales")
        self.items_repository = SaleItemsRepository(db_manager)

    def add(self, entity: SaleEntity) -> SaleEntity:
        # Header and items go in one transaction.
        with self.db_manager as conn:
            cursor = conn.execute(*self.insert_statement(entity))
            sale_id = cursor.lastrowid
            stored_items = []
            for item in entity.items:
                item = replace(item, sale_id=sale_id)
                item_cursor = conn.execute(*self.items_repository.insert_statement(item))
                stored_items.append(replace(item, id=item_cursor.lastrowid))

        logger.debug(f"SalesRepository.add: sale ID {sale_id} stored with {len(stored_items)} item(s).")
        return replace(entity, id=sale_id, items=tuple(stored_items))

    def _attach_items(self, sales: List[SaleEntity]) -> List[SaleEntity]:
        items_by_sale = self.items_repository.get_grouped_by_sale()
        return [replace(sale, items=tuple(items_by_sale.get(sale.id, ()))) for sale in sales]

    def get_all(self, order_by="date") -> List[SaleEntity]:
        return self._attach_items(super().get_all(order_by=order_by))

    def get_by_id(self, entity_id: int):
        sale = super().get_by_id(entity_id)
        if sale is None:
            return None
        return replace(sale, items=tuple(self.items_repository.get_by_sale_id(entity_id)))

    def get_in_range(self, start: date, end: date) -> List[SaleEntity]:
        """Sales dated in [start, end)."""
        return self._attach_items(self.find_by_criteria(
            {"date": (">=", start.isoformat()), "substr(date, 1, 10)": ("<", end.isoformat())},
            order_by="date",
        ))
