# pos_ledger/business_logic/entities/inventory_entity.py
from dataclasses import dataclass
from .base_entity import BaseEntity


@dataclass(frozen=True)
class StoreEntity(BaseEntity):
    name: str
    location: str = ""


@dataclass(frozen=True)
class InventoryItemEntity(BaseEntity):
    product_id: int
    store_id: int
    stock: float
    variant_name: str = ""  # empty string for the base item
