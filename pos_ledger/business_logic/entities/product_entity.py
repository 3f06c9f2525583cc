# pos_ledger/business_logic/entities/product_entity.py
from dataclasses import dataclass
from typing import Optional
from .base_entity import BaseEntity


@dataclass(frozen=True)
class CategoryEntity(BaseEntity):
    name: str


@dataclass(frozen=True)
class ProductEntity(BaseEntity):
    name: str
    sell_price: float
    buy_price: float
    sku: str = ""
    category_id: Optional[int] = None
    supplier_id: Optional[int] = None
    reorder_point: Optional[int] = None
