# pos_ledger/business_logic/entities/sale_entity.py
from dataclasses import dataclass, field
from typing import Optional, Tuple
from datetime import datetime
from .base_entity import BaseEntity, NOT_PERSISTED
from pos_ledger.constants import SaleStatus


@dataclass(frozen=True)
class SaleItemEntity(BaseEntity):
    product_id: int
    quantity: float
    sell_price: float
    total: float = 0.0
    name: str = ""
    sku: str = ""
    variant_name: str = ""            # empty string for the base item
    cogs: Optional[float] = None      # precomputed cost of goods sold, if recorded at sale time
    sale_id: Optional[int] = None


@dataclass(frozen=True)
class SaleEntity(BaseEntity):
    date: datetime
    total: float
    status: SaleStatus = SaleStatus.COMPLETED
    store_id: Optional[int] = None
    customer_id: Optional[int] = None
    subtotal: float = 0.0
    discount: float = 0.0
    paid_amount: float = 0.0
    balance: float = 0.0
    payment_type: Optional[str] = None
    items: Tuple[SaleItemEntity, ...] = field(default=(), metadata=NOT_PERSISTED)

    @property
    def amount(self) -> float:
        return self.total
