# pos_ledger/business_logic/entities/purchase_entity.py
from dataclasses import dataclass
from typing import Optional
from datetime import datetime
from .base_entity import BaseEntity


@dataclass(frozen=True)
class PurchaseEntity(BaseEntity):
    date: datetime
    total: float
    store_id: Optional[int] = None
    supplier_id: Optional[int] = None

    @property
    def amount(self) -> float:
        return self.total
