# pos_ledger/business_logic/entities/expense_entity.py
from dataclasses import dataclass
from typing import Optional
from datetime import datetime
from .base_entity import BaseEntity


@dataclass(frozen=True)
class ExpenseCategoryEntity(BaseEntity):
    name: str


@dataclass(frozen=True)
class ExpenseEntity(BaseEntity):
    date: datetime
    amount: float
    category_id: Optional[int] = None
    description: str = ""
    store_id: Optional[int] = None
