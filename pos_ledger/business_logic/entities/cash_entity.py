# pos_ledger/business_logic/entities/cash_entity.py
from dataclasses import dataclass
from datetime import datetime
from .base_entity import BaseEntity
from pos_ledger.constants import CashAccountType, CashTransactionType


@dataclass(frozen=True)
class CashAccountEntity(BaseEntity):
    name: str
    account_type: CashAccountType = CashAccountType.CASH
    balance: float = 0.0


@dataclass(frozen=True)
class CashTransactionEntity(BaseEntity):
    date: datetime
    account_id: int
    transaction_type: CashTransactionType
    amount: float
    description: str = ""


@dataclass(frozen=True)
class LiabilityEntity(BaseEntity):
    name: str
    amount: float
