# pos_ledger/business_logic/entities/employee_entity.py
from dataclasses import dataclass
from datetime import datetime
from .base_entity import BaseEntity


@dataclass(frozen=True)
class EmployeeEntity(BaseEntity):
    name: str
    base_salary: float = 0.0


@dataclass(frozen=True)
class SalaryAdvanceEntity(BaseEntity):
    employee_id: int  # may reference a deleted employee
    date: datetime
    amount: float
    notes: str = ""


@dataclass(frozen=True)
class LeaveRecordEntity(BaseEntity):
    employee_id: int
    date: datetime
