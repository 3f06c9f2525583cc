# pos_ledger/data_access/employees_repository.py

from typing import Dict, Any, List
from datetime import datetime

from pos_ledger.data_access.base_repository import BaseRepository
from pos_ledger.data_access.database_manager import DatabaseManager
from pos_ledger.business_logic.entities.employee_entity import (
    EmployeeEntity, SalaryAdvanceEntity, LeaveRecordEntity,
)
import logging

logger = logging.getLogger(__name__)


class EmployeesRepository(BaseRepository[EmployeeEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=EmployeeEntity,
                         table_name="employees")

    def _entity_from_row(self, row: Dict[str, Any]) -> EmployeeEntity:
        if row is None:
            raise ValueError("Input row cannot be None for EmployeeEntity")
        try:
            return EmployeeEntity(
                id=row['id'],
                name=row['name'],
                base_salary=float(row['base_salary'] or 0.0),
            )
        except KeyError as e:
            logger.error(f"KeyError when creating EmployeeEntity from row: {e}. Row: {row}")
            raise


class SalaryAdvancesRepository(BaseRepository[SalaryAdvanceEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=SalaryAdvanceEntity,
                         table_name="salary_advances")

    def _entity_from_row(self, row: Dict[str, Any]) -> SalaryAdvanceEntity:
        if row is None:
            raise ValueError("Input row cannot be None for SalaryAdvanceEntity")
        try:
            return SalaryAdvanceEntity(
                id=row['id'],
                employee_id=row['employee_id'],
                date=datetime.fromisoformat(row['date']),
                amount=float(row['amount']),
                notes=row.get('notes') or "",
            )
        except KeyError as e:
            logger.error(f"KeyError when creating SalaryAdvanceEntity from row: {e}. Row: {row}")
            raise
        except ValueError as e:  # date conversion
            logger.error(f"ValueError when creating SalaryAdvanceEntity: {e}. Row: {row}")
            raise

    def get_by_employee_id(self, employee_id: int) -> List[SalaryAdvanceEntity]:
        return self.find_by_criteria({"employee_id": employee_id}, order_by="date")


class LeaveRecordsRepository(BaseRepository[LeaveRecordEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         model_type=LeaveRecordEntity,
                         table_name="leave_records")

    def get_by_employee_id(self, employee_id: int) -> List[LeaveRecordEntity]:
        return self.find_by_criteria({"employee_id": employee_id}, order_by="date")
