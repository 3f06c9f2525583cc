# pos_ledger/business_logic/payroll_manager.py

from datetime import datetime
from typing import List, Optional

from pos_ledger.business_logic import payroll_engine
from pos_ledger.business_logic.entities import (
    EmployeeEntity, SalaryAdvanceEntity, LeaveRecordEntity, ExpenseEntity,
    ExpenseCategoryEntity, PayrollResult,
)
from pos_ledger.config import LEAVE_BONUS_AMOUNT, PAYROLL_CATEGORY_NAME
from pos_ledger.data_access.data_store import FinancialDataStore
from pos_ledger.exceptions import MissingCategoryError
from pos_ledger.utils.date_converter import DateLike, in_month, month_key, month_label, parse_month_key
import logging

logger = logging.getLogger(__name__)


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


def _validate_month(month: str) -> str:
    try:
        parse_month_key(month)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid month '{month}'; expected YYYY-MM.") from None
    return month


class PayrollManager:
    """
    Employee lifecycle plus the monthly payroll run.

    finalize_payroll() writes exactly one expense per month into the payroll
    category; a second run for the same month raises AlreadyPostedError.
    """

    def __init__(self,
                 store: FinancialDataStore,
                 leave_bonus_amount: float = LEAVE_BONUS_AMOUNT,
                 payroll_category_name: str = PAYROLL_CATEGORY_NAME):
        if store is None: raise ValueError("store cannot be None")
        if leave_bonus_amount < 0: raise ValueError("leave_bonus_amount cannot be negative")
        if not payroll_category_name or not payroll_category_name.strip():
            raise ValueError("payroll_category_name cannot be empty")

        self.store = store
        self.leave_bonus_amount = leave_bonus_amount
        self.payroll_category_name = payroll_category_name.strip()

    # --- employees ---
    def add_employee(self, name: str, base_salary: float) -> EmployeeEntity:
        if not name or not name.strip(): raise ValueError("Employee name is required.")
        if base_salary < 0: raise ValueError("Base salary cannot be negative.")
        employee = self.store.add_employee(EmployeeEntity(name=name.strip(), base_salary=float(base_salary)))
        logger.info(f"Employee '{employee.name}' added with ID {employee.id}.")
        return employee

    def update_employee(self, employee_id: int, name: Optional[str] = None,
                        base_salary: Optional[float] = None) -> EmployeeEntity:
        current = self.store.get_employee(employee_id)
        if current is None:
            raise ValueError(f"Employee with ID {employee_id} not found.")
        if name is not None and not name.strip(): raise ValueError("Employee name is required.")
        if base_salary is not None and base_salary < 0: raise ValueError("Base salary cannot be negative.")

        updated = EmployeeEntity(
            id=current.id,
            name=name.strip() if name is not None else current.name,
            base_salary=float(base_salary) if base_salary is not None else current.base_salary,
        )
        self.store.update_employee(updated)
        logger.info(f"Employee ID {employee_id} updated.")
        return updated

    def delete_employee(self, employee_id: int) -> bool:
        """Advances and leave records of the employee are kept and ignored from then on."""
        deleted = self.store.delete_employee(employee_id)
        if deleted:
            logger.info(f"Employee ID {employee_id} deleted.")
        return deleted

    def _require_employee(self, employee_id: int) -> EmployeeEntity:
        employee = self.store.get_employee(employee_id)
        if employee is None:
            raise ValueError(f"Employee with ID {employee_id} not found.")
        return employee

    # --- advances and leave ---
    def record_advance(self, employee_id: int, amount: float, on: DateLike, notes: str = "") -> SalaryAdvanceEntity:
        self._require_employee(employee_id)
        if amount <= 0: raise ValueError("Advance amount must be positive.")
        advance = self.store.add_salary_advance(SalaryAdvanceEntity(
            employee_id=employee_id, date=_as_datetime(on), amount=float(amount), notes=notes,
        ))
        logger.info(f"Advance of {amount:.2f} recorded for employee ID {employee_id} on {month_key(on)}.")
        return advance

    def delete_advance(self, advance_id: int) -> bool:
        return self.store.delete_salary_advance(advance_id)

    def record_leave(self, employee_id: int, on: DateLike) -> LeaveRecordEntity:
        self._require_employee(employee_id)
        leave = self.store.add_leave_record(LeaveRecordEntity(employee_id=employee_id, date=_as_datetime(on)))
        logger.info(f"Leave recorded for employee ID {employee_id} on {on}.")
        return leave

    def delete_leave(self, leave_id: int) -> bool:
        return self.store.delete_leave_record(leave_id)

    # --- payroll ---
    def monthly_payroll(self, month: str) -> List[PayrollResult]:
        _validate_month(month)
        return payroll_engine.compute_monthly_payroll(
            self.store.get_employees(),
            self.store.get_salary_advances(),
            self.store.get_leave_records(),
            month,
            self.leave_bonus_amount,
        )

    def _payroll_category(self) -> Optional[ExpenseCategoryEntity]:
        return self.store.find_expense_category(self.payroll_category_name)

    def is_payroll_posted(self, month: str) -> bool:
        """True when the payroll category holds an expense whose description names the month."""
        _validate_month(month)
        category = self._payroll_category()
        if category is None:
            return False
        return self._posted_in_category(category.id, month)

    def _posted_in_category(self, category_id: int, month: str) -> bool:
        label = month_label(month)
        return any(label in (e.description or "") for e in self.store.get_expenses_in_category(category_id))

    def _resolve_or_create_category(self, month: str) -> ExpenseCategoryEntity:
        category = self._payroll_category()
        if category is not None:
            return category
        try:
            category = self.store.add_expense_category(ExpenseCategoryEntity(name=self.payroll_category_name))
        except Exception as e:
            logger.error(f"Could not create expense category '{self.payroll_category_name}': {e}", exc_info=True)
            raise MissingCategoryError(month, self.payroll_category_name) from e
        if category is None or category.id is None:
            raise MissingCategoryError(month, self.payroll_category_name)
        logger.info(f"Expense category '{category.name}' created with ID {category.id}.")
        return category

    def finalize_payroll(self, month: str) -> ExpenseEntity:
        """
        Posts the month's payroll as a single expense dated on the month's last day.

        Raises MissingCategoryError, AlreadyPostedError or NothingToPostError;
        no expense is written when any of them is raised.
        """
        _validate_month(month)
        category = self._resolve_or_create_category(month)
        results = self.monthly_payroll(month)
        posted = payroll_engine.finalize_payroll(
            results, month,
            already_posted=lambda m: self._posted_in_category(category.id, m),
        )
        expense = self.store.add_expense(ExpenseEntity(
            date=_as_datetime(posted.date),
            amount=posted.amount,
            category_id=category.id,
            description=posted.description,
        ))
        logger.info(f"Payroll for {month} posted as expense ID {expense.id}: {posted.amount:.2f} "
                    f"for {len(results)} employee(s).")
        return expense

    def payroll_history(self) -> List[ExpenseEntity]:
        """Posted payroll expenses, newest first."""
        category = self._payroll_category()
        if category is None:
            return []
        posted = self.store.get_expenses_in_category(category.id)
        return sorted(posted, key=lambda e: e.date, reverse=True)

    def advances_for(self, employee_id: int, month: str) -> List[SalaryAdvanceEntity]:
        _validate_month(month)
        return [a for a in self.store.get_salary_advances()
                if a.employee_id == employee_id and in_month(a.date, month)]
