# pos_ledger/business_logic/payroll_engine.py

from typing import Callable, Iterable, List, Sequence

from pos_ledger.business_logic.entities import (
    EmployeeEntity, SalaryAdvanceEntity, LeaveRecordEntity, PayrollResult, PostedExpense,
)
from pos_ledger.exceptions import AlreadyPostedError, NothingToPostError
from pos_ledger.utils.date_converter import in_month, last_day_of_month, month_label, parse_month_key
import logging

logger = logging.getLogger(__name__)

PAYROLL_DESCRIPTION_PREFIX = "Monthly Payroll for"


def payroll_description(month: str) -> str:
    """'2024-01' -> 'Monthly Payroll for January 2024'"""
    return f"{PAYROLL_DESCRIPTION_PREFIX} {month_label(month)}"


def compute_employee_payroll(employee: EmployeeEntity,
                             advances: Sequence[SalaryAdvanceEntity],
                             leaves: Sequence[LeaveRecordEntity],
                             month: str,
                             leave_bonus_amount: float) -> PayrollResult:
    total_advance = sum(
        (a.amount for a in advances if a.employee_id == employee.id and in_month(a.date, month)),
        0.0,
    )
    has_taken_leave = any(leave.employee_id == employee.id and in_month(leave.date, month) for leave in leaves)
    bonus = 0.0 if has_taken_leave else leave_bonus_amount
    return PayrollResult(
        employee_id=employee.id,
        employee_name=employee.name,
        base_salary=employee.base_salary,
        total_advance=total_advance,
        has_taken_leave=has_taken_leave,
        bonus=bonus,
        # Not clamped: advances larger than salary plus bonus leave a negative figure.
        final_salary=employee.base_salary - total_advance + bonus,
    )


def compute_monthly_payroll(employees: Sequence[EmployeeEntity],
                            advances: Sequence[SalaryAdvanceEntity],
                            leaves: Sequence[LeaveRecordEntity],
                            month: str,
                            leave_bonus_amount: float) -> List[PayrollResult]:
    """
    Payroll for every employee for `month` ('YYYY-MM').
    Advances and leaves that reference unknown employees are ignored.
    """
    results = [compute_employee_payroll(e, advances, leaves, month, leave_bonus_amount) for e in employees]

    known_ids = {e.id for e in employees}
    orphans = sum(1 for r in list(advances) + list(leaves) if r.employee_id not in known_ids and in_month(r.date, month))
    if orphans:
        logger.warning(f"Ignored {orphans} advance/leave record(s) for {month} that reference deleted employees.")
    return results


def total_payroll(results: Iterable[PayrollResult]) -> float:
    return sum((r.final_salary for r in results), 0.0)


def finalize_payroll(results: Sequence[PayrollResult],
                     month: str,
                     already_posted: Callable[[str], bool]) -> PostedExpense:
    """
    Builds the single expense that records a month's payroll.

    Raises AlreadyPostedError when already_posted(month) is true (checked first),
    and NothingToPostError when the total final salary is zero or negative.
    """
    if already_posted(month):
        raise AlreadyPostedError(month)

    total = total_payroll(results)
    if total <= 0:
        raise NothingToPostError(month, total)

    return PostedExpense(
        month=month,
        date=last_day_of_month(parse_month_key(month)),
        description=payroll_description(month),
        amount=total,
    )
