# pos_ledger/exceptions.py
"""
Typed error kinds raised by the payroll finalization flow.

The errors carry structured attributes (month, total, category name) so the
presentation layer can build its own messages.
"""

from typing import Optional


class LedgerError(Exception):
    """Base class for domain errors raised by pos_ledger."""


class PayrollError(LedgerError):
    def __init__(self, month: str, message: Optional[str] = None):
        self.month = month
        super().__init__(message or month)


class AlreadyPostedError(PayrollError):
    """Payroll for the month has already been written as an expense."""


class NothingToPostError(PayrollError):
    """The computed payroll total for the month is zero or negative."""

    def __init__(self, month: str, total: float):
        self.total = total
        super().__init__(month, f"{month}: total={total}")


class MissingCategoryError(PayrollError):
    """The payroll expense category could not be found or created."""

    def __init__(self, month: str, category_name: str):
        self.category_name = category_name
        super().__init__(month, f"{month}: category={category_name!r}")
