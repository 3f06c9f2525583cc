# pos_ledger/constants.py

from enum import Enum

# General
DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"
# Fixed English names; strftime("%B") follows the process locale.
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

UNCATEGORIZED = "Uncategorized"
UNKNOWN_PRODUCT = "Unknown Product"
UNKNOWN_STORE = "Unknown Store"


class SaleStatus(Enum):
    COMPLETED = "completed"
    VOIDED = "voided"
    QUOTATION = "quotation"
    INVOICE = "invoice"
    PARTIALLY_PAID = "partially-paid"
    PAID = "paid"


class SalesFilterMode(Enum):
    REALIZED_ONLY = "realized_only"                          # completed sales only
    ALL_EXCEPT_VOID_AND_QUOTE = "all_except_void_and_quote"  # net-profit report / chart
    EXCLUDE_VOIDED = "exclude_voided"                        # cash-flow report


class Granularity(Enum):
    DAY = "day"
    MONTH = "month"


class CashAccountType(Enum):
    CASH = "cash"
    BANK = "bank"


class CashTransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    ADJUSTMENT = "adjustment"  # sets the balance to the given amount


class MonthLabelCalendar(Enum):
    GREGORIAN = "gregorian"
    JALALI = "jalali"
