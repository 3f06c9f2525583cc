# pos_ledger/utils/date_converter.py

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Tuple, Union

import jdatetime
from dateutil.relativedelta import relativedelta

from pos_ledger.constants import DATE_FORMAT, MONTH_FORMAT, MONTH_NAMES, MonthLabelCalendar

DateLike = Union[date, datetime]


def as_date(value: DateLike) -> date:
    """Drops the time part; datetime is a subclass of date so it is checked first."""
    if isinstance(value, datetime):
        return value.date()
    return value


def day_key(value: DateLike) -> str:
    return as_date(value).strftime(DATE_FORMAT)


def month_key(value: DateLike) -> str:
    return as_date(value).strftime(MONTH_FORMAT)


def parse_month_key(key: str) -> date:
    """'2024-01' -> date(2024, 1, 1)"""
    return datetime.strptime(key, MONTH_FORMAT).date()


def month_start(value: DateLike) -> date:
    return as_date(value).replace(day=1)


def add_months(value: DateLike, months: int) -> date:
    return as_date(value) + relativedelta(months=months)


def next_month_start(value: DateLike) -> date:
    return month_start(value) + relativedelta(months=1)


def last_day_of_month(value: DateLike) -> date:
    return next_month_start(value) - timedelta(days=1)


def month_bounds(key: str) -> Tuple[date, date]:
    """Returns (first day, first day of next month) for a 'YYYY-MM' key."""
    start = parse_month_key(key)
    return start, next_month_start(start)


def in_month(value: DateLike, key: str) -> bool:
    start, end = month_bounds(key)
    return start <= as_date(value) < end


def iter_days(start: DateLike, end: DateLike) -> Iterator[date]:
    current, end = as_date(start), as_date(end)
    while current < end:
        yield current
        current += timedelta(days=1)


def iter_month_keys(start: DateLike, end: DateLike) -> Iterator[str]:
    """Month keys of every month that overlaps [start, end)."""
    current, end = month_start(start), as_date(end)
    while current < end:
        yield current.strftime(MONTH_FORMAT)
        current += relativedelta(months=1)


def to_shamsi_str(gregorian_date: Optional[DateLike]) -> str:
    """Renders a Gregorian date as a Jalali YYYY/MM/DD string."""
    if gregorian_date is None:
        return "-"
    if not isinstance(gregorian_date, (date, datetime)):
        return str(gregorian_date)

    try:
        shamsi_date = jdatetime.date.fromgregorian(date=as_date(gregorian_date))
        return shamsi_date.strftime("%Y/%m/%d")
    except (ValueError, TypeError):
        return "-"


def to_gregorian_date(shamsi_date_str: str) -> Optional[date]:
    """Parses a Jalali YYYY/MM/DD string into a Gregorian date, None when invalid."""
    if not isinstance(shamsi_date_str, str) or not shamsi_date_str:
        return None

    try:
        parts = list(map(int, shamsi_date_str.split('/')))
        if len(parts) != 3:
            return None
        j_date = jdatetime.date(parts[0], parts[1], parts[2])
        return j_date.togregorian()
    except (ValueError, TypeError, IndexError):
        return None


def format_date(value: Optional[DateLike], calendar: MonthLabelCalendar = MonthLabelCalendar.GREGORIAN) -> str:
    if value is None:
        return "-"
    if calendar == MonthLabelCalendar.JALALI:
        return to_shamsi_str(value)
    return as_date(value).strftime(DATE_FORMAT)


def month_label(key: str, calendar: MonthLabelCalendar = MonthLabelCalendar.GREGORIAN) -> str:
    """
    Display label for a 'YYYY-MM' bucket.
    Gregorian: 'January 2024'. Jalali: the Shamsi dates the Gregorian month spans,
    e.g. '1402/10/11 - 1402/11/11'.
    """
    start = parse_month_key(key)
    if calendar == MonthLabelCalendar.JALALI:
        return f"{to_shamsi_str(start)} - {to_shamsi_str(last_day_of_month(start))}"
    return f"{MONTH_NAMES[start.month - 1]} {start.year}"
