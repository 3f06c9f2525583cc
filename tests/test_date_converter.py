import locale
from datetime import date, datetime

import pytest

from pos_ledger.constants import MonthLabelCalendar
from pos_ledger.utils.date_converter import (
    as_date, format_date, in_month, iter_month_keys, last_day_of_month, month_bounds, month_label,
    to_gregorian_date, to_shamsi_str,
)


def test_as_date_drops_time():
    assert as_date(datetime(2024, 1, 5, 23, 59)) == date(2024, 1, 5)
    assert as_date(date(2024, 1, 5)) == date(2024, 1, 5)


@pytest.mark.parametrize("value, expected", [
    (date(2024, 2, 10), date(2024, 2, 29)),
    (date(2023, 2, 10), date(2023, 2, 28)),
    (datetime(2024, 12, 1, 8), date(2024, 12, 31)),
])
def test_last_day_of_month(value, expected):
    assert last_day_of_month(value) == expected


def test_month_bounds_and_membership():
    assert month_bounds("2024-12") == (date(2024, 12, 1), date(2025, 1, 1))
    assert in_month(datetime(2024, 12, 31, 23, 59), "2024-12")
    assert not in_month(datetime(2025, 1, 1, 0, 0), "2024-12")


def test_iter_month_keys_covers_overlapping_months():
    assert list(iter_month_keys(date(2024, 11, 20), date(2025, 2, 1))) == ["2024-11", "2024-12", "2025-01"]


def test_gregorian_month_label():
    assert month_label("2024-01") == "January 2024"


def test_jalali_month_label_spans_the_gregorian_month():
    assert month_label("2024-01", MonthLabelCalendar.JALALI) == "1402/10/11 - 1402/11/11"


def test_shamsi_conversion_both_ways():
    assert to_shamsi_str(date(2024, 3, 20)) == "1403/01/01"
    assert to_gregorian_date("1403/01/01") == date(2024, 3, 20)


@pytest.mark.parametrize("text", ["", "1403/01", "not/a/date", "1403/13/40"])
def test_invalid_shamsi_text_gives_none(text):
    assert to_gregorian_date(text) is None


def test_format_date():
    assert format_date(None) == "-"
    assert format_date(datetime(2024, 3, 20, 10)) == "2024-03-20"
    assert format_date(date(2024, 3, 20), MonthLabelCalendar.JALALI) == "1403/01/01"


def test_month_label_ignores_the_process_locale():
    previous = locale.setlocale(locale.LC_TIME)
    try:
        locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
    except locale.Error:
        pytest.skip("de_DE.UTF-8 locale is not installed")
    try:
        assert month_label("2024-03") == "March 2024"
        assert month_label("2024-12") == "December 2024"
    finally:
        locale.setlocale(locale.LC_TIME, previous)


def test_every_month_has_an_english_label():
    labels = [month_label(f"2023-{m:02d}") for m in range(1, 13)]
    assert labels[0] == "January 2023"
    assert labels[4] == "May 2023"
    assert labels[8] == "September 2023"
    assert len(set(labels)) == 12
