from datetime import date, datetime

import pytest

from pos_ledger.business_logic.entities import ExpenseCategoryEntity
from pos_ledger.business_logic.payroll_manager import PayrollManager
from pos_ledger.data_access.data_store import InMemoryDataStore
from pos_ledger.exceptions import AlreadyPostedError, MissingCategoryError, NothingToPostError


class ReadOnlyCategoriesStore(InMemoryDataStore):
    def add_expense_category(self, category):
        raise PermissionError("expense categories are locked")


@pytest.fixture
def payroll(store):
    return PayrollManager(store, leave_bonus_amount=20000.0)


@pytest.fixture
def team(payroll):
    aye = payroll.add_employee("Aye Aye", 300000)
    ko = payroll.add_employee("Ko Ko", 250000)
    return aye, ko


def test_rejects_bad_configuration(store):
    with pytest.raises(ValueError):
        PayrollManager(None)
    with pytest.raises(ValueError):
        PayrollManager(store, leave_bonus_amount=-1)
    with pytest.raises(ValueError):
        PayrollManager(store, payroll_category_name="  ")


def test_monthly_payroll(payroll, team):
    aye, ko = team
    payroll.record_advance(aye.id, 50000, date(2024, 1, 10), notes="rent")
    payroll.record_leave(ko.id, date(2024, 1, 22))

    results = {r.employee_id: r for r in payroll.monthly_payroll("2024-01")}

    assert results[aye.id].final_salary == 270000.0
    assert results[ko.id].bonus == 0.0
    assert results[ko.id].final_salary == 250000.0


def test_finalize_writes_one_expense_and_is_idempotent(payroll, team, store):
    assert payroll.is_payroll_posted("2024-01") is False

    expense = payroll.finalize_payroll("2024-01")

    assert expense.amount == 590000.0
    assert expense.date == datetime(2024, 1, 31)
    assert expense.description == "Monthly Payroll for January 2024"
    category = store.find_expense_category("payroll")
    assert category is not None and expense.category_id == category.id
    assert payroll.is_payroll_posted("2024-01") is True
    assert payroll.is_payroll_posted("2024-02") is False

    with pytest.raises(AlreadyPostedError) as excinfo:
        payroll.finalize_payroll("2024-01")
    assert excinfo.value.month == "2024-01"
    assert len(store.get_expenses()) == 1


def test_existing_category_is_reused(payroll, team, store):
    existing = store.add_expense_category(ExpenseCategoryEntity(name="Payroll"))
    expense = payroll.finalize_payroll("2024-02")
    assert expense.category_id == existing.id
    assert len(store.get_expense_categories()) == 1


def test_unrelated_expense_with_same_month_does_not_block(payroll, team, store, make_expense):
    other = store.add_expense_category(ExpenseCategoryEntity(name="Rent"))
    store.add_expense(make_expense(datetime(2024, 1, 31), 1.0, category_id=other.id,
                                   description="Monthly Payroll for January 2024"))
    assert payroll.is_payroll_posted("2024-01") is False
    payroll.finalize_payroll("2024-01")


def test_nothing_to_post_writes_nothing(payroll, store):
    with pytest.raises(NothingToPostError):
        payroll.finalize_payroll("2024-01")
    assert store.get_expenses() == []


def test_missing_category_error():
    store = ReadOnlyCategoriesStore()
    payroll = PayrollManager(store)
    payroll.add_employee("Aye Aye", 300000)

    with pytest.raises(MissingCategoryError) as excinfo:
        payroll.finalize_payroll("2024-01")
    assert excinfo.value.category_name == "Payroll"
    assert isinstance(excinfo.value.__cause__, PermissionError)
    assert store.get_expenses() == []


def test_deleted_employee_leaves_orphans_that_are_ignored(payroll, team, store):
    aye, ko = team
    payroll.record_advance(ko.id, 1000, date(2024, 1, 5))
    assert payroll.delete_employee(ko.id) is True

    results = payroll.monthly_payroll("2024-01")

    assert [r.employee_id for r in results] == [aye.id]
    assert len(store.get_salary_advances()) == 1
    assert payroll.delete_employee(ko.id) is False


def test_update_employee(payroll, team):
    aye, _ = team
    updated = payroll.update_employee(aye.id, base_salary=320000)
    assert updated.name == "Aye Aye"
    assert updated.base_salary == 320000.0

    with pytest.raises(ValueError):
        payroll.update_employee(aye.id, base_salary=-5)
    with pytest.raises(ValueError):
        payroll.update_employee(999, name="Nobody")


def test_input_validation(payroll, team):
    aye, _ = team
    with pytest.raises(ValueError):
        payroll.add_employee("", 1000)
    with pytest.raises(ValueError):
        payroll.record_advance(aye.id, 0, date(2024, 1, 1))
    with pytest.raises(ValueError):
        payroll.record_leave(999, date(2024, 1, 1))
    with pytest.raises(ValueError):
        payroll.monthly_payroll("January")


def test_advance_and_leave_can_be_deleted(payroll, team):
    aye, _ = team
    advance = payroll.record_advance(aye.id, 1000, date(2024, 1, 5))
    leave = payroll.record_leave(aye.id, date(2024, 1, 6))

    assert payroll.delete_advance(advance.id) is True
    assert payroll.delete_leave(leave.id) is True

    result = payroll.monthly_payroll("2024-01")[0]
    assert result.total_advance == 0.0
    assert result.bonus == 20000.0


def test_advances_for_one_month(payroll, team):
    aye, ko = team
    payroll.record_advance(aye.id, 1000, date(2024, 1, 31))
    payroll.record_advance(aye.id, 2000, date(2024, 2, 1))
    payroll.record_advance(ko.id, 3000, date(2024, 1, 15))

    assert [a.amount for a in payroll.advances_for(aye.id, "2024-01")] == [1000.0]


def test_payroll_history_newest_first(payroll, team):
    payroll.finalize_payroll("2024-01")
    payroll.finalize_payroll("2024-03")
    assert [e.description for e in payroll.payroll_history()] == [
        "Monthly Payroll for March 2024",
        "Monthly Payroll for January 2024",
    ]
