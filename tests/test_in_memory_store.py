import dataclasses
from datetime import datetime

import pytest

from pos_ledger.business_logic.entities import (
    CashAccountEntity, CashTransactionEntity, EmployeeEntity, ExpenseCategoryEntity,
)
from pos_ledger.constants import CashTransactionType


def test_ids_are_assigned_per_collection(store, make_expense):
    first = store.add_expense(make_expense(datetime(2024, 1, 1), 1.0))
    second = store.add_expense(make_expense(datetime(2024, 1, 2), 2.0))
    category = store.add_expense_category(ExpenseCategoryEntity(name="Rent"))

    assert (first.id, second.id, category.id) == (1, 2, 1)


def test_sale_items_are_numbered_and_linked(store, make_sale, make_item):
    sale = store.add_sale(make_sale(datetime(2024, 1, 1), 30.0, items=[make_item(1, 1, 10.0), make_item(2, 2, 10.0)]))
    assert [(i.id, i.sale_id) for i in sale.items] == [(1, sale.id), (2, sale.id)]


def test_reads_are_frozen_snapshots(store, make_expense):
    store.add_expense(make_expense(datetime(2024, 1, 1), 1.0))
    snapshot = store.get_expenses()
    snapshot.clear()

    assert len(store.get_expenses()) == 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        store.get_expenses()[0].amount = 5.0


def test_version_tracks_successful_writes(store):
    assert store.version == 0
    employee = store.add_employee(EmployeeEntity(name="Aye Aye", base_salary=1.0))
    store.update_employee(dataclasses.replace(employee, base_salary=2.0))
    assert store.version == 2

    assert store.delete_employee(employee.id) is True
    assert store.delete_employee(employee.id) is False
    assert store.version == 3


def test_replacing_an_unknown_entity_raises(store):
    with pytest.raises(ValueError):
        store.update_employee(EmployeeEntity(id=7, name="Ghost", base_salary=1.0))


def test_unknown_account_leaves_no_cash_transaction(store):
    till = store.add_cash_account(CashAccountEntity(name="Till", balance=10.0))
    with pytest.raises(ValueError):
        store.record_cash_transaction(
            CashTransactionEntity(date=datetime(2024, 3, 1), account_id=till.id,
                                  transaction_type=CashTransactionType.DEPOSIT, amount=5.0),
            CashAccountEntity(id=99, name="Ghost", balance=15.0),
        )
    assert store.get_cash_transactions() == []
    assert store.get_cash_account(till.id).balance == 10.0


def test_sales_between_is_half_open(store, make_sale):
    store.add_sale(make_sale(datetime(2024, 1, 31, 23, 0), 10.0))
    store.add_sale(make_sale(datetime(2024, 2, 1), 20.0))
    store.add_sale(make_sale(datetime(2024, 3, 1), 30.0))
    assert [s.total for s in store.get_sales_between(datetime(2024, 2, 1), datetime(2024, 3, 1))] == [20.0]
