"""Shared fixtures: an empty in-memory store, a SQLite store under tmp_path and record factories."""
import pytest

from pos_ledger.business_logic.entities import (
    SaleEntity, SaleItemEntity, ExpenseEntity, PurchaseEntity,
    ProductEntity, EmployeeEntity, SalaryAdvanceEntity, LeaveRecordEntity,
)
from pos_ledger.constants import SaleStatus
from pos_ledger.data_access.data_store import InMemoryDataStore
from pos_ledger.data_access.sqlite_data_store import SqliteDataStore


@pytest.fixture
def store():
    return InMemoryDataStore()


@pytest.fixture
def sqlite_store(tmp_path):
    return SqliteDataStore(str(tmp_path / "ledger.db"))


@pytest.fixture
def make_sale():
    def _make(when, total, status=SaleStatus.COMPLETED, items=(), store_id=None):
        return SaleEntity(date=when, total=total, status=status, items=tuple(items), store_id=store_id)
    return _make


@pytest.fixture
def make_item():
    def _make(product_id, quantity, sell_price, cogs=None):
        return SaleItemEntity(product_id=product_id, quantity=quantity, sell_price=sell_price,
                              total=quantity * sell_price, cogs=cogs)
    return _make


@pytest.fixture
def make_expense():
    def _make(when, amount, category_id=None, description="", store_id=None):
        return ExpenseEntity(date=when, amount=amount, category_id=category_id,
                             description=description, store_id=store_id)
    return _make


@pytest.fixture
def make_purchase():
    def _make(when, total):
        return PurchaseEntity(date=when, total=total)
    return _make


@pytest.fixture
def product():
    return ProductEntity(id=1, name="Green Tea", sell_price=100.0, buy_price=60.0, category_id=1)


@pytest.fixture
def staff():
    """Two employees with ids 1 and 2."""
    return [
        EmployeeEntity(id=1, name="Aye Aye", base_salary=300000.0),
        EmployeeEntity(id=2, name="Ko Ko", base_salary=250000.0),
    ]


@pytest.fixture
def make_advance():
    def _make(employee_id, when, amount):
        return SalaryAdvanceEntity(employee_id=employee_id, date=when, amount=amount)
    return _make


@pytest.fixture
def make_leave():
    def _make(employee_id, when):
        return LeaveRecordEntity(employee_id=employee_id, date=when)
    return _make
