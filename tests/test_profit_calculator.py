from datetime import date, datetime

import pytest

from pos_ledger.business_logic.entities import CategoryEntity, MonthlyFinancialReport, ProductEntity
from pos_ledger.business_logic.profit_calculator import ProfitCalculator, compute_change, filter_sales
from pos_ledger.constants import SaleStatus, SalesFilterMode, UNCATEGORIZED


def test_january_scenario(make_sale, make_expense):
    sales = [
        make_sale(datetime(2024, 1, 5), 100.0),
        make_sale(datetime(2024, 1, 20), 50.0, status=SaleStatus.VOIDED),
    ]
    expenses = [make_expense(datetime(2024, 1, 10), 30.0)]

    report = ProfitCalculator().compute_report(sales, expenses)["2024-01"]

    assert report.revenue == 100.0
    assert report.cogs == 0.0
    assert report.expenses == 30.0
    assert report.gross_profit == 100.0
    assert report.net_profit == 70.0
    assert report.net_profit_percentage == pytest.approx(70.0)


@pytest.mark.parametrize("current, expected", [(0, 0.0), (-5, 0.0), (0.01, 100.0), (250, 100.0)])
def test_change_from_zero(current, expected):
    assert compute_change(current, 0) == expected


@pytest.mark.parametrize("current, previous, expected", [
    (150, 100, 50.0),
    (50, 100, -50.0),
    (100, 100, 0.0),
    (-20, 40, -150.0),
])
def test_change_is_relative_to_previous(current, previous, expected):
    assert compute_change(current, previous) == pytest.approx(expected)


def test_filter_modes(make_sale):
    when = datetime(2024, 1, 1)
    sales = [make_sale(when, 1.0, status=s) for s in SaleStatus]

    realized = {s.status for s in filter_sales(sales, SalesFilterMode.REALIZED_ONLY)}
    assert realized == {SaleStatus.COMPLETED}

    reportable = {s.status for s in filter_sales(sales, SalesFilterMode.ALL_EXCEPT_VOID_AND_QUOTE)}
    assert reportable == set(SaleStatus) - {SaleStatus.VOIDED, SaleStatus.QUOTATION}

    cash = {s.status for s in filter_sales(sales, SalesFilterMode.EXCLUDE_VOIDED)}
    assert cash == set(SaleStatus) - {SaleStatus.VOIDED}


def test_invoice_counts_only_outside_realized_mode(make_sale):
    sales = [make_sale(datetime(2024, 2, 1), 80.0, status=SaleStatus.INVOICE)]
    calculator = ProfitCalculator()
    assert calculator.compute_report(sales, [], SalesFilterMode.REALIZED_ONLY) == {}
    assert calculator.compute_report(sales, [], SalesFilterMode.ALL_EXCEPT_VOID_AND_QUOTE)["2024-02"].revenue == 80.0


def test_gross_profit_is_revenue_minus_cogs(make_sale, make_item, product):
    sales = [
        make_sale(datetime(2024, 1, 5), 200.0, items=[make_item(product.id, 2, 100.0)]),
        make_sale(datetime(2024, 1, 6), 300.0, items=[make_item(product.id, 3, 100.0, cogs=150.0)]),
    ]
    calculator = ProfitCalculator(product_cost_lookup={product.id: product.buy_price}.get)
    report = calculator.compute_report(sales, [])["2024-01"]

    # 2 * 60 from the lookup plus the recorded 150
    assert report.cogs == 270.0
    assert report.gross_profit == report.revenue - report.cogs == 230.0
    assert calculator.cost_lookup_misses == 0


def test_lookup_miss_contributes_zero_and_is_counted(make_sale, make_item):
    sales = [make_sale(datetime(2024, 1, 5), 50.0, items=[make_item(404, 1, 50.0), make_item(405, 2, 0.0)])]
    calculator = ProfitCalculator(product_cost_lookup={}.get)

    assert calculator.sale_cogs(sales[0]) == 0.0
    assert calculator.cost_lookup_misses == 2


def test_zero_revenue_month_has_zero_percentage(make_expense):
    report = ProfitCalculator().compute_report([], [make_expense(datetime(2024, 4, 1), 10.0)])["2024-04"]
    assert report.net_profit == -10.0
    assert report.net_profit_percentage == 0.0


def test_report_invariants_hold():
    report = MonthlyFinancialReport(month="2024-01", revenue=500.0, cogs=125.0, expenses=75.0)
    assert report.gross_profit == 375.0
    assert report.net_profit == 300.0
    assert report.net_profit_percentage == 60.0


def test_trailing_reports_are_seeded_oldest_first(make_sale, make_expense):
    sales = [make_sale(datetime(2024, 3, 2), 40.0)]
    expenses = [make_expense(datetime(2024, 1, 20), 15.0)]

    reports = ProfitCalculator().compute_trailing_reports(sales, expenses, months=4, today=date(2024, 3, 31))

    assert [r.month for r in reports] == ["2023-12", "2024-01", "2024-02", "2024-03"]
    assert reports[0].revenue == 0.0 and reports[0].expenses == 0.0
    assert reports[1].net_profit == -15.0
    assert reports[3].revenue == 40.0


def test_period_metrics(make_sale, make_item, product):
    calculator = ProfitCalculator(product_cost_lookup={product.id: product.buy_price}.get)
    sales = [
        make_sale(datetime(2024, 3, 14, 9), 100.0, items=[make_item(product.id, 1, 100.0)]),
        make_sale(datetime(2024, 3, 14, 17), 300.0, items=[make_item(product.id, 3, 100.0)]),
        make_sale(datetime(2024, 3, 15, 0, 0), 999.0),
        make_sale(datetime(2024, 3, 14, 12), 500.0, status=SaleStatus.QUOTATION),
    ]

    metrics = calculator.period_metrics(sales, date(2024, 3, 14), date(2024, 3, 15))

    assert metrics.revenue == 400.0
    assert metrics.cogs == 240.0
    assert metrics.gross_profit == 160.0
    assert metrics.transactions == 2
    assert metrics.average_transaction_value == 200.0


def test_profit_by_category(make_sale, make_item):
    products = [
        ProductEntity(id=1, name="Tea", sell_price=100.0, buy_price=60.0, category_id=10),
        ProductEntity(id=2, name="Cup", sell_price=50.0, buy_price=70.0, category_id=20),
        ProductEntity(id=3, name="Honey", sell_price=80.0, buy_price=30.0),
    ]
    categories = [CategoryEntity(id=10, name="Drinks"), CategoryEntity(id=20, name="Kitchen")]
    sales = [
        make_sale(datetime(2024, 5, 2), 0.0, items=[
            make_item(1, 2, 100.0),   # Drinks +80
            make_item(2, 1, 50.0),    # Kitchen -20, dropped
            make_item(3, 1, 80.0),    # no category +50
            make_item(99, 5, 10.0),   # unknown product, skipped
        ]),
        make_sale(datetime(2024, 5, 3), 0.0, status=SaleStatus.INVOICE, items=[make_item(1, 10, 100.0)]),
        make_sale(datetime(2024, 4, 30), 0.0, items=[make_item(1, 10, 100.0)]),
    ]

    ranked = ProfitCalculator().profit_by_category(sales, products, categories, "2024-05")

    assert [(c.name, c.amount) for c in ranked] == [("Drinks", 80.0), (UNCATEGORIZED, 50.0)]


def test_profit_by_category_limit(make_sale, make_item):
    products = [ProductEntity(id=i, name=f"P{i}", sell_price=10.0, buy_price=0.0, category_id=i) for i in range(1, 8)]
    categories = [CategoryEntity(id=i, name=f"C{i}") for i in range(1, 8)]
    sales = [make_sale(datetime(2024, 5, 2), 0.0, items=[make_item(i, i, 10.0) for i in range(1, 8)])]

    ranked = ProfitCalculator().profit_by_category(sales, products, categories, "2024-05", limit=5)

    assert [c.name for c in ranked] == ["C7", "C6", "C5", "C4", "C3"]


def test_an_item_seen_in_overlapping_windows_is_one_miss(make_sale, make_item):
    sale = make_sale(datetime(2024, 6, 10, 9), 30.0, items=[make_item(99, 1, 30.0)])
    calculator = ProfitCalculator(product_cost_lookup={}.get)

    calculator.period_metrics([sale], date(2024, 6, 10), date(2024, 6, 11))
    calculator.period_metrics([sale], date(2024, 6, 1), date(2024, 6, 11))

    assert calculator.cost_lookup_misses == 1
