from datetime import date, datetime

import pytest

from pos_ledger.business_logic.forecast import StaticForecast, TrendForecaster
from pos_ledger.constants import SaleStatus


def test_static_forecast_truncates_to_duration():
    forecast = StaticForecast([100, 200, 300])
    assert forecast.forecast_net_cash_flow(2) == [100.0, 200.0]
    assert forecast.forecast_net_cash_flow(5) == [100.0, 200.0, 300.0]


def test_trend_averages_last_complete_months(make_sale, make_expense):
    sales = [
        make_sale(datetime(2024, 1, 10), 900.0),
        make_sale(datetime(2024, 2, 10), 600.0),
        make_sale(datetime(2024, 3, 10), 300.0),
        make_sale(datetime(2024, 3, 11), 5000.0, status=SaleStatus.VOIDED),
        make_sale(datetime(2024, 3, 12), 7000.0, status=SaleStatus.QUOTATION),
        make_sale(datetime(2024, 4, 2), 10000.0),        # current month, not complete
        make_sale(datetime(2023, 12, 31), 10000.0),      # outside the lookback
    ]
    expenses = [make_expense(datetime(2024, 2, 1), 300.0)]

    forecaster = TrendForecaster(sales, expenses, lookback_months=3, today=date(2024, 4, 15))

    assert forecaster.historical_net_flows() == [900.0, 300.0, 300.0]
    assert forecaster.forecast_net_cash_flow(4) == [500.0] * 4


def test_trend_without_history_is_flat_zero():
    forecaster = TrendForecaster([], [], today=date(2024, 4, 15))
    assert forecaster.forecast_net_cash_flow(3) == [0.0, 0.0, 0.0]


def test_trend_rejects_non_positive_lookback():
    with pytest.raises(ValueError):
        TrendForecaster([], [], lookback_months=0)
