import logging
from datetime import date

import pytest
from freezegun import freeze_time

from pos_ledger.business_logic.affordability_projector import AffordabilityProjector


@pytest.fixture
def projector():
    return AffordabilityProjector()


def test_constant_forecast_decreases_by_net_cost_each_month(projector):
    result = projector.project(1000000, [50000] * 12, 400000, 12, start_month=date(2024, 1, 15))

    balances = [entry.projected_cash_balance for entry in result.projection]
    assert len(balances) == 12
    assert balances[0] == 650000
    assert all(prev - cur == 350000 for prev, cur in zip(balances, balances[1:]))
    assert result.is_affordable is False
    assert result.first_negative_month == "2024-04"
    assert [e.is_negative for e in result.projection[:3]] == [False, False, True]


def test_a_single_negative_month_fails_even_after_recovery(projector):
    forecast = [0, -300, 1000, 1000]
    result = projector.project(100, forecast, 0, 4, start_month=date(2024, 1, 1))

    assert [e.projected_cash_balance for e in result.projection] == [100, -200, 800, 1800]
    assert result.projection[-1].is_negative is False
    assert result.is_affordable is False
    assert result.first_negative_month == "2024-03"


def test_affordable_when_balance_never_drops_below_zero(projector):
    result = projector.project(1000, [100, 100, 100], 100, 3, start_month=date(2024, 11, 1))

    assert result.is_affordable is True
    assert result.first_negative_month is None
    assert [e.month for e in result.projection] == ["2024-12", "2025-01", "2025-02"]
    assert [e.projected_cash_balance for e in result.projection] == [1000, 1000, 1000]


def test_exactly_zero_is_not_negative(projector):
    result = projector.project(300, [0, 0, 0], 100, 3, start_month=date(2024, 1, 1))
    assert result.projection[-1].projected_cash_balance == 0
    assert result.is_affordable is True


def test_short_forecast_is_padded_with_zero(projector, caplog):
    with caplog.at_level(logging.WARNING, logger="pos_ledger.business_logic.affordability_projector"):
        result = projector.project(1000, [500], 200, 3, start_month=date(2024, 1, 1))

    assert [e.projected_cash_balance for e in result.projection] == [1300, 1100, 900]
    assert "covers 1 of 3 months" in caplog.text


def test_extra_forecast_entries_are_ignored(projector):
    result = projector.project(0, [10, 10, -1000], 0, 2, start_month=date(2024, 1, 1))
    assert len(result.projection) == 2
    assert result.is_affordable is True


def test_zero_duration_is_trivially_affordable(projector):
    result = projector.project(-5, [1, 2, 3], 100, 0)
    assert result.is_affordable is True
    assert result.projection == []


@freeze_time("2024-06-10")
def test_projection_starts_next_month_by_default(projector):
    result = projector.project(10, [0, 0], 1, 2)
    assert [e.month for e in result.projection] == ["2024-07", "2024-08"]
