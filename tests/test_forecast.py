"""Tests for the month-end spending forecast."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerlens.domain.entities import ForecastConfidence
from ledgerlens.domain.forecast import ForecastService, forecast_confidence, project_spending

from conftest import OWNER_ID


@pytest.mark.parametrize("days_passed", [0, 1, 2])
def test_no_forecast_before_third_day(days_passed):
    assert project_spending(Decimal("0"), Decimal("100"), days_passed, 30) is None


@pytest.mark.parametrize("days_passed", [3, 4, 15, 31])
def test_forecast_from_third_day(days_passed):
    assert project_spending(Decimal("0"), Decimal("100"), days_passed, 31) is not None


@pytest.mark.parametrize(
    "days_passed,expected",
    [
        (3, ForecastConfidence.LOW),
        (9, ForecastConfidence.LOW),
        (10, ForecastConfidence.MEDIUM),
        (19, ForecastConfidence.MEDIUM),
        (20, ForecastConfidence.HIGH),
        (31, ForecastConfidence.HIGH),
    ],
)
def test_confidence_tiers(days_passed, expected):
    assert forecast_confidence(days_passed) is expected


def test_linear_projection():
    forecast = project_spending(
        month_income=Decimal("40000000"),
        month_expense=Decimal("10000000"),
        days_passed=10,
        days_in_month=30,
    )

    assert forecast.daily_average == Decimal("1000000")
    assert forecast.projected_end_of_month == Decimal("30000000")
    assert forecast.projected_balance == Decimal("10000000")
    assert forecast.confidence is ForecastConfidence.MEDIUM
    assert forecast.warning is False


def test_warning_when_projection_exceeds_income():
    # 25,000,000 projected from 12 of 30 days
    forecast = project_spending(
        month_income=Decimal("20000000"),
        month_expense=Decimal("10000000"),
        days_passed=12,
        days_in_month=30,
    )

    assert forecast.projected_end_of_month == pytest.approx(Decimal("25000000"))
    assert forecast.projected_balance == pytest.approx(Decimal("-5000000"))
    assert forecast.warning is True


def test_zero_spending_projects_zero():
    forecast = project_spending(Decimal("0"), Decimal("0"), 5, 31)

    assert forecast.daily_average == 0
    assert forecast.projected_end_of_month == 0
    assert forecast.projected_balance == 0
    assert forecast.warning is False


class TestForecastService:
    """Tests for the store-backed forecast."""

    def test_absent_early_in_month(self, temp_db, add_txn):
        add_txn("expense", "100", date(2024, 3, 1))
        service = ForecastService(temp_db, clock=lambda: date(2024, 3, 2))

        assert service.get_spending_forecast(OWNER_ID) is None

    def test_uses_month_to_date(self, temp_db, add_txn):
        add_txn("income", "20000000", date(2024, 4, 1))
        add_txn("expense", "4000000", date(2024, 4, 3))
        add_txn("expense", "6000000", date(2024, 4, 10))
        # Outside the month to date
        add_txn("expense", "999", date(2024, 3, 31))
        add_txn("expense", "999", date(2024, 4, 11))
        service = ForecastService(temp_db, clock=lambda: date(2024, 4, 10))

        forecast = service.get_spending_forecast(OWNER_ID)

        assert forecast.current_month_spent == Decimal("10000000")
        assert forecast.days_passed == 10
        assert forecast.days_in_month == 30
        assert forecast.daily_average == Decimal("1000000")
        assert forecast.projected_end_of_month == Decimal("30000000")
        assert forecast.projected_balance == Decimal("-10000000")
        assert forecast.confidence is ForecastConfidence.MEDIUM
        assert forecast.warning is True

    def test_empty_ledger_forecasts_zero(self, temp_db):
        service = ForecastService(temp_db, clock=lambda: date(2024, 2, 29))

        forecast = service.get_spending_forecast(OWNER_ID)

        assert forecast.days_in_month == 29
        assert forecast.confidence is ForecastConfidence.HIGH
        assert forecast.projected_end_of_month == 0
        assert forecast.warning is False
