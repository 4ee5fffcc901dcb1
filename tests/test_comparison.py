"""Tests for period-over-period comparison."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from ledgerlens.domain.comparison import ComparisonService
from ledgerlens.domain.entities import DateWindow
from ledgerlens.domain.errors import ValidationError

from conftest import OWNER_ID


@pytest.fixture
def comparison_service(temp_db, clock):
    return ComparisonService(temp_db, clock=clock)


def test_windows_are_adjacent(comparison_service):
    comparison = comparison_service.compare(OWNER_ID, date(2024, 3, 1), date(2024, 3, 15))

    assert comparison.current_window == DateWindow(date(2024, 3, 1), date(2024, 3, 15))
    assert comparison.previous_window == DateWindow(date(2024, 2, 15), date(2024, 2, 29))
    assert comparison.previous_window.end == comparison.current_window.start - timedelta(days=1)


def test_empty_ledger_reports_zero_changes(comparison_service):
    comparison = comparison_service.compare(OWNER_ID, date(2024, 3, 1), date(2024, 3, 15))

    assert comparison.current_income == 0
    assert comparison.previous_expense == 0
    assert comparison.income_change == 0
    assert comparison.expense_change == 0
    assert comparison.balance_change == 0


def test_income_from_nothing_is_zero_change(comparison_service, add_txn):
    add_txn("income", "5000000", date(2024, 3, 5))
    add_txn("expense", "100", date(2024, 2, 20))
    add_txn("expense", "150", date(2024, 3, 6))

    comparison = comparison_service.compare(OWNER_ID, date(2024, 3, 1), date(2024, 3, 15))

    assert comparison.current_income == Decimal("5000000")
    assert comparison.previous_income == 0
    assert comparison.income_change == 0
    assert comparison.expense_change == pytest.approx(50.0)


def test_balance_change_against_negative_previous_balance(comparison_service, add_txn):
    # Previous window: income 100, expense 300 -> balance -200
    add_txn("income", "100", date(2024, 2, 20))
    add_txn("expense", "300", date(2024, 2, 21))
    add_txn("income", "400", date(2024, 3, 2))

    comparison = comparison_service.compare(OWNER_ID, date(2024, 3, 1), date(2024, 3, 15))

    assert comparison.previous_balance == Decimal("-200")
    assert comparison.current_balance == Decimal("400")
    assert comparison.balance_change == 0
    assert comparison.income_change == pytest.approx(300.0)
    assert comparison.expense_change == pytest.approx(-100.0)


def test_signed_changes(comparison_service, add_txn):
    add_txn("income", "1000", date(2024, 2, 16))
    add_txn("expense", "400", date(2024, 2, 17))
    add_txn("income", "800", date(2024, 3, 3))
    add_txn("expense", "500", date(2024, 3, 4))

    comparison = comparison_service.compare(OWNER_ID, date(2024, 3, 1), date(2024, 3, 15))

    assert comparison.income_change == pytest.approx(-20.0)
    assert comparison.expense_change == pytest.approx(25.0)
    # Balance 600 -> 300
    assert comparison.balance_change == pytest.approx(-50.0)


def test_single_day_window(comparison_service, add_txn):
    add_txn("expense", "10", date(2024, 3, 14))
    add_txn("expense", "20", date(2024, 3, 15))

    comparison = comparison_service.compare(OWNER_ID, date(2024, 3, 15), date(2024, 3, 15))

    assert comparison.previous_window == DateWindow(date(2024, 3, 14), date(2024, 3, 14))
    assert comparison.previous_expense == Decimal("10")
    assert comparison.current_expense == Decimal("20")
    assert comparison.expense_change == pytest.approx(100.0)


def test_rejects_inverted_window(comparison_service):
    with pytest.raises(ValidationError):
        comparison_service.compare(OWNER_ID, date(2024, 3, 15), date(2024, 3, 1))
