"""Tests for domain entities."""

import pytest
from datetime import datetime, date, timedelta, UTC
from decimal import Decimal

from ledgerlens.domain.entities import (
    Category,
    DashboardSummary,
    DateWindow,
    MonthlyTrend,
    PeriodComparison,
    TimeFilter,
    Transaction,
    TransactionKind,
)
from ledgerlens.domain.errors import DomainError, ValidationError


class TestTransaction:
    """Tests for Transaction entity."""

    def test_transaction_immutability(self):
        """Test that Transaction entities are immutable."""
        txn = Transaction(
            id=1,
            owner_id=1,
            category_id=3,
            amount=Decimal("50.00"),
            kind=TransactionKind.EXPENSE,
            date=date(2024, 3, 1),
            name="Lunch",
            note=None,
            created_at=datetime.now(UTC),
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            txn.amount = Decimal("1")


class TestCategory:
    """Tests for Category entity."""

    def test_category_equality(self):
        created_at = datetime.now(UTC)
        kwargs = dict(
            owner_id=None,
            name="Salary",
            icon=None,
            color=None,
            kind=TransactionKind.INCOME,
            is_system=True,
            display_order=1,
            created_at=created_at,
        )
        assert Category(id=1, **kwargs) == Category(id=1, **kwargs)
        assert Category(id=1, **kwargs) != Category(id=2, **kwargs)


class TestEnums:
    """Tests for enum parsing."""

    def test_parse_kind(self):
        assert TransactionKind.parse(" Income ") is TransactionKind.INCOME
        assert TransactionKind.parse(TransactionKind.EXPENSE) is TransactionKind.EXPENSE

    def test_parse_kind_rejects_unknown(self):
        with pytest.raises(ValidationError):
            TransactionKind.parse("transfer")

    @pytest.mark.parametrize("value", [None, 3])
    def test_parse_rejects_non_strings(self, value):
        with pytest.raises(ValidationError):
            TransactionKind.parse(value)
        with pytest.raises(ValidationError):
            TimeFilter.parse(value)

    def test_parse_time_filter(self):
        assert TimeFilter.parse("WEEK") is TimeFilter.WEEK

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            TimeFilter.parse("fortnight")
        assert issubclass(ValidationError, DomainError)


class TestDateWindow:
    """Tests for DateWindow."""

    def test_rejects_inverted_range(self):
        with pytest.raises(ValidationError, match="before start"):
            DateWindow(start=date(2024, 3, 10), end=date(2024, 3, 9))

    def test_single_day_window(self):
        window = DateWindow(start=date(2024, 3, 10), end=date(2024, 3, 10))
        assert window.day_count == 1
        assert window.contains(date(2024, 3, 10))
        assert not window.contains(date(2024, 3, 11))

    def test_previous_window_month_to_date(self):
        window = DateWindow(start=date(2024, 3, 1), end=date(2024, 3, 15))
        previous = window.previous()
        assert previous == DateWindow(start=date(2024, 2, 15), end=date(2024, 2, 29))

    def test_previous_window_single_day(self):
        window = DateWindow(start=date(2024, 1, 1), end=date(2024, 1, 1))
        assert window.previous() == DateWindow(date(2023, 12, 31), date(2023, 12, 31))

    @pytest.mark.parametrize(
        "start,end",
        [
            (date(2024, 3, 1), date(2024, 3, 1)),
            (date(2024, 3, 1), date(2024, 3, 31)),
            (date(2024, 1, 1), date(2024, 12, 31)),
            (date(2023, 12, 25), date(2024, 1, 7)),
            (date(2024, 2, 28), date(2024, 3, 1)),
        ],
    )
    def test_previous_window_is_adjacent_and_same_length(self, start, end):
        window = DateWindow(start=start, end=end)
        previous = window.previous()

        assert previous.day_count == window.day_count
        assert previous.end == window.start - timedelta(days=1)


class TestDerivedFields:
    """Tests for derived balance fields."""

    def test_summary_balance(self):
        summary = DashboardSummary(total_income=Decimal("100"), total_expense=Decimal("250"))
        assert summary.total_balance == Decimal("-150")

    def test_zero_summary_balance(self):
        summary = DashboardSummary(total_income=Decimal("0"), total_expense=Decimal("0"))
        assert summary.total_balance == 0

    def test_monthly_trend_net_balance(self):
        trend = MonthlyTrend(
            month="Mar",
            month_number=3,
            year=2024,
            total_income=Decimal("500"),
            total_expense=Decimal("200"),
        )
        assert trend.net_balance == Decimal("300")

    def test_period_comparison_balances(self):
        window = DateWindow(date(2024, 3, 1), date(2024, 3, 15))
        comparison = PeriodComparison(
            current_window=window,
            previous_window=window.previous(),
            current_income=Decimal("10"),
            current_expense=Decimal("4"),
            previous_income=Decimal("8"),
            previous_expense=Decimal("9"),
            income_change=25.0,
            expense_change=-55.6,
            balance_change=0.0,
        )
        assert comparison.current_balance == Decimal("6")
        assert comparison.previous_balance == Decimal("-1")
