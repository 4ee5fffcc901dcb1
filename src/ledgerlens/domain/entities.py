"""Domain model entities for ledgerlens.

These are pure data classes representing ledger records and the read-only
analytics views derived from them, independent of the database schema.
"""

from dataclasses import dataclass
from datetime import datetime, date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional

from ledgerlens.domain.errors import ValidationError, invalid_window


class TransactionKind(str, Enum):
    """Direction of money flow for transactions and categories."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value: "str | TransactionKind") -> "TransactionKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            raise ValidationError(
                f"Unknown transaction kind '{value}'. Supported kinds: income, expense"
            )


class TimeFilter(str, Enum):
    """Coarse dashboard time filter."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "str | TimeFilter") -> "TimeFilter":
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            raise ValidationError(
                f"Unknown time filter '{value}'. Supported filters: day, week, month, year"
            )


class TrendDirection(str, Enum):
    """Classification of a signed percent change."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class ForecastConfidence(str, Enum):
    """Forecast reliability tier, driven by days elapsed in the month."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Category:
    """Category domain entity.

    A category with ``owner_id`` of None is a system-wide default shared by
    every owner.
    """

    id: int
    owner_id: Optional[int]
    name: str
    icon: Optional[str]
    color: Optional[str]
    kind: TransactionKind
    is_system: bool
    display_order: int
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    owner_id: int
    category_id: int
    amount: Decimal
    kind: TransactionKind
    date: date
    name: str
    note: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class DateWindow:
    """Inclusive calendar-date range used for aggregation."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError(invalid_window(self.start, self.end))

    @property
    def day_count(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def previous(self) -> "DateWindow":
        """Return the adjacent window of identical day count that ends the day before start."""
        length_days = (self.end - self.start).days
        prev_end = self.start - timedelta(days=1)
        prev_start = prev_end - timedelta(days=length_days)
        return DateWindow(start=prev_start, end=prev_end)


@dataclass(frozen=True)
class DashboardSummary:
    """Income and expense totals over a window."""

    total_income: Decimal
    total_expense: Decimal

    @property
    def total_balance(self) -> Decimal:
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class CategoryBreakdown:
    """Expense total of one category within a window."""

    category_id: int
    category_name: str
    category_icon: Optional[str]
    category_color: Optional[str]
    total: Decimal
    percentage: float
    count: int


@dataclass(frozen=True)
class MonthlyTrend:
    """Income and expense totals for one calendar month."""

    month: str
    month_number: int
    year: int
    total_income: Decimal
    total_expense: Decimal

    @property
    def net_balance(self) -> Decimal:
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class CategoryAnalysis:
    """Expense total of one category with its trend against the previous window."""

    category_id: int
    category_name: str
    category_icon: Optional[str]
    category_color: Optional[str]
    total: Decimal
    percentage: float
    transaction_count: int
    trend: TrendDirection
    trend_percentage: float


@dataclass(frozen=True)
class SpendingForecast:
    """Month-end spending projection."""

    current_month_spent: Decimal
    days_in_month: int
    days_passed: int
    daily_average: Decimal
    projected_end_of_month: Decimal
    projected_balance: Decimal
    confidence: ForecastConfidence
    warning: bool


@dataclass(frozen=True)
class PeriodComparison:
    """Whole-ledger totals of a window next to its comparable previous window.

    The ``*_change`` fields are signed percent deltas; no direction label is
    attached.
    """

    current_window: DateWindow
    previous_window: DateWindow
    current_income: Decimal
    current_expense: Decimal
    previous_income: Decimal
    previous_expense: Decimal
    income_change: float
    expense_change: float
    balance_change: float

    @property
    def current_balance(self) -> Decimal:
        return self.current_income - self.current_expense

    @property
    def previous_balance(self) -> Decimal:
        return self.previous_income - self.previous_expense


@dataclass(frozen=True)
class RecentTransaction:
    """Transaction joined with its category display data."""

    id: int
    amount: Decimal
    kind: TransactionKind
    date: date
    name: str
    category_id: int
    category_name: str
    category_icon: Optional[str]
    category_color: Optional[str]


@dataclass(frozen=True)
class TransactionPage:
    """One page of a filtered transaction listing, newest first."""

    transactions: list[Transaction]
    total_count: int
    page: int
    per_page: int

    @property
    def has_more(self) -> bool:
        return self.total_count > self.page * self.per_page
