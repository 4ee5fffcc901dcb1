"""Aggregation domain service."""

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from dateutil.relativedelta import relativedelta

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import (
    Category,
    CategoryBreakdown,
    DashboardSummary,
    DateWindow,
    MonthlyTrend,
    Transaction,
    TransactionKind,
)
from ledgerlens.domain.errors import ValidationError
from ledgerlens.log import get_logger
from ledgerlens.utils.date_parser import iter_months

logger = get_logger(__name__)

ZERO = Decimal("0")
UNCATEGORIZED_NAME = "Uncategorized"


@dataclass
class CategoryTotal:
    """Running expense total and transaction count for one category."""

    total: Decimal = ZERO
    count: int = 0


def percent_change(current: Decimal, previous: Decimal) -> float:
    """Signed percent change from previous to current.

    Returns 0 when previous is not positive.
    """
    if previous <= 0:
        return 0.0
    return float((current - previous) / previous * 100)


def share_percentage(part: Decimal, whole: Decimal) -> float:
    """Percentage of ``whole`` that ``part`` represents, 0 for an empty whole."""
    if whole <= 0:
        return 0.0
    return float(part / whole * 100)


def sum_by_kind(transactions: Iterable[Transaction]) -> tuple[Decimal, Decimal]:
    """Return (income, expense) totals of the given transactions."""
    income = ZERO
    expense = ZERO
    for txn in transactions:
        if txn.kind is TransactionKind.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return income, expense


def group_by_category(transactions: Iterable[Transaction]) -> dict[int, CategoryTotal]:
    """Group transactions by category ID, preserving first-seen order."""
    totals: dict[int, CategoryTotal] = defaultdict(CategoryTotal)
    for txn in transactions:
        entry = totals[txn.category_id]
        entry.total += txn.amount
        entry.count += 1
    return dict(totals)


class AggregationService:
    """Service for summing ledger amounts over windows."""

    def __init__(self, db: Database, clock: Callable[[], date] = date.today):
        """Initialize aggregation service.

        Args:
            db: Database instance
            clock: Callable returning the current date
        """
        self.db = db
        self.clock = clock

    def summarize(self, owner_id: int, window: DateWindow) -> DashboardSummary:
        """Total income and expense within an inclusive window.

        Args:
            owner_id: Owner whose ledger is read
            window: Date window

        Returns:
            DashboardSummary, all zeros for an empty window
        """
        transactions = self.db.query_transactions(
            owner_id, start_date=window.start, end_date=window.end
        )
        income, expense = sum_by_kind(transactions)
        logger.debug(
            "summary computed",
            owner_id=owner_id,
            start=window.start.isoformat(),
            end=window.end.isoformat(),
            transactions=len(transactions),
        )
        return DashboardSummary(total_income=income, total_expense=expense)

    def expense_totals_by_category(
        self, owner_id: int, window: DateWindow
    ) -> dict[int, CategoryTotal]:
        """Expense total and count per category within a window.

        Categories with no expense in the window are absent.
        """
        transactions = self.db.query_transactions(
            owner_id,
            start_date=window.start,
            end_date=window.end,
            kind=TransactionKind.EXPENSE,
        )
        return group_by_category(transactions)

    def category_index(self, owner_id: int) -> dict[int, Category]:
        """Map category IDs to the categories visible to an owner."""
        return {cat.id: cat for cat in self.db.query_categories(owner_id)}

    def breakdown_by_category(
        self, owner_id: int, window: DateWindow
    ) -> list[CategoryBreakdown]:
        """Expense breakdown by category within a window.

        Args:
            owner_id: Owner whose ledger is read
            window: Date window

        Returns:
            One row per category with at least one expense, highest total
            first. Empty when the window has no expense or it totals zero.
        """
        totals = self.expense_totals_by_category(owner_id, window)
        window_total = sum((entry.total for entry in totals.values()), ZERO)
        if window_total <= 0:
            return []

        categories = self.category_index(owner_id)

        rows = []
        for category_id, entry in totals.items():
            category = categories.get(category_id)
            rows.append(
                CategoryBreakdown(
                    category_id=category_id,
                    category_name=category.name if category else UNCATEGORIZED_NAME,
                    category_icon=category.icon if category else None,
                    category_color=category.color if category else None,
                    total=entry.total,
                    percentage=share_percentage(entry.total, window_total),
                    count=entry.count,
                )
            )

        rows.sort(key=lambda row: row.total, reverse=True)
        logger.debug(
            "category breakdown computed",
            owner_id=owner_id,
            categories=len(rows),
            total_expense=str(window_total),
        )
        return rows

    def monthly_trends(
        self, owner_id: int, months_back: int = 6, today: Optional[date] = None
    ) -> list[MonthlyTrend]:
        """Income and expense per calendar month, oldest first.

        The window runs from ``today - months_back`` months through today.
        Every calendar month it touches is reported, so months without
        transactions appear with zero totals.

        Args:
            owner_id: Owner whose ledger is read
            months_back: How many months to reach back
            today: Reference date, defaults to the service clock

        Returns:
            One MonthlyTrend per calendar month in the window

        Raises:
            ValidationError: If months_back is negative
        """
        if months_back < 0:
            raise ValidationError(f"months_back must not be negative, got {months_back}")

        if today is None:
            today = self.clock()
        window = DateWindow(start=today - relativedelta(months=months_back), end=today)

        transactions = self.db.query_transactions(
            owner_id, start_date=window.start, end_date=window.end
        )
        buckets: dict[tuple[int, int], list[Transaction]] = defaultdict(list)
        for txn in transactions:
            buckets[(txn.date.year, txn.date.month)].append(txn)

        trends = []
        for year, month in iter_months(window.start, window.end):
            income, expense = sum_by_kind(buckets.get((year, month), []))
            trends.append(
                MonthlyTrend(
                    month=calendar.month_abbr[month],
                    month_number=month,
                    year=year,
                    total_income=income,
                    total_expense=expense,
                )
            )

        logger.debug(
            "monthly trends computed",
            owner_id=owner_id,
            months=len(trends),
            transactions=len(transactions),
        )
        return trends
