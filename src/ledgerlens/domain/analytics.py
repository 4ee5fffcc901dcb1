"""Analytics facade used by dashboard and report callers."""

from datetime import date
from typing import Callable, Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.aggregation import UNCATEGORIZED_NAME, AggregationService
from ledgerlens.domain.comparison import ComparisonService
from ledgerlens.domain.entities import (
    CategoryAnalysis,
    CategoryBreakdown,
    DashboardSummary,
    MonthlyTrend,
    PeriodComparison,
    RecentTransaction,
    SpendingForecast,
    TimeFilter,
)
from ledgerlens.domain.errors import ValidationError
from ledgerlens.domain.forecast import ForecastService
from ledgerlens.domain.trends import TrendService
from ledgerlens.utils.date_parser import get_date_range

DEFAULT_MONTHS_BACK = 6
DEFAULT_RECENT_LIMIT = 10


class AnalyticsService:
    """Read-only analytics over an owner's ledger.

    Every operation reads the store afresh; nothing is cached between calls.
    Store errors propagate to the caller unchanged.
    """

    def __init__(self, db: Database, clock: Callable[[], date] = date.today):
        """Initialize analytics service.

        Args:
            db: Database instance
            clock: Callable returning the current date
        """
        self.db = db
        self.clock = clock
        self.aggregation = AggregationService(db, clock=clock)
        self.trends = TrendService(db, clock=clock)
        self.forecast = ForecastService(db, clock=clock)
        self.comparison = ComparisonService(db, clock=clock)

    def get_dashboard_summary(
        self, owner_id: int, time_filter: TimeFilter | str
    ) -> DashboardSummary:
        """Income, expense and balance for the period selected by the filter."""
        window = get_date_range(TimeFilter.parse(time_filter), self.clock())
        return self.aggregation.summarize(owner_id, window)

    def get_category_breakdown(
        self, owner_id: int, time_filter: TimeFilter | str
    ) -> list[CategoryBreakdown]:
        """Expense breakdown by category for the period selected by the filter."""
        window = get_date_range(TimeFilter.parse(time_filter), self.clock())
        return self.aggregation.breakdown_by_category(owner_id, window)

    def get_monthly_trends(
        self, owner_id: int, months_back: int = DEFAULT_MONTHS_BACK
    ) -> list[MonthlyTrend]:
        """Income and expense per calendar month over the last months."""
        return self.aggregation.monthly_trends(owner_id, months_back, today=self.clock())

    def get_category_analysis(
        self, owner_id: int, start: date, end: date
    ) -> list[CategoryAnalysis]:
        """Per-category spending and trend for an explicit window."""
        return self.trends.analyze_category_trends(owner_id, start, end)

    def get_spending_forecast(self, owner_id: int) -> Optional[SpendingForecast]:
        """Month-end spending projection, or None early in the month."""
        return self.forecast.get_spending_forecast(owner_id)

    def get_period_comparison(
        self, owner_id: int, start: date, end: date
    ) -> PeriodComparison:
        """Ledger totals of an explicit window against the previous window."""
        return self.comparison.compare(owner_id, start, end)

    def get_recent_transactions(
        self, owner_id: int, limit: int = DEFAULT_RECENT_LIMIT
    ) -> list[RecentTransaction]:
        """Most recent transactions with category display data, newest first.

        Raises:
            ValidationError: If limit is not positive
        """
        if limit <= 0:
            raise ValidationError(f"limit must be positive, got {limit}")

        transactions = self.db.query_transactions(owner_id, limit=limit)
        categories = self.aggregation.category_index(owner_id)

        recent = []
        for txn in transactions:
            category = categories.get(txn.category_id)
            recent.append(
                RecentTransaction(
                    id=txn.id,
                    amount=txn.amount,
                    kind=txn.kind,
                    date=txn.date,
                    name=txn.name,
                    category_id=txn.category_id,
                    category_name=category.name if category else UNCATEGORIZED_NAME,
                    category_icon=category.icon if category else None,
                    category_color=category.color if category else None,
                )
            )
        return recent
