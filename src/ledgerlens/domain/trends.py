"""Category trend analysis domain service."""

from datetime import date
from decimal import Decimal
from typing import Callable

from ledgerlens.database.base import Database
from ledgerlens.domain.aggregation import (
    ZERO,
    UNCATEGORIZED_NAME,
    AggregationService,
    percent_change,
    share_percentage,
)
from ledgerlens.domain.entities import CategoryAnalysis, DateWindow, TrendDirection
from ledgerlens.log import get_logger

logger = get_logger(__name__)

# Percent change beyond which a category counts as trending
TREND_THRESHOLD = 5.0


def classify_trend(change: float) -> TrendDirection:
    """Classify a signed percent change against the +/- threshold."""
    if change > TREND_THRESHOLD:
        return TrendDirection.UP
    if change < -TREND_THRESHOLD:
        return TrendDirection.DOWN
    return TrendDirection.STABLE


class TrendService:
    """Service for comparing per-category spending with the previous window."""

    def __init__(self, db: Database, clock: Callable[[], date] = date.today):
        """Initialize trend service.

        Args:
            db: Database instance
            clock: Callable returning the current date
        """
        self.db = db
        self.aggregation = AggregationService(db, clock=clock)

    def analyze_category_trends(
        self, owner_id: int, start: date, end: date
    ) -> list[CategoryAnalysis]:
        """Analyze current expense per category and its trend.

        Each category spending in ``[start, end]`` is compared with its spend
        in the comparable previous window. A category with no spend in the
        previous window is reported as stable with a 0% change. Categories
        that only spent in the previous window are not reported.

        Args:
            owner_id: Owner whose ledger is read
            start: Inclusive window start
            end: Inclusive window end

        Returns:
            CategoryAnalysis rows, highest current total first

        Raises:
            ValidationError: If end is before start
        """
        window = DateWindow(start=start, end=end)
        previous_window = window.previous()

        current = self.aggregation.expense_totals_by_category(owner_id, window)
        if not current:
            return []
        previous = self.aggregation.expense_totals_by_category(owner_id, previous_window)
        categories = self.aggregation.category_index(owner_id)

        window_total = sum((entry.total for entry in current.values()), ZERO)

        results = []
        for category_id, entry in current.items():
            previous_entry = previous.get(category_id)
            previous_total: Decimal = previous_entry.total if previous_entry else ZERO
            change = percent_change(entry.total, previous_total)
            category = categories.get(category_id)
            results.append(
                CategoryAnalysis(
                    category_id=category_id,
                    category_name=category.name if category else UNCATEGORIZED_NAME,
                    category_icon=category.icon if category else None,
                    category_color=category.color if category else None,
                    total=entry.total,
                    percentage=share_percentage(entry.total, window_total),
                    transaction_count=entry.count,
                    trend=classify_trend(change),
                    trend_percentage=abs(change),
                )
            )

        results.sort(key=lambda row: row.total, reverse=True)
        logger.debug(
            "category trends computed",
            owner_id=owner_id,
            start=window.start.isoformat(),
            end=window.end.isoformat(),
            previous_start=previous_window.start.isoformat(),
            previous_end=previous_window.end.isoformat(),
            categories=len(results),
        )
        return results
