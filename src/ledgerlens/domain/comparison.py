"""Period-over-period comparison domain service."""

from datetime import date
from typing import Callable

from ledgerlens.database.base import Database
from ledgerlens.domain.aggregation import AggregationService, percent_change
from ledgerlens.domain.entities import DateWindow, PeriodComparison
from ledgerlens.log import get_logger

logger = get_logger(__name__)


class ComparisonService:
    """Service for comparing a window with its comparable previous window."""

    def __init__(self, db: Database, clock: Callable[[], date] = date.today):
        """Initialize comparison service.

        Args:
            db: Database instance
            clock: Callable returning the current date
        """
        self.db = db
        self.aggregation = AggregationService(db, clock=clock)

    def compare(self, owner_id: int, start: date, end: date) -> PeriodComparison:
        """Compare ledger totals of ``[start, end]`` with the previous window.

        Changes are signed percentages; a change against a previous value that
        is zero or negative is reported as 0.

        Raises:
            ValidationError: If end is before start
        """
        current_window = DateWindow(start=start, end=end)
        previous_window = current_window.previous()

        current = self.aggregation.summarize(owner_id, current_window)
        previous = self.aggregation.summarize(owner_id, previous_window)

        comparison = PeriodComparison(
            current_window=current_window,
            previous_window=previous_window,
            current_income=current.total_income,
            current_expense=current.total_expense,
            previous_income=previous.total_income,
            previous_expense=previous.total_expense,
            income_change=percent_change(current.total_income, previous.total_income),
            expense_change=percent_change(current.total_expense, previous.total_expense),
            balance_change=percent_change(current.total_balance, previous.total_balance),
        )
        logger.debug(
            "period comparison computed",
            owner_id=owner_id,
            start=current_window.start.isoformat(),
            end=current_window.end.isoformat(),
            previous_start=previous_window.start.isoformat(),
            previous_end=previous_window.end.isoformat(),
        )
        return comparison
