"""Month-end spending forecast domain service."""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.aggregation import AggregationService
from ledgerlens.domain.entities import ForecastConfidence, SpendingForecast
from ledgerlens.log import get_logger
from ledgerlens.utils.date_parser import days_in_month, month_to_date

logger = get_logger(__name__)

MIN_DAYS_FOR_FORECAST = 3
MEDIUM_CONFIDENCE_DAYS = 10
HIGH_CONFIDENCE_DAYS = 20


def forecast_confidence(days_passed: int) -> ForecastConfidence:
    """Confidence tier from the number of elapsed days in the month."""
    if days_passed >= HIGH_CONFIDENCE_DAYS:
        return ForecastConfidence.HIGH
    if days_passed >= MEDIUM_CONFIDENCE_DAYS:
        return ForecastConfidence.MEDIUM
    return ForecastConfidence.LOW


def project_spending(
    month_income: Decimal,
    month_expense: Decimal,
    days_passed: int,
    days_in_month: int,
) -> Optional[SpendingForecast]:
    """Linearly extrapolate month-to-date spending to the end of the month.

    Returns None while fewer than three days of the month have passed.
    """
    if days_passed < MIN_DAYS_FOR_FORECAST:
        return None

    daily_average = month_expense / days_passed
    projected_end_of_month = daily_average * days_in_month
    projected_balance = month_income - projected_end_of_month

    return SpendingForecast(
        current_month_spent=month_expense,
        days_in_month=days_in_month,
        days_passed=days_passed,
        daily_average=daily_average,
        projected_end_of_month=projected_end_of_month,
        projected_balance=projected_balance,
        confidence=forecast_confidence(days_passed),
        warning=projected_balance < 0,
    )


class ForecastService:
    """Service for projecting the current month's spending."""

    def __init__(self, db: Database, clock: Callable[[], date] = date.today):
        """Initialize forecast service.

        Args:
            db: Database instance
            clock: Callable returning the current date
        """
        self.db = db
        self.clock = clock
        self.aggregation = AggregationService(db, clock=clock)

    def get_spending_forecast(self, owner_id: int) -> Optional[SpendingForecast]:
        """Forecast month-end spending from the month to date.

        Args:
            owner_id: Owner whose ledger is read

        Returns:
            SpendingForecast, or None when the month is less than three days old
        """
        today = self.clock()
        if today.day < MIN_DAYS_FOR_FORECAST:
            logger.debug("forecast skipped", owner_id=owner_id, days_passed=today.day)
            return None

        summary = self.aggregation.summarize(owner_id, month_to_date(today))
        forecast = project_spending(
            month_income=summary.total_income,
            month_expense=summary.total_expense,
            days_passed=today.day,
            days_in_month=days_in_month(today),
        )
        logger.debug(
            "forecast computed",
            owner_id=owner_id,
            days_passed=today.day,
            confidence=forecast.confidence.value,
            warning=forecast.warning,
        )
        return forecast
