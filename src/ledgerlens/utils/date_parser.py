"""Date parsing and window resolution utilities."""

import calendar
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ledgerlens.domain.entities import DateWindow, TimeFilter


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative forms "today", "yesterday", "start of month", "start of year",
    "last month" and "this week".

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms, defaults to date.today()

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "start of month": today.replace(day=1),
        "this month": today.replace(day=1),
        "start of year": today.replace(month=1, day=1),
        "this year": today.replace(month=1, day=1),
        "this week": today - timedelta(days=today.weekday()),
        "last month": (today - relativedelta(months=1)).replace(day=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(time_filter: TimeFilter, today: date) -> DateWindow:
    """Resolve a time filter into a window ending today.

    The window never extends into the future: ``end`` is always ``today``.
    Weeks start on Monday, so on a Sunday the window reaches back six days.

    Args:
        time_filter: Coarse filter (day, week, month, year)
        today: Reference date

    Returns:
        DateWindow from the start of the period through today
    """
    time_filter = TimeFilter.parse(time_filter)

    if time_filter is TimeFilter.DAY:
        start_date = today
    elif time_filter is TimeFilter.WEEK:
        start_date = today - timedelta(days=today.weekday())
    elif time_filter is TimeFilter.MONTH:
        start_date = today.replace(day=1)
    else:
        start_date = today.replace(month=1, day=1)

    return DateWindow(start=start_date, end=today)


def month_to_date(today: date) -> DateWindow:
    """Window from the first day of today's month through today."""
    return DateWindow(start=today.replace(day=1), end=today)


def days_in_month(day: date) -> int:
    """Number of days in the calendar month containing ``day``."""
    return calendar.monthrange(day.year, day.month)[1]


def iter_months(start: date, end: date) -> list[tuple[int, int]]:
    """List (year, month) pairs from start's month through end's month, inclusive."""
    months = []
    current = start.replace(day=1)
    last = end.replace(day=1)
    while current <= last:
        months.append((current.year, current.month))
        current = current + relativedelta(months=1)
    return months
