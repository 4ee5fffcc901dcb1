"""Tests for date parsing and window resolution."""

import pytest
from datetime import date, timedelta
from ledgerlens.domain.entities import DateWindow, TimeFilter
from ledgerlens.domain.errors import ValidationError
from ledgerlens.utils.date_parser import (
    parse_date,
    get_date_range,
    days_in_month,
    iter_months,
    month_to_date,
)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_relative_dates():
    """Test relative forms resolve against the reference date."""
    today = date(2024, 3, 15)
    assert parse_date("today", today=today) == today
    assert parse_date("Yesterday", today=today) == date(2024, 3, 14)
    assert parse_date("start of month", today=today) == date(2024, 3, 1)
    assert parse_date("start of year", today=today) == date(2024, 1, 1)
    assert parse_date("this week", today=today) == date(2024, 3, 11)
    assert parse_date("last month", today=today) == date(2024, 2, 1)


def test_parse_last_month_in_january():
    """Test 'last month' crosses the year boundary."""
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


def test_parse_today_defaults_to_system_date():
    assert parse_date("today") == date.today()


def test_parse_invalid_date():
    """Test parsing garbage raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date at all")


class TestGetDateRange:
    """Tests for time filter resolution."""

    def test_day(self):
        window = get_date_range(TimeFilter.DAY, date(2024, 3, 15))
        assert window == DateWindow(date(2024, 3, 15), date(2024, 3, 15))

    def test_week_midweek(self):
        window = get_date_range(TimeFilter.WEEK, date(2024, 3, 15))
        assert window.start == date(2024, 3, 11)
        assert window.start.weekday() == 0
        assert window.end == date(2024, 3, 15)

    def test_week_on_monday_starts_today(self):
        window = get_date_range(TimeFilter.WEEK, date(2024, 3, 11))
        assert window.start == date(2024, 3, 11)

    def test_week_on_sunday_reaches_back_six_days(self):
        sunday = date(2024, 3, 17)
        assert sunday.weekday() == 6

        window = get_date_range(TimeFilter.WEEK, sunday)

        assert window.start == date(2024, 3, 11)
        assert window.start == sunday - timedelta(days=6)
        assert window.start != sunday

    def test_month(self):
        window = get_date_range(TimeFilter.MONTH, date(2024, 3, 15))
        assert window == DateWindow(date(2024, 3, 1), date(2024, 3, 15))

    def test_year(self):
        window = get_date_range(TimeFilter.YEAR, date(2024, 3, 15))
        assert window == DateWindow(date(2024, 1, 1), date(2024, 3, 15))

    @pytest.mark.parametrize("time_filter", list(TimeFilter))
    def test_end_is_always_today(self, time_filter):
        today = date(2024, 12, 31)
        assert get_date_range(time_filter, today).end == today

    def test_accepts_string_filter(self):
        window = get_date_range("Month", date(2024, 3, 15))
        assert window.start == date(2024, 3, 1)

    def test_rejects_unknown_filter(self):
        with pytest.raises(ValidationError, match="Unknown time filter"):
            get_date_range("quarter", date(2024, 3, 15))


def test_month_to_date():
    window = month_to_date(date(2024, 2, 29))
    assert window == DateWindow(date(2024, 2, 1), date(2024, 2, 29))


def test_days_in_month_handles_leap_years():
    assert days_in_month(date(2024, 2, 10)) == 29
    assert days_in_month(date(2023, 2, 10)) == 28
    assert days_in_month(date(2024, 4, 30)) == 30
    assert days_in_month(date(2024, 12, 1)) == 31


def test_iter_months_spans_year_boundary():
    assert iter_months(date(2023, 11, 15), date(2024, 2, 3)) == [
        (2023, 11),
        (2023, 12),
        (2024, 1),
        (2024, 2),
    ]


def test_iter_months_single_month():
    assert iter_months(date(2024, 3, 1), date(2024, 3, 31)) == [(2024, 3)]
