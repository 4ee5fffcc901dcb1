"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerlens.domain.entities import DateWindow
from ledgerlens.domain.errors import DomainError
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.utils.date_parser import month_to_date, parse_date


def _parse_or_exit(ctx, value: str, label: str, today: date) -> date:
    try:
        return parse_date(value, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_window(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    today: date,
) -> DateWindow:
    """Resolve a report window from --start/--end options.

    Missing bounds default to the month to date: the first of today's month
    through today.
    """
    default = month_to_date(today)
    start = _parse_or_exit(ctx, start_date, "start", today) if start_date else default.start
    end = _parse_or_exit(ctx, end_date, "end", today) if end_date else default.end

    try:
        return DateWindow(start=start, end=end)
    except DomainError as e:
        handle_domain_error(ctx, e)
