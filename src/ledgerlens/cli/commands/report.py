"""Report commands: trends, category analysis, forecast and comparison."""

import click

from ledgerlens.cli.date_filters import resolve_cli_window
from ledgerlens.cli.formatting import (
    echo_header,
    echo_row,
    echo_rule,
    format_amount,
    format_change,
)
from ledgerlens.domain.analytics import AnalyticsService, DEFAULT_MONTHS_BACK
from ledgerlens.domain.entities import DateWindow, TrendDirection

TREND_ARROWS = {
    TrendDirection.UP: "↑",
    TrendDirection.DOWN: "↓",
    TrendDirection.STABLE: "→",
}

window_options = [
    click.option("--start-date", help="Window start (YYYY-MM-DD or 'start of month'); default: first of this month"),
    click.option("--end-date", help="Window end (YYYY-MM-DD or 'today'); default: today"),
]


def with_window_options(func):
    for option in reversed(window_options):
        func = option(func)
    return func


def _service(ctx) -> AnalyticsService:
    return AnalyticsService(ctx.obj["db"], clock=ctx.obj["clock"])


def _print_trends(service: AnalyticsService, owner_id: int, months: int) -> None:
    trends = service.get_monthly_trends(owner_id, months)

    echo_header(f"Monthly Trends (last {months} months)")
    click.echo(f"{'Month':<14} {'Income':>21} {'Expense':>21} {'Net':>21}")
    echo_rule()
    for trend in trends:
        label = f"{trend.month} {trend.year}"
        click.echo(
            f"{label:<14} {format_amount(trend.total_income):>21} "
            f"{format_amount(trend.total_expense):>21} {format_amount(trend.net_balance):>21}"
        )


def _print_category_analysis(service: AnalyticsService, owner_id: int, window: DateWindow) -> None:
    analysis = service.get_category_analysis(owner_id, window.start, window.end)
    previous = window.previous()

    echo_header(
        f"Category Analysis ({window.start.isoformat()} to {window.end.isoformat()}, "
        f"vs {previous.start.isoformat()} to {previous.end.isoformat()})"
    )
    if not analysis:
        click.echo("No expenses in this period.")
        return

    for row in analysis:
        icon = f"{row.category_icon} " if row.category_icon else ""
        label = f"{icon}{row.category_name} ({row.transaction_count})"
        arrow = TREND_ARROWS[row.trend]
        echo_row(
            label,
            f"{format_amount(row.total)} {row.percentage:5.1f}% {arrow} {row.trend_percentage:.1f}%",
        )


def _print_forecast(service: AnalyticsService, owner_id: int) -> None:
    forecast = service.get_spending_forecast(owner_id)

    echo_header("Spending Forecast")
    if forecast is None:
        click.echo("Not enough data yet: a forecast needs at least 3 days of the month.")
        return

    echo_row("Spent this month", format_amount(forecast.current_month_spent))
    echo_row("Days passed", f"{forecast.days_passed} / {forecast.days_in_month}")
    echo_row("Daily average", format_amount(forecast.daily_average))
    echo_row("Projected end of month", format_amount(forecast.projected_end_of_month))
    echo_row("Projected balance", format_amount(forecast.projected_balance))
    echo_row("Confidence", forecast.confidence.value)
    if forecast.warning:
        click.echo("Warning: projected spending exceeds this month's income.")


def _print_comparison(service: AnalyticsService, owner_id: int, window: DateWindow) -> None:
    comparison = service.get_period_comparison(owner_id, window.start, window.end)
    previous = comparison.previous_window

    echo_header(
        f"Period Comparison ({window.start.isoformat()} to {window.end.isoformat()} "
        f"vs {previous.start.isoformat()} to {previous.end.isoformat()})"
    )
    rows = [
        ("Income", comparison.current_income, comparison.previous_income,
         format_change(comparison.income_change)),
        ("Expense", comparison.current_expense, comparison.previous_expense,
         format_change(comparison.expense_change, favourable_when_down=True)),
        ("Balance", comparison.current_balance, comparison.previous_balance,
         format_change(comparison.balance_change)),
    ]
    for label, current, prior, change in rows:
        echo_row(label, format_amount(current))
        echo_row(f"    previous: {format_amount(prior)}", change)


@click.group("report")
def report_group():
    """Analytics reports."""
    pass


@report_group.command("trends")
@click.option(
    "--months",
    type=click.IntRange(min=0),
    default=DEFAULT_MONTHS_BACK,
    show_default=True,
    help="How many months to reach back",
)
@click.pass_context
def trends(ctx, months: int):
    """Show income and expense per calendar month."""
    _print_trends(_service(ctx), ctx.obj["owner_id"], months)


@report_group.command("categories")
@with_window_options
@click.pass_context
def categories(ctx, start_date: str | None, end_date: str | None):
    """Show expense per category with its trend against the previous period."""
    window = resolve_cli_window(
        ctx, start_date=start_date, end_date=end_date, today=ctx.obj["clock"]()
    )
    _print_category_analysis(_service(ctx), ctx.obj["owner_id"], window)


@report_group.command("forecast")
@click.pass_context
def forecast(ctx):
    """Project this month's spending to the end of the month."""
    _print_forecast(_service(ctx), ctx.obj["owner_id"])


@report_group.command("compare")
@with_window_options
@click.pass_context
def compare(ctx, start_date: str | None, end_date: str | None):
    """Compare a period's totals with the period just before it."""
    window = resolve_cli_window(
        ctx, start_date=start_date, end_date=end_date, today=ctx.obj["clock"]()
    )
    _print_comparison(_service(ctx), ctx.obj["owner_id"], window)


@report_group.command("all")
@click.option(
    "--months",
    type=click.IntRange(min=0),
    default=DEFAULT_MONTHS_BACK,
    show_default=True,
    help="How many months of trends to show",
)
@click.pass_context
def all_reports(ctx, months: int):
    """Show every report for the month to date."""
    service = _service(ctx)
    owner_id = ctx.obj["owner_id"]
    window = resolve_cli_window(ctx, start_date=None, end_date=None, today=ctx.obj["clock"]())

    _print_forecast(service, owner_id)
    _print_comparison(service, owner_id, window)
    _print_trends(service, owner_id, months)
    _print_category_analysis(service, owner_id, window)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
