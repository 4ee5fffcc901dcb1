"""Dashboard command."""

import click

from ledgerlens.cli.formatting import echo_header, echo_row, echo_rule, format_amount
from ledgerlens.domain.analytics import AnalyticsService, DEFAULT_RECENT_LIMIT
from ledgerlens.domain.entities import TimeFilter, TransactionKind
from ledgerlens.utils.date_parser import get_date_range

FILTER_LABELS = {
    TimeFilter.DAY: "Today",
    TimeFilter.WEEK: "This week",
    TimeFilter.MONTH: "This month",
    TimeFilter.YEAR: "This year",
}


@click.command("dashboard")
@click.option(
    "--filter",
    "time_filter",
    type=click.Choice([f.value for f in TimeFilter], case_sensitive=False),
    default=TimeFilter.MONTH.value,
    show_default=True,
    help="Period to summarize",
)
@click.option(
    "--recent",
    type=click.IntRange(min=1),
    default=DEFAULT_RECENT_LIMIT,
    show_default=True,
    help="Number of recent transactions to list",
)
@click.pass_context
def dashboard(ctx, time_filter: str, recent: int):
    """Show totals, expense breakdown and recent transactions."""
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    clock = ctx.obj["clock"]
    service = AnalyticsService(db, clock=clock)

    selected = TimeFilter.parse(time_filter)
    window = get_date_range(selected, clock())
    summary = service.get_dashboard_summary(owner_id, selected)
    breakdown = service.get_category_breakdown(owner_id, selected)
    recent_transactions = service.get_recent_transactions(owner_id, limit=recent)

    echo_header(
        f"Dashboard - {FILTER_LABELS[selected]} "
        f"({window.start.isoformat()} to {window.end.isoformat()})"
    )
    echo_row("Income", format_amount(summary.total_income))
    echo_row("Expense", format_amount(summary.total_expense))
    echo_rule()
    echo_row("Balance", format_amount(summary.total_balance))

    echo_header("Expenses by Category")
    if not breakdown:
        click.echo("No expenses in this period.")
    for row in breakdown:
        icon = f"{row.category_icon} " if row.category_icon else ""
        label = f"{icon}{row.category_name} ({row.count})"
        echo_row(label, f"{format_amount(row.total)} {row.percentage:5.1f}%")

    echo_header("Recent Transactions")
    if not recent_transactions:
        click.echo("No transactions found.")
    for txn in recent_transactions:
        sign = "+" if txn.kind is TransactionKind.INCOME else "-"
        label = f"{txn.date.isoformat()}  {txn.name} [{txn.category_name}]"
        echo_row(label, f"{sign}{format_amount(txn.amount)}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
