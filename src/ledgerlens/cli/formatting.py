"""Plain-text rendering helpers shared by CLI commands."""

from decimal import Decimal

import click

LINE_WIDTH = 80
LABEL_WIDTH = 50
VALUE_WIDTH = 29


def format_amount(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def format_change(change: float, favourable_when_down: bool = False) -> str:
    """Render a signed percent change with an arrow and a verdict.

    Expense changes are rendered with ``favourable_when_down`` so that a
    decrease reads as an improvement.
    """
    if change > 0:
        arrow = "↑"
    elif change < 0:
        arrow = "↓"
    else:
        return "→ 0.0%"

    improved = change < 0 if favourable_when_down else change > 0
    verdict = "better" if improved else "worse"
    return f"{arrow} {abs(change):.1f}% ({verdict})"


def echo_header(title: str) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * LINE_WIDTH)


def echo_row(label: str, value: str) -> None:
    click.echo(f"{label:<{LABEL_WIDTH}} {value:>{VALUE_WIDTH}}")


def echo_rule(char: str = "-") -> None:
    click.echo(char * LINE_WIDTH)
