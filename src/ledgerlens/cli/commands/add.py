"""Add transaction command."""

import click

from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.entities import TransactionKind
from ledgerlens.domain.errors import DomainError
from ledgerlens.domain.transaction import TransactionService
from ledgerlens.utils.amount_parser import parse_amount
from ledgerlens.utils.date_parser import parse_date


@click.command("add")
@click.option(
    "--kind",
    required=True,
    type=click.Choice([k.value for k in TransactionKind], case_sensitive=False),
    help="Transaction kind",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option("--category", required=True, help="Category name (e.g., 'Food & Dining')")
@click.option("--name", required=True, help="Short description")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--note", help="Optional note")
@click.pass_context
def add_transaction(
    ctx,
    kind: str,
    amount: str,
    category: str,
    name: str,
    date: str,
    note: str | None,
):
    """Record an income or expense transaction.

    Examples:
        ledgerlens add --kind expense --amount 50000 --category "Food & Dining" --name "Lunch"
        ledgerlens add --kind income --amount 20000000 --category Salary --name "March salary"
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    transaction_service = TransactionService(db)
    category_service = CategoryService(db)

    try:
        txn_date = parse_date(date, today=ctx.obj["clock"]())
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    txn_kind = TransactionKind.parse(kind)
    try:
        category_obj = category_service.find_category_by_name(owner_id, category, txn_kind)
        transaction_id = transaction_service.create_transaction(
            owner_id=owner_id,
            category_id=category_obj.id,
            amount=txn_amount,
            kind=txn_kind,
            date=txn_date,
            name=name,
            note=note,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Kind: {txn_kind.value}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {format_amount(txn_amount)}")
    click.echo(f"  Category: {category_obj.name}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
