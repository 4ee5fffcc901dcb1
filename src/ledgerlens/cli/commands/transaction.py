"""Transaction management commands."""

import click

from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import echo_header, echo_rule, format_amount
from ledgerlens.domain.aggregation import UNCATEGORIZED_NAME
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.entities import TransactionKind
from ledgerlens.domain.errors import DomainError
from ledgerlens.domain.transaction import DEFAULT_PAGE_SIZE, TransactionService
from ledgerlens.utils.amount_parser import parse_amount
from ledgerlens.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in TransactionKind], case_sensitive=False),
    help="Only income or only expense",
)
@click.option("--category", help="Category name")
@click.option("--search", help="Case-insensitive text to find in name or note")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.option(
    "--per-page", type=click.IntRange(min=1), default=DEFAULT_PAGE_SIZE, show_default=True
)
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    kind: str | None,
    category: str | None,
    search: str | None,
    page: int,
    per_page: int,
):
    """View transactions with optional filters, newest first."""
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    today = ctx.obj["clock"]()
    service = TransactionService(db)
    category_service = CategoryService(db)

    start = None
    if start_date:
        try:
            start = parse_date(start_date, today=today)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date, today=today)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    txn_kind = TransactionKind.parse(kind) if kind else None
    try:
        category_id = None
        if category:
            if txn_kind is not None:
                kinds = [txn_kind]
            else:
                kinds = list(TransactionKind)
            category_id = _resolve_category_id(category_service, owner_id, category, kinds)

        result = service.get_transaction_page(
            owner_id,
            page=page,
            per_page=per_page,
            start_date=start,
            end_date=end,
            kind=txn_kind,
            category_id=category_id,
            search=search,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not result.transactions:
        click.echo("No transactions found.")
        return

    names = {cat.id: cat.name for cat in category_service.list_categories(owner_id)}

    echo_header(f"Found {result.total_count} transaction(s), showing page {result.page}:")
    click.echo(f"{'ID':<5} {'Date':<10} {'Amount':>17} {'Category':<18} {'Name'}")
    echo_rule()
    for txn in result.transactions:
        sign = "+" if txn.kind is TransactionKind.INCOME else "-"
        amount_str = f"{sign}{format_amount(txn.amount)}"
        category_name = names.get(txn.category_id, UNCATEGORIZED_NAME)
        click.echo(
            f"{txn.id:<5} {txn.date.isoformat():<10} {amount_str:>17} "
            f"{category_name[:18]:<18} {txn.name[:25]}"
        )
    if result.has_more:
        click.echo(f"More results: use --page {result.page + 1}")


def _resolve_category_id(category_service, owner_id, name, kinds) -> int:
    """Resolve a category name across the given kinds; first match wins."""
    error = None
    for kind in kinds:
        try:
            return category_service.find_category_by_name(owner_id, name, kind).id
        except DomainError as e:
            error = e
    raise error


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option(
    "--kind",
    type=click.Choice([k.value for k in TransactionKind], case_sensitive=False),
    help="Transaction kind",
)
@click.option("--amount", help="Transaction amount (e.g., 123.45)")
@click.option("--category", help="Category name")
@click.option("--name", help="Short description")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--note", help="Note")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    kind: str | None,
    amount: str | None,
    category: str | None,
    name: str | None,
    date: str | None,
    note: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        ledgerlens transaction update 1 --amount 75000
        ledgerlens transaction update 1 --kind income --category Bonus
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    transaction_service = TransactionService(db)
    category_service = CategoryService(db)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date, today=ctx.obj["clock"]())
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        txn_kind = TransactionKind.parse(kind) if kind else None
        category_id = None
        if category is not None:
            if txn_kind is None:
                txn_kind_for_lookup = transaction_service.get_transaction(
                    owner_id, transaction_id
                ).kind
            else:
                txn_kind_for_lookup = txn_kind
            category_id = category_service.find_category_by_name(
                owner_id, category, txn_kind_for_lookup
            ).id

        transaction_service.update_transaction(
            owner_id,
            transaction_id,
            category_id=category_id,
            amount=txn_amount,
            kind=txn_kind,
            date=txn_date,
            name=name,
            note=note,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int) -> None:
    """Delete a transaction.

    Examples:
        ledgerlens transaction delete 1
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    transaction_service = TransactionService(db)

    try:
        txn = transaction_service.get_transaction(owner_id, transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id} ({txn.name})?"
    ):
        click.echo("Deletion cancelled.")
        return

    transaction_service.delete_transaction(owner_id, transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
