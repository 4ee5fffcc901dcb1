"""Main CLI entry point."""

from datetime import date

import click

from ledgerlens.database.factories import create_sqlite_database
from ledgerlens.log import configure_logging
from ledgerlens.utils.date_parser import parse_date

# Import and register all commands at module level
from ledgerlens.cli.commands import add, category, dashboard, report, transaction


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERLENS_DB_PATH environment variable)",
    envvar="LEDGERLENS_DB_PATH",
)
@click.option(
    "--owner",
    "owner_id",
    type=int,
    default=1,
    show_default=True,
    envvar="LEDGERLENS_OWNER_ID",
    help="Owner (user) ID whose ledger is read and written",
)
@click.option("--as-of", help="Reference date for windows and forecasts (default: today)")
@click.option("--verbose", "-v", is_flag=True, help="Log computations to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, owner_id: int, as_of: str | None, verbose: bool):
    """Ledgerlens - Personal finance ledger analytics.

    Record income and expense transactions, then inspect dashboard
    summaries, monthly trends, category trends, a month-end spending
    forecast and period-over-period comparisons.
    """
    ctx.ensure_object(dict)
    configure_logging("DEBUG" if verbose else None)

    today = date.today()
    if as_of:
        try:
            today = parse_date(as_of)
        except ValueError as e:
            click.echo(f"Error: Invalid --as-of date: {e}", err=True)
            ctx.exit(1)

    ctx.obj["owner_id"] = owner_id
    ctx.obj["clock"] = lambda: today

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
dashboard.register_commands(cli)
report.register_commands(cli)
add.register_commands(cli)
category.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
