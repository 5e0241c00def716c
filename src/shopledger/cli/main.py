"""Main CLI entry point."""

import logging

import click
from shopledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from shopledger.cli.commands import (
    client,
    party,
    add,
    transaction,
    session,
    report,
    party_report,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SHOPLEDGER_DB_PATH environment variable)",
    envvar="SHOPLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="SHOPLEDGER_LOG_LEVEL",
    help="Logging verbosity (stderr)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Shopledger - Daily bookkeeping for retail shops.

    Record sales, purchases, payments and receipts per shop, keep daily
    opening balances and drawer counts, and produce financial position
    reports.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
party.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
session.register_commands(cli)
report.register_commands(cli)
party_report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
