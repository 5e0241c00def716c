"""Transaction listing and deletion commands."""

import click
from shopledger.cli.client_resolution import resolve_client_or_exit
from shopledger.cli.date_filters import (
    period_flags_from,
    period_options,
    resolve_cli_date_range,
)
from shopledger.cli.error_handling import handle_domain_error
from shopledger.domain.entities import TRANSACTION_TYPES
from shopledger.domain.transaction import TransactionService


@click.group("transaction")
def transaction_group():
    """List and delete transactions."""
    pass


@transaction_group.command("list")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@period_options
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    help="Only this transaction type",
)
@click.pass_context
def list_transactions(ctx, client: str, start_date, end_date, txn_type, **kwargs):
    """List a client's transactions, most recent first."""
    client_obj = resolve_client_or_exit(ctx, client)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(kwargs),
    )

    try:
        transactions = TransactionService(ctx.obj["db"]).list_transactions(
            client_obj.id, start_date=start, end_date=end, txn_type=txn_type
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Type':<9} {'Mode':<7} {'Total':>12} "
        f"{'Party':<20} {'Category':<15} {'Description':<25}"
    )
    click.echo("-" * 110)
    for txn in transactions:
        total = f"{txn.total_amount:,.2f}" if txn.total_amount is not None else "-"
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.type:<9} {txn.mode:<7} {total:>12} "
            f"{(txn.party_name or '')[:20]:<20} {(txn.category or '')[:15]:<15} "
            f"{(txn.description or '')[:25]:<25}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction."""
    try:
        TransactionService(ctx.obj["db"]).delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
