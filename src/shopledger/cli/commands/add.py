"""Add transaction command."""

import click
from shopledger.cli.client_resolution import resolve_client_or_exit
from shopledger.cli.error_handling import handle_domain_error
from shopledger.domain.entities import PAYMENT_MODES, TRANSACTION_TYPES
from shopledger.domain.transaction import DEFAULT_VAT_PERCENT, TransactionService
from shopledger.utils.amount_parser import parse_amount
from shopledger.utils.date_parser import parse_date


@click.command("add")
@click.option("--client", required=True, help="Client name or ID")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--type",
    "txn_type",
    required=True,
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    help="Transaction type",
)
@click.option(
    "--mode",
    required=True,
    type=click.Choice(PAYMENT_MODES, case_sensitive=False),
    help="Payment mode",
)
@click.option("--amount", required=True, help="Amount before tax (e.g., 100 or 1,250.500)")
@click.option(
    "--vat",
    default=str(DEFAULT_VAT_PERCENT),
    show_default=True,
    help="VAT percent",
)
@click.option("--category", help="Category label (e.g., 'Rent', 'Utilities')")
@click.option("--party", help="Party name or ID (required for Sales, Purchase, Receipt, Payment)")
@click.option("--description", help="Transaction description")
@click.pass_context
def add_transaction(
    ctx,
    client: str,
    date: str,
    txn_type: str,
    mode: str,
    amount: str,
    vat: str,
    category: str | None,
    party: str | None,
    description: str | None,
):
    """Record a transaction.

    Tax and total are computed from the amount and VAT percent. Cash and
    bank records move money immediately; credit records create a receivable
    or payable.

    Examples:
        shopledger add --client 1 --date today --type Sales --mode Cash --amount 100 --party "Walk-in"
        shopledger add --client 1 --date 2024-01-15 --type Expense --mode Bank --amount 250 --category Rent --vat 0
    """
    client_obj = resolve_client_or_exit(ctx, client)
    service = TransactionService(ctx.obj["db"])

    # Parse date
    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    # Parse amounts
    try:
        base_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    try:
        vat_percent = parse_amount(vat)
    except ValueError as e:
        click.echo(f"Error: Invalid VAT percent: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            client_id=client_obj.id,
            date=txn_date,
            txn_type=txn_type,
            mode=mode,
            amount_before_tax=base_amount,
            vat_percent=vat_percent,
            category=category,
            party=party,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    txn = service.get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Client: {client_obj.name}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.type} ({txn.mode})")
    click.echo(
        f"  Amount: {txn.amount_before_tax:,.2f} + VAT {txn.tax_amount:,.2f} "
        f"= {client_obj.currency} {txn.total_amount:,.2f}"
    )
    if txn.party_name:
        click.echo(f"  Party: {txn.party_name} ({txn.party_type})")
    if txn.category:
        click.echo(f"  Category: {txn.category}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
