"""Party statement command."""

from datetime import date

import click
from shopledger.cli.client_resolution import resolve_client_or_exit
from shopledger.cli.date_filters import (
    period_flags_from,
    period_options,
    resolve_cli_date_range,
)
from shopledger.cli.error_handling import handle_domain_error
from shopledger.domain.party_ledger import PartyLedgerService
from shopledger.utils.amount_parser import to_number


@click.command("party-report")
@click.argument("party", metavar="PARTY")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@period_options
@click.option(
    "--side",
    type=click.Choice(["customer", "supplier"], case_sensitive=False),
    help="Read the statement as a customer or supplier account (default: party type)",
)
@click.pass_context
def party_report(ctx, party: str, client: str, start_date, end_date, side, **kwargs):
    """Show a party's transactions and outstanding credit.

    PARTY can be a party name or ID. Defaults to the current month.

    Examples:
        shopledger party-report "Acme Trading" --client 1
        shopledger party-report 4 --client 1 --start-date 2024-01-01 --end-date 2024-03-31
    """
    client_obj = resolve_client_or_exit(ctx, client)
    today = date.today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(kwargs),
        default_range=(today.replace(day=1), today),
    )
    start = start or date.min
    end = end or today

    try:
        ledger = PartyLedgerService(ctx.obj["db"]).build_ledger(
            client_obj.id, party, start, end, side=side.capitalize() if side else None
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    currency = client_obj.currency
    given_label, settled_label = (
        ("Credit purchases", "Paid") if ledger.side == "Supplier" else ("Credit sales", "Received")
    )
    start_label = "beginning" if ledger.start_date == date.min else str(ledger.start_date)

    click.echo(f"\n{ledger.party.name} ({ledger.side} account) - {start_label} to {ledger.end_date}")
    click.echo("-" * 90)
    if not ledger.transactions:
        click.echo("No transactions found.")
    else:
        click.echo(
            f"{'ID':<6} {'Date':<12} {'Type':<9} {'Mode':<7} {'Total':>12}  {'Description':<30}"
        )
        for txn in ledger.transactions:
            click.echo(
                f"{txn.id:<6} {str(txn.date):<12} {txn.type:<9} {txn.mode:<7} "
                f"{to_number(txn.total_amount):>12,.2f}  {(txn.description or '')[:30]:<30}"
            )
    click.echo("-" * 90)
    summary = ledger.summary
    click.echo(f"{given_label + ':':<20} {currency} {summary.credit_given:,.2f}")
    click.echo(f"{settled_label + ':':<20} {currency} {summary.settled:,.2f}")
    click.echo(f"{'Pending:':<20} {currency} {summary.pending:,.2f}")
    click.echo(f"{'Transactions:':<20} {summary.count}")


def register_commands(cli):
    """Register party-report command with main CLI."""
    cli.add_command(party_report)
