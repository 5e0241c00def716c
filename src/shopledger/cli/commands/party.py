"""Party (customer/supplier) management commands."""

import click
from shopledger.cli.client_resolution import resolve_client_or_exit
from shopledger.cli.error_handling import handle_domain_error
from shopledger.domain.entities import PARTY_TYPES
from shopledger.domain.party import PartyService

PARTY_TYPE_CHOICE = click.Choice(PARTY_TYPES, case_sensitive=False)


@click.group("party")
def party_group():
    """Manage customers and suppliers."""
    pass


@party_group.command("create")
@click.argument("name", metavar="PARTY_NAME")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--type", "party_type", required=True, type=PARTY_TYPE_CHOICE, help="Party type")
@click.option("--contact", help="Phone or e-mail")
@click.option("--tax-number", help="Tax registration number")
@click.pass_context
def create_party(ctx, name: str, client: str, party_type: str, contact, tax_number):
    """Create a customer or supplier.

    Examples:
        shopledger party create "Acme Trading" --client 1 --type Supplier
        shopledger party create "Walk-in" --client "Corner Store" --type Customer
    """
    client_obj = resolve_client_or_exit(ctx, client)
    service = PartyService(ctx.obj["db"])
    try:
        party_id = service.create_party(
            client_id=client_obj.id,
            name=name,
            party_type=party_type,
            contact=contact,
            tax_number=tax_number,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created party '{name.strip()}' (ID: {party_id})")


@party_group.command("list")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--search", help="Filter by name, type, contact or tax number")
@click.pass_context
def list_parties(ctx, client: str, search: str | None):
    """List a client's parties."""
    client_obj = resolve_client_or_exit(ctx, client)
    parties = PartyService(ctx.obj["db"]).list_parties(client_obj.id, search=search)
    if not parties:
        click.echo("No parties found.")
        return

    click.echo(f"\nParties for {client_obj.name}:")
    click.echo("-" * 80)
    for p in parties:
        click.echo(
            f"ID: {p.id:3d} | {p.name:25s} | {p.type:8s} | "
            f"{p.contact or '-':15s} | Tax: {p.tax_number or '-'}"
        )


@party_group.command("update")
@click.argument("party_id", type=int)
@click.option("--name", help="New name")
@click.option("--type", "party_type", type=PARTY_TYPE_CHOICE, help="New party type")
@click.option("--contact", help="New contact (empty string to clear)")
@click.option("--tax-number", help="New tax number (empty string to clear)")
@click.pass_context
def update_party(ctx, party_id: int, name, party_type, contact, tax_number):
    """Update a party.

    Existing transactions keep the name and type recorded when they were
    entered.
    """
    try:
        PartyService(ctx.obj["db"]).update_party(
            party_id,
            name=name,
            party_type=party_type,
            contact=contact,
            tax_number=tax_number,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated party {party_id}")


@party_group.command("delete")
@click.argument("party_id", type=int)
@click.pass_context
def delete_party(ctx, party_id: int):
    """Delete a party. Its past transactions are kept."""
    try:
        PartyService(ctx.obj["db"]).delete_party(party_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted party {party_id}")


def register_commands(cli):
    """Register party commands with main CLI."""
    cli.add_command(party_group)
