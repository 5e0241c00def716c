"""Client management commands."""

import click
from shopledger.cli.client_resolution import resolve_client_or_exit
from shopledger.cli.error_handling import handle_domain_error
from shopledger.domain.client import DEFAULT_CURRENCY, ClientService


@click.group("client")
def client_group():
    """Manage clients (shops)."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option(
    "--currency",
    default=DEFAULT_CURRENCY,
    show_default=True,
    help="Currency label printed on reports",
)
@click.pass_context
def create_client(ctx, name: str, currency: str):
    """Create a new client.

    Examples:
        shopledger client create "Corner Store"
        shopledger client create "Main Branch" --currency USD
    """
    service = ClientService(ctx.obj["db"])
    try:
        client_id = service.create_client(name=name, currency=currency)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created client '{name.strip()}' (ID: {client_id})")


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    service = ClientService(ctx.obj["db"])

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 60)
    for c in clients:
        click.echo(f"ID: {c.id:3d} | {c.name:30s} | Currency: {c.currency}")


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def delete_client(ctx, client: str) -> None:
    """Delete a client.

    CLIENT can be a client name or ID. The client can only be deleted once
    it has no parties or transactions.
    """
    client_obj = resolve_client_or_exit(ctx, client)
    service = ClientService(ctx.obj["db"])
    try:
        service.delete_client(client_obj.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted client '{client_obj.name}'")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group)
