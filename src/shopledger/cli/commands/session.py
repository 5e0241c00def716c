"""Daily session commands: opening balances, drawer count and notes."""

import click
from shopledger.cli.client_resolution import resolve_client_or_exit
from shopledger.cli.error_handling import handle_domain_error
from shopledger.domain.daily_session import DailySessionService
from shopledger.utils.amount_parser import parse_amount, to_number
from shopledger.utils.date_parser import parse_date, to_date_key


def _parse_optional_amount(ctx, label: str, value: str | None):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _resolve_day(ctx, value: str) -> str:
    try:
        return to_date_key(parse_date(value))
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)


@click.group("session")
def session_group():
    """Manage per-day report inputs."""
    pass


@session_group.command("set")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--date", "day", default="today", show_default=True, help="Day (YYYY-MM-DD or relative)")
@click.option("--opening-cash", help="Cash in the drawer at opening")
@click.option("--opening-bank", help="Bank balance at opening")
@click.option("--actual-cash", help="Cash counted in the drawer at closing")
@click.option("--notes", help="Analyst notes for the day")
@click.option(
    "--expected-version",
    type=int,
    help="Only save if the stored session still has this version",
)
@click.pass_context
def set_session(ctx, client, day, opening_cash, opening_bank, actual_cash, notes, expected_version):
    """Save values for a day; options left out keep their stored value.

    Examples:
        shopledger session set --client 1 --opening-cash 50 --opening-bank 1000
        shopledger session set --client 1 --date yesterday --actual-cash 412.50
    """
    client_obj = resolve_client_or_exit(ctx, client)
    date_key = _resolve_day(ctx, day)

    fields = {
        "opening_cash": _parse_optional_amount(ctx, "opening cash", opening_cash),
        "opening_bank": _parse_optional_amount(ctx, "opening bank", opening_bank),
        "actual_cash_drawer": _parse_optional_amount(ctx, "actual cash", actual_cash),
        "analyst_notes": notes,
    }

    try:
        session = DailySessionService(ctx.obj["db"]).upsert(
            client_obj.id, date_key, expected_version=expected_version, **fields
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Saved session for {client_obj.name} on {date_key} (version {session.version})")


@session_group.command("show")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--date", "day", default="today", show_default=True, help="Day (YYYY-MM-DD or relative)")
@click.pass_context
def show_session(ctx, client, day):
    """Show the stored values for a day."""
    client_obj = resolve_client_or_exit(ctx, client)
    date_key = _resolve_day(ctx, day)

    try:
        session = DailySessionService(ctx.obj["db"]).fetch(client_obj.id, date_key)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if session is None:
        click.echo(f"No session saved for {client_obj.name} on {date_key}.")
        return

    click.echo(f"\nSession for {client_obj.name} on {date_key} (version {session.version}):")
    click.echo("-" * 60)
    click.echo(f"  Opening cash:  {to_number(session.opening_cash):,.2f}")
    click.echo(f"  Opening bank:  {to_number(session.opening_bank):,.2f}")
    click.echo(f"  Actual cash:   {to_number(session.actual_cash_drawer):,.2f}")
    if session.analyst_notes:
        click.echo(f"  Notes: {session.analyst_notes}")


def register_commands(cli):
    """Register session commands with main CLI."""
    cli.add_command(session_group)
