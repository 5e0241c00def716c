"""CLI helpers for client resolution and error handling."""

from __future__ import annotations

import click
from shopledger.cli.error_handling import handle_domain_error
from shopledger.domain.client import ClientService
from shopledger.domain.entities import Client


def resolve_client_or_exit(ctx: click.Context, client: str | int) -> Client:
    """Resolve client name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return ClientService(ctx.obj["db"]).resolve_client(client)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
