"""CLI helpers for date range resolution."""

from datetime import date

import click

from shopledger.utils.date_parser import get_date_range, parse_date


def period_options(func):
    """Attach the shared period flags to a command."""
    for flag, help_text in reversed(
        [
            ("--yesterday", "Only yesterday"),
            ("--this-week", "Current week up to today"),
            ("--this-month", "Current month up to today"),
            ("--last-week", "Previous week"),
            ("--last-month", "Previous month"),
        ]
    ):
        func = click.option(flag, is_flag=True, help=help_text)(func)
    return func


def period_flags_from(kwargs: dict) -> dict[str, bool]:
    """Collect period flags from click keyword arguments."""
    return {
        "yesterday": kwargs.get("yesterday", False),
        "this-week": kwargs.get("this_week", False),
        "this-month": kwargs.get("this_month", False),
        "last-week": kwargs.get("last_week", False),
        "last-month": kwargs.get("last_month", False),
    }


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    single_date: str | None = None,
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from a single date, period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)
    explicit = bool(start_date or end_date)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--yesterday, --this-week, --this-month, --last-week, --last-month) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if sum((period_count > 0, explicit, bool(single_date))) > 1:
        click.echo(
            "Error: --date, period options and --start-date/--end-date cannot be combined.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period)
                break
    elif single_date:
        try:
            start = end = parse_date(single_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)
    else:
        if start_date:
            try:
                start = parse_date(start_date)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

        if start is None and end is None and default_range is not None:
            start, end = default_range

    if start is not None and end is not None and start > end:
        click.echo(f"Error: Start date {start} is after end date {end}.", err=True)
        ctx.exit(1)

    return start, end
