"""Financial position report command."""

import json
from datetime import date

import click
from shopledger.cli.client_resolution import resolve_client_or_exit
from shopledger.cli.date_filters import (
    period_flags_from,
    period_options,
    resolve_cli_date_range,
)
from shopledger.cli.error_handling import handle_domain_error
from shopledger.domain.entities import FinancialReport
from shopledger.domain.report import ReportService

LABEL_WIDTH = 40
AMOUNT_WIDTH = 16


def _line(label: str, amount: float, currency: str = "", indent: int = 0) -> str:
    amount_str = f"{currency} {amount:,.2f}".strip()
    width = LABEL_WIDTH - indent
    return f"{' ' * indent}{label:<{width}} {amount_str:>{AMOUNT_WIDTH}}"


def _heading(title: str) -> str:
    return f"\n{title}\n" + "-" * (LABEL_WIDTH + AMOUNT_WIDTH + 1)


def render_report(report: FinancialReport, client_name: str, currency: str) -> list[str]:
    """Render a report as text lines."""
    lines = [
        "=" * (LABEL_WIDTH + AMOUNT_WIDTH + 1),
        f"Financial Position: {client_name}",
        f"Period: {report.selected_date_label}",
        f"Status: {report.status.status_text} - {report.status.status_sub}",
        f"Transactions: {report.transaction_count}",
        "=" * (LABEL_WIDTH + AMOUNT_WIDTH + 1),
    ]

    revenue = report.revenue
    lines.append(_heading("Revenue"))
    lines.append(_line("Gross sales", revenue.total_gross_sales, currency))
    lines.append(_line("Cash sales", revenue.cash_sales, indent=4))
    lines.append(_line("Bank sales", revenue.bank_sales, indent=4))
    lines.append(_line("Credit sales (pending)", revenue.credit_sales, indent=4))
    lines.append(_line("Credit recovered", revenue.credit_recovery_total, currency))
    lines.append(_line("Cash", revenue.credit_recovery_cash, indent=4))
    lines.append(_line("Bank", revenue.credit_recovery_bank, indent=4))
    lines.append(_line("Other income", revenue.total_income, currency))
    lines.append(_line("Revenue generated", revenue.total_revenue_generated, currency))

    lines.append(_heading("Expenses"))
    for item in report.expenses.items:
        lines.append(_line(item.key, item.amount, indent=4))
    lines.append(_line("Total expenses incurred", report.expenses.total_expense_incurred, currency))

    liabilities = report.liabilities
    lines.append(_heading("Supplier liabilities"))
    for row in liabilities.items:
        lines.append(
            f"    {row.key:<{LABEL_WIDTH - 4}} created {row.created:,.2f} | "
            f"paid {row.paid:,.2f} | balance {row.balance:,.2f}"
        )
    # A new-liability figure only reads correctly for a single day
    if report.is_single_day:
        lines.append(_line("New liabilities", liabilities.total_new_liability, currency))
    lines.append(_line("Paid to suppliers", liabilities.total_supplier_paid, currency))
    lines.append(_line("Net payable", liabilities.payable_net, currency))

    liquidity = report.liquidity
    lines.append(_heading("Liquidity"))
    lines.append(_line("Cash in", liquidity.cash_in, indent=4))
    lines.append(_line("Cash out", liquidity.cash_out, indent=4))
    lines.append(_line("Bank in", liquidity.bank_in, indent=4))
    lines.append(_line("Bank out", liquidity.bank_out, indent=4))
    lines.append(_line("Cash balance", liquidity.total_cash_balance, currency))
    lines.append(_line("Bank balance", liquidity.total_bank_balance, currency))
    lines.append(_line("Receivable", liquidity.total_receivable, currency))
    lines.append(_line("Payable", liquidity.total_payable, currency))
    lines.append(_line("Total liquid funds", liquidity.total_liquid_funds, currency))

    check = report.cash_check
    lines.append(_heading("Cash drawer check"))
    lines.append(_line("Opening cash", check.opening_cash, currency))
    lines.append(_line("Net cash movement", check.net_cash_position, currency))
    lines.append(_line("Expected in drawer", check.expected_drawer, currency))
    lines.append(_line("Counted in drawer", check.actual_count, currency))
    lines.append(_line("Variance", check.variance, currency))

    lines.append(_heading("Notes"))
    if report.notes:
        lines.extend(f"  * {note}" for note in report.notes)
    else:
        lines.append("  No alerts.")
    if report.analyst_notes_text:
        lines.append("")
        lines.append("Analyst notes:")
        lines.extend(f"  {line}" for line in report.analyst_notes_text.splitlines())
    return lines


@click.command("report")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--date", "single_date", help="Single day (YYYY-MM-DD or relative)")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@period_options
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def report(ctx, client: str, single_date, start_date, end_date, as_json: bool, **kwargs):
    """Show the financial position for a day or a date range.

    Defaults to today. With only one of --start-date/--end-date the report
    covers that single day.

    Examples:
        shopledger report --client 1
        shopledger report --client "Corner Store" --date yesterday
        shopledger report --client 1 --this-month --json
    """
    client_obj = resolve_client_or_exit(ctx, client)
    today = date.today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(kwargs),
        single_date=single_date,
        default_range=(today, today),
    )
    start = start or end
    end = end or start

    try:
        outcome = ReportService(ctx.obj["db"]).build_report(client_obj.id, start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if outcome.error:
        click.echo(f"Error: {outcome.error}", err=True)

    if as_json:
        payload = outcome.report.as_dict()
        payload["client"] = {"id": client_obj.id, "name": client_obj.name, "currency": client_obj.currency}
        payload["error"] = outcome.error
        click.echo(json.dumps(payload, indent=2))
        return

    for line in render_report(outcome.report, client_obj.name, client_obj.currency):
        click.echo(line)


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
