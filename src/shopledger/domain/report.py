"""Financial position report domain service.

``generate_report`` is a pure function: it folds a set of transactions and the
day's session inputs into a ``FinancialReport`` without touching the store.
Every total is computed with ``math.fsum`` so the result does not depend on
the order in which the store returned the records.

``ReportService`` is the caller layer. It validates the request, fetches the
records and session values, and degrades to an empty report when the store
cannot be reached.
"""

import logging
import math
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from shopledger.database.base import Database
from shopledger.domain.classification import (
    CREDIT_RECOVERY,
    EXPENSE_INCURRED,
    INFLOW,
    SUPPLIER_CREDIT_LIABILITY,
    SUPPLIER_PAYMENT,
    cash_flow,
    classify,
    expense_key,
    incoming_value,
    normalize_mode,
    normalize_type,
    outgoing_value,
    supplier_key,
)
from shopledger.domain.daily_session import DailySessionService
from shopledger.domain.entities import (
    CashCheck,
    ExpenseBlock,
    ExpenseLine,
    FinancialReport,
    LiabilityBlock,
    LiquidityBlock,
    ReportOutcome,
    ReportStatus,
    RevenueBlock,
    SessionInputs,
    SupplierLiability,
    Transaction,
)
from shopledger.domain.errors import (
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
    client_not_found,
    invalid_date_range,
)
from shopledger.utils.amount_parser import to_number
from shopledger.utils.date_parser import format_range_label

logger = logging.getLogger(__name__)

VARIANCE_TOLERANCE = 0.01
LIABILITY_EPSILON = 0.0001


def _sum_by_mode(rows: list[tuple[str, float]], mode: str) -> float:
    return math.fsum(value for row_mode, value in rows if row_mode == mode)


def build_revenue(transactions: Iterable[Transaction]) -> RevenueBlock:
    """Split sales by mode and add realized collections.

    Credit sales count towards gross sales but never towards revenue
    generated; they are still owed.
    """
    sales: list[tuple[str, float]] = []
    recoveries: list[tuple[str, float]] = []
    income: list[float] = []

    for txn in transactions:
        txn_type = normalize_type(txn.type)
        mode = normalize_mode(txn.mode)
        if txn_type == "sales":
            sales.append((mode, incoming_value(txn)))
        buckets = classify(txn)
        if CREDIT_RECOVERY in buckets:
            recoveries.append((mode, incoming_value(txn)))
        if txn_type == "income" and INFLOW in buckets:
            income.append(incoming_value(txn))

    cash_sales = _sum_by_mode(sales, "cash")
    bank_sales = _sum_by_mode(sales, "bank")
    credit_recovery_total = math.fsum(value for _, value in recoveries)
    total_income = math.fsum(income)

    return RevenueBlock(
        total_gross_sales=math.fsum(value for _, value in sales),
        cash_sales=cash_sales,
        bank_sales=bank_sales,
        credit_sales=_sum_by_mode(sales, "credit"),
        credit_recovery_total=credit_recovery_total,
        credit_recovery_cash=_sum_by_mode(recoveries, "cash"),
        credit_recovery_bank=_sum_by_mode(recoveries, "bank"),
        total_income=total_income,
        total_revenue_generated=math.fsum(
            (cash_sales, bank_sales, credit_recovery_total, total_income)
        ),
    )


def build_expenses(transactions: Iterable[Transaction]) -> ExpenseBlock:
    """Group incurred expenses by category, regardless of payment mode."""
    groups: dict[str, list[float]] = defaultdict(list)
    for txn in transactions:
        if EXPENSE_INCURRED in classify(txn):
            groups[expense_key(txn)].append(outgoing_value(txn))

    items = tuple(
        ExpenseLine(key=key, amount=math.fsum(groups[key])) for key in sorted(groups)
    )
    return ExpenseBlock(
        items=items,
        total_expense_incurred=math.fsum(
            value for values in groups.values() for value in values
        ),
    )


def build_liabilities(transactions: Iterable[Transaction]) -> LiabilityBlock:
    """Net new supplier credit against supplier payments, per supplier."""
    created: dict[str, list[float]] = defaultdict(list)
    paid: dict[str, list[float]] = defaultdict(list)
    for txn in transactions:
        buckets = classify(txn)
        if SUPPLIER_CREDIT_LIABILITY in buckets:
            created[supplier_key(txn)].append(outgoing_value(txn))
        if SUPPLIER_PAYMENT in buckets:
            paid[supplier_key(txn)].append(outgoing_value(txn))

    items = []
    for key in sorted(set(created) | set(paid)):
        created_total = math.fsum(created.get(key, ()))
        paid_total = math.fsum(paid.get(key, ()))
        if abs(created_total) <= LIABILITY_EPSILON and abs(paid_total) <= LIABILITY_EPSILON:
            continue
        items.append(
            SupplierLiability(
                key=key,
                created=created_total,
                paid=paid_total,
                balance=created_total - paid_total,
            )
        )

    total_new_liability = math.fsum(v for values in created.values() for v in values)
    total_supplier_paid = math.fsum(v for values in paid.values() for v in values)
    return LiabilityBlock(
        items=tuple(items),
        total_new_liability=total_new_liability,
        total_supplier_paid=total_supplier_paid,
        payable_net=total_new_liability - total_supplier_paid,
    )


def build_notes(
    cash_check: CashCheck, revenue: RevenueBlock, liabilities: LiabilityBlock
) -> tuple[str, ...]:
    """Advisory alerts for the report reader."""
    notes = []
    if not cash_check.healthy:
        notes.append(f"Cash variance detected: {cash_check.variance:.2f}")
    if revenue.credit_sales > 0:
        notes.append(f"Credit sales pending collection: {revenue.credit_sales:.2f}")
    if liabilities.total_new_liability > 0:
        notes.append(
            f"New liabilities created: {liabilities.total_new_liability:.2f}"
        )
    if liabilities.payable_net < 0:
        notes.append(
            "Supplier payments exceed new liabilities by "
            f"{-liabilities.payable_net:.2f}"
        )
    return tuple(notes)


def generate_report(
    transactions: Iterable[Transaction], inputs: Optional[SessionInputs] = None
) -> FinancialReport:
    """Derive the financial position for the given records.

    Args:
        transactions: Records already scoped to one client and date range
        inputs: Opening balances, drawer count and labels for the range

    Returns:
        FinancialReport; malformed records are coerced, never rejected
    """
    inputs = inputs or SessionInputs()
    transactions = list(transactions)
    opening_cash = to_number(inputs.opening_cash)
    opening_bank = to_number(inputs.opening_bank)
    actual_count = to_number(inputs.actual_count)

    revenue = build_revenue(transactions)
    expenses = build_expenses(transactions)
    liabilities = build_liabilities(transactions)

    flows: dict[str, tuple[list[float], list[float]]] = {
        "cash": ([], []),
        "bank": ([], []),
    }
    for txn in transactions:
        channel = flows.get(normalize_mode(txn.mode))
        if channel is None:
            continue
        money_in, money_out = cash_flow(txn)
        channel[0].append(money_in)
        channel[1].append(money_out)

    cash_in, cash_out = (math.fsum(values) for values in flows["cash"])
    bank_in, bank_out = (math.fsum(values) for values in flows["bank"])

    net_cash_position = cash_in - cash_out
    expected_drawer = opening_cash + net_cash_position
    variance = actual_count - expected_drawer
    healthy = abs(variance) < VARIANCE_TOLERANCE
    cash_check = CashCheck(
        opening_cash=opening_cash,
        net_cash_position=net_cash_position,
        expected_drawer=expected_drawer,
        actual_count=actual_count,
        variance=variance,
        healthy=healthy,
    )

    total_cash_balance = opening_cash + net_cash_position
    total_bank_balance = opening_bank + (bank_in - bank_out)
    # Receivable/payable cover this range only; nothing carries forward.
    total_receivable = revenue.credit_sales
    total_payable = liabilities.payable_net
    liquidity = LiquidityBlock(
        cash_in=cash_in,
        cash_out=cash_out,
        bank_in=bank_in,
        bank_out=bank_out,
        total_cash_balance=total_cash_balance,
        total_bank_balance=total_bank_balance,
        total_receivable=total_receivable,
        total_payable=total_payable,
        total_liquid_funds=total_cash_balance
        + total_bank_balance
        + total_receivable
        - total_payable,
    )

    status = ReportStatus(
        healthy=healthy,
        status_text="HEALTHY" if healthy else "ACTION REQUIRED",
        status_sub=(
            "Cash is balanced. Expenses are verified."
            if healthy
            else "Variance detected or liabilities need review."
        ),
    )

    return FinancialReport(
        selected_date_label=inputs.selected_date_label or "",
        is_single_day=bool(inputs.is_single_day),
        status=status,
        revenue=revenue,
        expenses=expenses,
        liabilities=liabilities,
        liquidity=liquidity,
        cash_check=cash_check,
        notes=build_notes(cash_check, revenue, liabilities),
        analyst_notes_text=inputs.analyst_notes_text or "",
        transaction_count=len(transactions),
    )


class ReportService:
    """Service for building financial position reports from the store."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.sessions = DailySessionService(db)

    def build_report(
        self, client_id: int, start_date: date, end_date: Optional[date] = None
    ) -> ReportOutcome:
        """Build the report for one day or an inclusive date range.

        For a range, opening balances come from the first day's session and
        the counted drawer from the last day's session.

        Args:
            client_id: Client ID
            start_date: First day of the report
            end_date: Last day of the report (defaults to start_date)

        Returns:
            ReportOutcome; when the store fails, the report is empty and
            ``error`` carries the failure message

        Raises:
            ValidationError: If the range starts after it ends
            NotFoundError: If the client does not exist
        """
        end_date = end_date or start_date
        if start_date > end_date:
            raise ValidationError(invalid_date_range(start_date, end_date))

        label = format_range_label(start_date, end_date)
        is_single_day = start_date == end_date

        try:
            if self.db.get_client(client_id) is None:
                raise NotFoundError(client_not_found(client_id))
            transactions = self.db.query_transactions(client_id, start_date, end_date)
            inputs = self.sessions.session_inputs(
                client_id, start_date, end_date, label=label
            )
        except StoreUnavailableError as e:
            logger.error("Report for client %s (%s) degraded: %s", client_id, label, e)
            empty = generate_report(
                [], SessionInputs(selected_date_label=label, is_single_day=is_single_day)
            )
            return ReportOutcome(report=empty, error=str(e))

        logger.debug(
            "Generating report for client %s (%s) over %d transactions",
            client_id,
            label,
            len(transactions),
        )
        return ReportOutcome(report=generate_report(transactions, inputs))
