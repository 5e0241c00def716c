"""Domain model entities for shopledger.

These are pure data classes representing business concepts, independent of
database schema. Stored records (clients, parties, transactions, daily
sessions) map one to one onto tables; report blocks are derived values that
are never persisted.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Optional


TRANSACTION_TYPES = (
    "Sales",
    "Purchase",
    "Expense",
    "Payment",
    "Receipt",
    "Income",
    "Drawing",
)
PAYMENT_MODES = ("Cash", "Bank", "Credit")
PARTY_TYPES = ("Customer", "Supplier", "Both")


@dataclass(frozen=True)
class Client:
    """Shop (tenant) domain entity."""

    id: int
    name: str
    currency: str
    created_at: datetime


@dataclass(frozen=True)
class Party:
    """Customer or supplier of a shop."""

    id: int
    client_id: int
    name: str
    type: str
    contact: Optional[str]
    tax_number: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Financial fact recorded for a shop.

    Every field is optional: records written by older entry forms may lack
    any of them, and the report engine coerces missing values instead of
    rejecting the record. ``party_type`` is the party's type at entry time.
    """

    id: Optional[int] = None
    client_id: Optional[int] = None
    date: Optional[date] = None
    type: Optional[str] = None
    category: Optional[str] = None
    mode: Optional[str] = None
    party_id: Optional[int] = None
    party_name: Optional[str] = None
    party_type: Optional[str] = None
    amount_before_tax: Optional[Decimal] = None
    vat_percent: Optional[Decimal] = None
    tax_amount: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    amount_in: Optional[Decimal] = None
    amount_out: Optional[Decimal] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class DailySession:
    """Manually entered figures for one shop on one calendar day."""

    key: str
    client_id: int
    date_key: str
    opening_cash: Optional[Decimal]
    opening_bank: Optional[Decimal]
    actual_cash_drawer: Optional[Decimal]
    analyst_notes: Optional[str]
    version: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class SessionInputs:
    """Scalar inputs that parametrize a report."""

    selected_date_label: str = ""
    opening_cash: float = 0.0
    opening_bank: float = 0.0
    actual_count: float = 0.0
    analyst_notes_text: str = ""
    is_single_day: bool = True


@dataclass(frozen=True)
class RevenueBlock:
    total_gross_sales: float
    cash_sales: float
    bank_sales: float
    credit_sales: float
    credit_recovery_total: float
    credit_recovery_cash: float
    credit_recovery_bank: float
    total_income: float
    total_revenue_generated: float


@dataclass(frozen=True)
class ExpenseLine:
    key: str
    amount: float


@dataclass(frozen=True)
class ExpenseBlock:
    items: tuple[ExpenseLine, ...]
    total_expense_incurred: float


@dataclass(frozen=True)
class SupplierLiability:
    """Liability movement for one supplier within the report range."""

    key: str
    created: float
    paid: float
    balance: float


@dataclass(frozen=True)
class LiabilityBlock:
    items: tuple[SupplierLiability, ...]
    total_new_liability: float
    total_supplier_paid: float
    payable_net: float


@dataclass(frozen=True)
class LiquidityBlock:
    cash_in: float
    cash_out: float
    bank_in: float
    bank_out: float
    total_cash_balance: float
    total_bank_balance: float
    total_receivable: float
    total_payable: float
    total_liquid_funds: float


@dataclass(frozen=True)
class CashCheck:
    opening_cash: float
    net_cash_position: float
    expected_drawer: float
    actual_count: float
    variance: float
    healthy: bool


@dataclass(frozen=True)
class ReportStatus:
    healthy: bool
    status_text: str
    status_sub: str


@dataclass(frozen=True)
class FinancialReport:
    """Financial position derived from a set of transactions."""

    selected_date_label: str
    is_single_day: bool
    status: ReportStatus
    revenue: RevenueBlock
    expenses: ExpenseBlock
    liabilities: LiabilityBlock
    liquidity: LiquidityBlock
    cash_check: CashCheck
    notes: tuple[str, ...]
    analyst_notes_text: str = ""
    transaction_count: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Return the report as plain data for PDF or UI consumers."""
        return asdict(self)


@dataclass(frozen=True)
class ReportOutcome:
    """Report plus the store error that forced it to be empty, if any."""

    report: FinancialReport
    error: Optional[str] = None


@dataclass(frozen=True)
class PartySummary:
    credit_given: float
    settled: float
    pending: float
    count: int


@dataclass(frozen=True)
class PartyLedger:
    """Transactions and credit summary for a single party over a range."""

    party: Party
    side: str
    start_date: date
    end_date: date
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
    summary: PartySummary = field(
        default_factory=lambda: PartySummary(0.0, 0.0, 0.0, 0)
    )
