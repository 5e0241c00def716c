"""Transaction domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from shopledger.database.base import Database
from shopledger.domain.classification import (
    INFLOW_TYPES,
    OUTFLOW_TYPES,
    canonical_mode,
    canonical_type,
)
from shopledger.domain.entities import (
    PAYMENT_MODES,
    TRANSACTION_TYPES,
    Party,
    Transaction as TransactionEntity,
)
from shopledger.domain.errors import (
    NotFoundError,
    ValidationError,
    client_not_found,
    invalid_choice,
    invalid_date_range,
    transaction_not_found,
)
from shopledger.domain.party import PartyService
from shopledger.utils.amount_parser import round2, to_number

logger = logging.getLogger(__name__)

DEFAULT_VAT_PERCENT = 5
PARTY_REQUIRED_TYPES = ("Sales", "Purchase", "Receipt", "Payment")

# Party types allowed per transaction type; types not listed accept any party.
ALLOWED_PARTY_TYPES = {
    "Sales": ("Customer", "Both"),
    "Receipt": ("Customer", "Both"),
    "Purchase": ("Supplier", "Both"),
    "Payment": ("Supplier", "Both"),
}


def compute_tax(amount_before_tax: Any, vat_percent: Any) -> tuple[float, float]:
    """Return (tax_amount, total_amount), both rounded to two decimals."""
    base = to_number(amount_before_tax)
    tax_amount = round2(base * (to_number(vat_percent) / 100))
    return tax_amount, round2(base + tax_amount)


def cash_split(txn_type: str, mode: str, total_amount: float) -> tuple[float, float]:
    """Return the (amount_in, amount_out) a new record moves through cash or bank.

    Credit records move no money yet: a credit sale is a receivable and a
    credit purchase a payable.
    """
    if canonical_mode(mode) not in ("Cash", "Bank"):
        return 0.0, 0.0
    normalized = (canonical_type(txn_type) or "").lower()
    if normalized in INFLOW_TYPES:
        return round2(total_amount), 0.0
    if normalized in OUTFLOW_TYPES:
        return 0.0, round2(total_amount)
    return 0.0, 0.0


def party_matches_transaction(party_type: str, txn_type: str) -> bool:
    allowed = ALLOWED_PARTY_TYPES.get(txn_type)
    return allowed is None or party_type in allowed


def _money(value: float) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


class TransactionService:
    """Service for recording and reading transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.parties = PartyService(db)

    def _build_fields(
        self,
        client_id: int,
        date: date,
        txn_type: str,
        mode: str,
        amount_before_tax: Any,
        vat_percent: Any,
        category: Optional[str],
        party: Optional[int | str],
        description: Optional[str],
    ) -> dict[str, Any]:
        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        if date is None:
            raise ValidationError("Date is required.")

        canonical = canonical_type(txn_type)
        if canonical is None:
            raise ValidationError(invalid_choice("transaction type", txn_type, TRANSACTION_TYPES))
        mode_name = canonical_mode(mode)
        if mode_name is None:
            raise ValidationError(invalid_choice("payment mode", mode, PAYMENT_MODES))

        base = to_number(amount_before_tax)
        if base <= 0:
            raise ValidationError("Amount (before tax) must be greater than 0.")
        vat = to_number(vat_percent)
        if vat < 0:
            raise ValidationError("VAT percent cannot be negative.")

        party_obj: Optional[Party] = None
        if party is not None and str(party).strip():
            party_obj = self.parties.resolve_party(client_id, party)
        if canonical in PARTY_REQUIRED_TYPES and party_obj is None:
            raise ValidationError(f"A party is required for {canonical} transactions.")
        if party_obj is not None and not party_matches_transaction(party_obj.type, canonical):
            raise ValidationError(
                f"Party '{party_obj.name}' is a {party_obj.type} and cannot be used "
                f"for {canonical} transactions."
            )

        tax_amount, total_amount = compute_tax(base, vat)
        amount_in, amount_out = cash_split(canonical, mode_name, total_amount)

        return {
            "client_id": client_id,
            "date": date,
            "type": canonical,
            "category": (category or "").strip() or None,
            "mode": mode_name,
            "party_id": party_obj.id if party_obj else None,
            "party_name": party_obj.name if party_obj else None,
            "party_type": party_obj.type if party_obj else None,
            "amount_before_tax": _money(round2(base)),
            "vat_percent": Decimal(str(vat)),
            "tax_amount": _money(tax_amount),
            "total_amount": _money(total_amount),
            "amount_in": _money(amount_in),
            "amount_out": _money(amount_out),
            "description": (description or "").strip() or None,
        }

    def create_transaction(
        self,
        client_id: int,
        date: date,
        txn_type: str,
        mode: str,
        amount_before_tax: Any,
        vat_percent: Any = DEFAULT_VAT_PERCENT,
        category: Optional[str] = None,
        party: Optional[int | str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Record a transaction.

        Tax, total and the cash/bank split are derived here; the party's
        name and type are copied onto the record as they are today.

        Args:
            client_id: Client ID
            date: Transaction date
            txn_type: Sales, Purchase, Expense, Payment, Receipt, Income or Drawing
            mode: Cash, Bank or Credit
            amount_before_tax: Net amount, must be positive
            vat_percent: VAT rate in percent
            category: Optional category label
            party: Party ID or name; required for Sales, Purchase, Receipt
                and Payment
            description: Optional free text

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the client or party does not exist
            ValidationError: If any field is invalid
        """
        fields = self._build_fields(
            client_id, date, txn_type, mode, amount_before_tax, vat_percent,
            category, party, description,
        )
        transaction_id = self.db.create_transaction(**fields)
        logger.info(
            "Created %s %s transaction %s for client %s: %s",
            fields["mode"],
            fields["type"],
            transaction_id,
            client_id,
            fields["total_amount"],
        )
        return transaction_id

    def replace_transaction(
        self,
        transaction_id: int,
        date: date,
        txn_type: str,
        mode: str,
        amount_before_tax: Any,
        vat_percent: Any = DEFAULT_VAT_PERCENT,
        category: Optional[str] = None,
        party: Optional[int | str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Replace every field of a transaction, keeping its client.

        Raises:
            NotFoundError: If the transaction does not exist
            ValidationError: If any field is invalid
        """
        current = self.db.get_transaction(transaction_id)
        if current is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        fields = self._build_fields(
            current.client_id, date, txn_type, mode, amount_before_tax, vat_percent,
            category, party, description,
        )
        self.db.replace_transaction(transaction_id, **fields)
        logger.info("Replaced transaction %s", transaction_id)

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID, or None if not found."""
        return self.db.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    def list_transactions(
        self,
        client_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        txn_type: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List a client's transactions, most recent first.

        Args:
            client_id: Client ID
            start_date: Optional first day (inclusive)
            end_date: Optional last day (inclusive)
            txn_type: Optional type filter (prefix and case tolerant)

        Raises:
            ValidationError: If the range starts after it ends
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(invalid_date_range(start_date, end_date))

        transactions = self.db.query_transactions(client_id, start_date, end_date)
        if txn_type is None:
            return transactions
        wanted = canonical_type(txn_type)
        return [t for t in transactions if canonical_type(t.type) == wanted]
