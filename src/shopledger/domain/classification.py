"""Normalization and classification rules for transaction records.

Records arrive with loosely typed ``type``/``mode``/``party_type`` strings
("Sales", "sale", " CASH ", ...). Everything here works on the normalized,
lowercase forms and never raises for malformed input.

Amount direction follows one rule: the record's type decides whether its
value is money coming in (sales, receipt, income) or going out (purchase,
expense, payment, drawing). The stored ``amount_in``/``amount_out`` split is
preferred; ``total_amount`` is used only when the split is empty.
"""

from typing import Any, Optional

from shopledger.domain.entities import (
    PARTY_TYPES,
    PAYMENT_MODES,
    TRANSACTION_TYPES,
    Transaction,
)
from shopledger.utils.amount_parser import to_number

INFLOW_TYPES = frozenset({"sales", "receipt", "income"})
EXPENSE_TYPES = frozenset({"purchase", "payment", "expense"})
OUTFLOW_TYPES = EXPENSE_TYPES | {"drawing"}
LIABILITY_TYPES = frozenset({"purchase", "expense"})
CUSTOMER_PARTY_TYPES = frozenset({"customer", "both"})
SUPPLIER_PARTY_TYPES = frozenset({"supplier", "both"})

INFLOW = "inflow"
EXPENSE_INCURRED = "expense_incurred"
CREDIT_RECOVERY = "credit_recovery"
SUPPLIER_CREDIT_LIABILITY = "supplier_credit_liability"
SUPPLIER_PAYMENT = "supplier_payment"

_MODE_PREFIXES = (("cas", "cash"), ("ban", "bank"), ("cre", "credit"))
_TYPE_PREFIXES = (
    ("sal", "sales"),
    ("rec", "receipt"),
    ("inc", "income"),
    ("pur", "purchase"),
    ("pay", "payment"),
    ("exp", "expense"),
)


def _clean(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip().lower()


def _match_prefix(value: str, prefixes: tuple[tuple[str, str], ...]) -> str:
    for prefix, normalized in prefixes:
        if value.startswith(prefix):
            return normalized
    return value


def normalize_mode(raw: Any) -> str:
    """Normalize a payment mode to cash, bank or credit."""
    return _match_prefix(_clean(raw), _MODE_PREFIXES)


def normalize_type(raw: Any) -> str:
    """Normalize a transaction type to its lowercase canonical name."""
    return _match_prefix(_clean(raw), _TYPE_PREFIXES)


def normalize_party_type(raw: Any) -> str:
    return _clean(raw)


def text(value: Any) -> str:
    """Return a stripped string, or "" for missing values."""
    if value is None:
        return ""
    return str(value).strip()


def incoming_value(txn: Transaction) -> float:
    """Value of a record read as money received."""
    amount_in = to_number(txn.amount_in)
    if amount_in > 0:
        return amount_in
    return to_number(txn.total_amount)


def outgoing_value(txn: Transaction) -> float:
    """Value of a record read as money paid or owed.

    Older records sometimes stored outgoing values in ``amount_in``, so that
    field is accepted before falling back to the total.
    """
    amount_out = to_number(txn.amount_out)
    if amount_out > 0:
        return amount_out
    amount_in = to_number(txn.amount_in)
    if amount_in > 0:
        return amount_in
    return to_number(txn.total_amount)


def cash_flow(txn: Transaction) -> tuple[float, float]:
    """Return the (in, out) movement a record causes in its payment channel.

    A stored split is taken as-is, negative corrections included. The total
    stands in only when both sides are zero or missing.
    """
    amount_in = to_number(txn.amount_in)
    amount_out = to_number(txn.amount_out)
    if amount_in != 0 or amount_out != 0:
        return amount_in, amount_out

    total = to_number(txn.total_amount)
    if total <= 0:
        return 0.0, 0.0
    txn_type = normalize_type(txn.type)
    if txn_type in INFLOW_TYPES:
        return total, 0.0
    if txn_type in OUTFLOW_TYPES:
        return 0.0, total
    return 0.0, 0.0


def is_inflow(txn: Transaction) -> bool:
    return normalize_type(txn.type) in INFLOW_TYPES and incoming_value(txn) > 0


def is_expense_incurred(txn: Transaction) -> bool:
    """True for purchases, payments and expenses, whatever the mode."""
    return normalize_type(txn.type) in EXPENSE_TYPES and outgoing_value(txn) > 0


def is_credit_recovery(txn: Transaction) -> bool:
    """True for a customer receipt collecting previously extended credit."""
    return (
        normalize_type(txn.type) == "receipt"
        and normalize_party_type(txn.party_type) in CUSTOMER_PARTY_TYPES
        and incoming_value(txn) > 0
    )


def is_supplier_credit_liability(txn: Transaction) -> bool:
    """True for a credit purchase or expense that creates a payable."""
    return (
        normalize_party_type(txn.party_type) in SUPPLIER_PARTY_TYPES
        and normalize_type(txn.type) in LIABILITY_TYPES
        and normalize_mode(txn.mode) == "credit"
        and outgoing_value(txn) > 0
    )


def is_supplier_payment(txn: Transaction) -> bool:
    """True for a payment that reduces what is owed to a supplier."""
    return (
        normalize_party_type(txn.party_type) in SUPPLIER_PARTY_TYPES
        and normalize_type(txn.type) == "payment"
        and outgoing_value(txn) > 0
    )


_PREDICATES = (
    (INFLOW, is_inflow),
    (EXPENSE_INCURRED, is_expense_incurred),
    (CREDIT_RECOVERY, is_credit_recovery),
    (SUPPLIER_CREDIT_LIABILITY, is_supplier_credit_liability),
    (SUPPLIER_PAYMENT, is_supplier_payment),
)


def classify(txn: Transaction) -> frozenset[str]:
    """Return every semantic bucket the record belongs to."""
    return frozenset(name for name, predicate in _PREDICATES if predicate(txn))


def expense_key(txn: Transaction) -> str:
    return text(txn.category) or text(txn.description) or "Expense"


def supplier_key(txn: Transaction) -> str:
    return text(txn.party_name) or text(txn.description) or "Supplier"


def canonical_type(raw: Any) -> Optional[str]:
    """Map a loosely typed transaction type to its display name, if known."""
    normalized = normalize_type(raw)
    for name in TRANSACTION_TYPES:
        if name.lower() == normalized:
            return name
    return None


def canonical_mode(raw: Any) -> Optional[str]:
    normalized = normalize_mode(raw)
    for name in PAYMENT_MODES:
        if name.lower() == normalized:
            return name
    return None


def canonical_party_type(raw: Any) -> Optional[str]:
    normalized = normalize_party_type(raw)
    for name in PARTY_TYPES:
        if name.lower() == normalized:
            return name
    return None
