"""Tests for record normalization and classification."""

from decimal import Decimal

import pytest

from shopledger.domain.classification import (
    CREDIT_RECOVERY,
    EXPENSE_INCURRED,
    INFLOW,
    SUPPLIER_CREDIT_LIABILITY,
    SUPPLIER_PAYMENT,
    canonical_mode,
    canonical_party_type,
    canonical_type,
    cash_flow,
    classify,
    expense_key,
    incoming_value,
    normalize_mode,
    normalize_type,
    outgoing_value,
    supplier_key,
)
from shopledger.domain.entities import Transaction


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Sales", "sales"),
        ("sale", "sales"),
        (" SALES ", "sales"),
        ("Receipt", "receipt"),
        ("income", "income"),
        ("Purchases", "purchase"),
        ("payment", "payment"),
        ("Expenses", "expense"),
        ("Drawing", "drawing"),
        (None, ""),
        ("Refund", "refund"),
    ],
)
def test_normalize_type(raw, expected):
    assert normalize_type(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [("Cash", "cash"), (" bank transfer", "bank"), ("CREDIT", "credit"), (None, ""), ("card", "card")],
)
def test_normalize_mode(raw, expected):
    assert normalize_mode(raw) == expected


def test_canonical_names():
    assert canonical_type("sale") == "Sales"
    assert canonical_type("refund") is None
    assert canonical_mode("bank") == "Bank"
    assert canonical_mode("card") is None
    assert canonical_party_type(" both ") == "Both"
    assert canonical_party_type("vendor") is None


class TestValues:
    def test_incoming_prefers_amount_in(self):
        txn = Transaction(amount_in=Decimal("10"), total_amount=Decimal("12"))
        assert incoming_value(txn) == 10.0

    def test_incoming_falls_back_to_total(self):
        assert incoming_value(Transaction(amount_in=Decimal("0"), total_amount=Decimal("12"))) == 12.0
        assert incoming_value(Transaction()) == 0.0

    def test_outgoing_order(self):
        assert outgoing_value(Transaction(amount_out=5, amount_in=3, total_amount=9)) == 5.0
        assert outgoing_value(Transaction(amount_out=0, amount_in=3, total_amount=9)) == 3.0
        assert outgoing_value(Transaction(total_amount="9")) == 9.0

    def test_malformed_amounts_are_zero(self):
        txn = Transaction(amount_in="abc", amount_out=None, total_amount="")
        assert incoming_value(txn) == 0.0
        assert outgoing_value(txn) == 0.0


class TestCashFlow:
    def test_uses_stored_split(self):
        txn = Transaction(type="Sales", amount_in=7, amount_out=0, total_amount=100)
        assert cash_flow(txn) == (7.0, 0.0)

    def test_zero_split_uses_type_direction(self):
        assert cash_flow(Transaction(type="Sales", total_amount=10)) == (10.0, 0.0)
        assert cash_flow(Transaction(type="Drawing", total_amount=10)) == (0.0, 10.0)
        assert cash_flow(Transaction(type="Expense", amount_in=0, amount_out=0, total_amount=4)) == (0.0, 4.0)

    def test_unknown_type_or_empty_total_moves_nothing(self):
        assert cash_flow(Transaction(type="Refund", total_amount=10)) == (0.0, 0.0)
        assert cash_flow(Transaction(type="Sales", total_amount=-10)) == (0.0, 0.0)

    def test_negative_correction_keeps_its_sign(self):
        assert cash_flow(Transaction(type="Sales", amount_in=-50, total_amount=50)) == (-50.0, 0.0)
        assert cash_flow(Transaction(type="Purchase", amount_out=-5, total_amount=5)) == (0.0, -5.0)


class TestClassify:
    def test_cash_sale_is_inflow_only(self):
        txn = Transaction(type="Sales", mode="Cash", total_amount=10, amount_in=10)
        assert classify(txn) == {INFLOW}

    def test_customer_receipt_is_credit_recovery(self):
        txn = Transaction(type="Receipt", mode="Bank", party_type="Customer", amount_in=20)
        assert classify(txn) == {INFLOW, CREDIT_RECOVERY}

    def test_receipt_from_supplier_is_not_recovery(self):
        txn = Transaction(type="Receipt", mode="Cash", party_type="Supplier", amount_in=20)
        assert classify(txn) == {INFLOW}

    def test_credit_purchase_from_supplier(self):
        txn = Transaction(type="Purchase", mode="Credit", party_type="Supplier", total_amount=50)
        assert classify(txn) == {EXPENSE_INCURRED, SUPPLIER_CREDIT_LIABILITY}

    def test_cash_purchase_creates_no_liability(self):
        txn = Transaction(type="Purchase", mode="Cash", party_type="Both", amount_out=50)
        assert classify(txn) == {EXPENSE_INCURRED}

    def test_supplier_payment(self):
        txn = Transaction(type="Payment", mode="Bank", party_type="both", amount_out=30)
        assert classify(txn) == {EXPENSE_INCURRED, SUPPLIER_PAYMENT}

    def test_drawing_is_unclassified(self):
        assert classify(Transaction(type="Drawing", mode="Cash", amount_out=30)) == frozenset()

    def test_zero_value_records_are_unclassified(self):
        assert classify(Transaction(type="Sales", mode="Cash")) == frozenset()
        assert classify(Transaction(type="Expense", mode="Cash", total_amount="x")) == frozenset()


def test_grouping_keys():
    assert expense_key(Transaction(category=" Rent ", description="March")) == "Rent"
    assert expense_key(Transaction(description="Electricity")) == "Electricity"
    assert expense_key(Transaction()) == "Expense"
    assert supplier_key(Transaction(party_name="Acme", description="x")) == "Acme"
    assert supplier_key(Transaction(description="Fish market")) == "Fish market"
    assert supplier_key(Transaction(party_name="  ")) == "Supplier"
