"""Tests for the financial position aggregator."""

import json
from dataclasses import replace
from decimal import Decimal

import pytest

from shopledger.domain.classification import (
    CREDIT_RECOVERY,
    EXPENSE_INCURRED,
    SUPPLIER_CREDIT_LIABILITY,
    SUPPLIER_PAYMENT,
    classify,
    incoming_value,
    outgoing_value,
)
from shopledger.domain.entities import SessionInputs, Transaction
from shopledger.domain.report import LIABILITY_EPSILON, generate_report


def _txn(type, mode, **amounts):
    return Transaction(type=type, mode=mode, **amounts)


@pytest.fixture
def trading_day():
    """One day of mixed activity for a single shop."""
    return [
        _txn("Sales", "Cash", amount_in=Decimal("100"), total_amount=Decimal("100")),
        _txn("Sales", "Bank", amount_in=Decimal("50"), total_amount=Decimal("50")),
        Transaction(
            type="Sales", mode="Credit", party_name="Ali", party_type="Customer",
            total_amount=Decimal("30"),
        ),
        Transaction(
            type="Receipt", mode="Cash", party_name="Ali", party_type="Customer",
            amount_in=Decimal("20"), total_amount=Decimal("20"),
        ),
        _txn("Income", "Bank", amount_in=Decimal("10"), total_amount=Decimal("10")),
        Transaction(type="Expense", mode="Cash", category="Rent", amount_out=Decimal("15")),
        Transaction(
            type="Purchase", mode="Credit", category="Stock", party_name="Acme",
            party_type="Supplier", total_amount=Decimal("40"),
        ),
        Transaction(
            type="Payment", mode="Bank", category="Supplier payments", party_name="Acme",
            party_type="Supplier", amount_out=Decimal("25"), total_amount=Decimal("25"),
        ),
        _txn("Drawing", "Cash", amount_out=Decimal("5")),
    ]


@pytest.fixture
def day_inputs():
    return SessionInputs(
        selected_date_label="2024-03-14",
        opening_cash=50,
        opening_bank=200,
        actual_count=150,
        analyst_notes_text="Quiet morning",
    )


class TestTradingDay:
    def test_revenue(self, trading_day, day_inputs):
        revenue = generate_report(trading_day, day_inputs).revenue

        assert revenue.total_gross_sales == 180
        assert (revenue.cash_sales, revenue.bank_sales, revenue.credit_sales) == (100, 50, 30)
        assert revenue.credit_recovery_total == 20
        assert (revenue.credit_recovery_cash, revenue.credit_recovery_bank) == (20, 0)
        assert revenue.total_income == 10
        assert revenue.total_revenue_generated == 180

    def test_expenses_grouped_and_sorted(self, trading_day, day_inputs):
        expenses = generate_report(trading_day, day_inputs).expenses

        assert [(line.key, line.amount) for line in expenses.items] == [
            ("Rent", 15),
            ("Stock", 40),
            ("Supplier payments", 25),
        ]
        assert expenses.total_expense_incurred == 80

    def test_liabilities(self, trading_day, day_inputs):
        liabilities = generate_report(trading_day, day_inputs).liabilities

        assert len(liabilities.items) == 1
        row = liabilities.items[0]
        assert (row.key, row.created, row.paid, row.balance) == ("Acme", 40, 25, 15)
        assert liabilities.total_new_liability == 40
        assert liabilities.total_supplier_paid == 25
        assert liabilities.payable_net == 15

    def test_liquidity_ignores_credit_records(self, trading_day, day_inputs):
        liquidity = generate_report(trading_day, day_inputs).liquidity

        assert (liquidity.cash_in, liquidity.cash_out) == (120, 20)
        assert (liquidity.bank_in, liquidity.bank_out) == (60, 25)
        assert liquidity.total_cash_balance == 150
        assert liquidity.total_bank_balance == 235
        assert liquidity.total_receivable == 30
        assert liquidity.total_payable == 15
        assert liquidity.total_liquid_funds == 400

    def test_cash_check_and_status(self, trading_day, day_inputs):
        report = generate_report(trading_day, day_inputs)

        assert report.cash_check.expected_drawer == 150
        assert report.cash_check.variance == 0
        assert report.cash_check.healthy is True
        assert report.status.status_text == "HEALTHY"

    def test_notes_and_meta(self, trading_day, day_inputs):
        report = generate_report(trading_day, day_inputs)

        assert report.notes == (
            "Credit sales pending collection: 30.00",
            "New liabilities created: 40.00",
        )
        assert report.selected_date_label == "2024-03-14"
        assert report.analyst_notes_text == "Quiet morning"
        assert report.transaction_count == 9
        assert report.is_single_day is True


def test_credit_sales_never_change_revenue_generated():
    base = [
        _txn("Sales", "Cash", amount_in=200),
        Transaction(type="Receipt", mode="Bank", party_type="Customer", amount_in=40),
    ]
    before = generate_report(base + [_txn("Sales", "Credit", total_amount=10)])
    after = generate_report(base + [_txn("Sales", "Credit", total_amount=10_000)])

    assert after.revenue.credit_sales > before.revenue.credit_sales
    assert after.revenue.total_revenue_generated == before.revenue.total_revenue_generated == 240


def test_liability_netting_for_one_supplier():
    report = generate_report(
        [
            Transaction(
                type="Purchase", mode="Credit", party_name="Acme", party_type="Supplier",
                total_amount=500,
            ),
            Transaction(
                type="Payment", mode="Cash", party_name="Acme", party_type="Supplier",
                amount_out=200,
            ),
        ]
    )
    liabilities = report.liabilities

    assert liabilities.items[0].balance == 300
    assert liabilities.total_new_liability >= 500
    assert liabilities.total_supplier_paid >= 200
    assert liabilities.payable_net == liabilities.total_new_liability - liabilities.total_supplier_paid



def test_negligible_liability_rows_are_hidden_but_totalled():
    tiny = LIABILITY_EPSILON / 2
    report = generate_report(
        [
            Transaction(
                type="Purchase", mode="Credit", party_name="Tiny", party_type="Supplier",
                total_amount=tiny,
            ),
            Transaction(
                type="Purchase", mode="Credit", party_name="Acme", party_type="Supplier",
                total_amount=0.01,
            ),
        ]
    )
    liabilities = report.liabilities

    assert [item.key for item in liabilities.items] == ["Acme"]
    assert liabilities.total_new_liability == pytest.approx(0.01 + tiny)


def test_negative_cash_sale_correction_reduces_cash_in():
    report = generate_report(
        [
            _txn("Sales", "Cash", amount_in=100, total_amount=100),
            _txn("Sales", "Cash", amount_in=-50, total_amount=50),
        ]
    )

    assert report.liquidity.cash_in == 50

def test_balanced_drawer_is_healthy():
    report = generate_report(
        [_txn("Sales", "Cash", amount_in=50), _txn("Expense", "Cash", amount_out=30)],
        SessionInputs(opening_cash=100, actual_count=120),
    )

    assert report.cash_check.expected_drawer == 120
    assert report.cash_check.variance == 0
    assert report.cash_check.healthy is True


def test_variance_beyond_tolerance_requires_action():
    report = generate_report(
        [_txn("Sales", "Cash", amount_in=50)],
        SessionInputs(opening_cash=10, actual_count=59.5),
    )

    assert report.cash_check.variance == pytest.approx(-0.5)
    assert report.cash_check.healthy is False
    assert report.status.status_text == "ACTION REQUIRED"
    assert report.notes[0] == "Cash variance detected: -0.50"


def test_output_does_not_depend_on_input_order(trading_day, day_inputs):
    fractional = trading_day + [
        _txn("Sales", "Cash", amount_in=Decimal("0.1")),
        _txn("Sales", "Cash", amount_in=Decimal("0.2")),
        _txn("Expense", "Bank", amount_out=Decimal("0.3")),
    ]
    forward = generate_report(fractional, day_inputs)
    backward = generate_report(list(reversed(fractional)), day_inputs)
    shuffled = generate_report(fractional[1::2] + fractional[::2], day_inputs)

    assert forward == backward == shuffled
    assert json.dumps(forward.as_dict()) == json.dumps(backward.as_dict())


def test_cash_and_credit_sales_with_customer_receipt():
    report = generate_report(
        [
            _txn("Sales", "Cash", amount_in=200),
            _txn("Sales", "Credit", amount_in=300),
            Transaction(type="Receipt", mode="Cash", party_type="Customer", amount_in=100),
        ],
        SessionInputs(opening_cash=0, actual_count=300),
    )

    assert report.revenue.cash_sales == 200
    assert report.revenue.credit_sales == 300
    assert report.revenue.credit_recovery_total == 100
    assert report.revenue.total_revenue_generated == 300
    assert report.cash_check.expected_drawer == 300
    assert report.cash_check.variance == 0


def test_payments_exceeding_new_liabilities_are_flagged():
    report = generate_report(
        [Transaction(type="Payment", mode="Bank", party_name="Acme", party_type="Supplier", amount_out=80)]
    )

    assert report.liabilities.payable_net == -80
    assert "Supplier payments exceed new liabilities by 80.00" in report.notes


def test_empty_input_gives_zeroed_report():
    report = generate_report([])

    assert report.revenue.total_gross_sales == 0
    assert report.expenses.items == ()
    assert report.liabilities.items == ()
    assert report.liquidity.total_liquid_funds == 0
    assert report.cash_check.healthy is True
    assert report.notes == ()
    assert report.transaction_count == 0


def test_malformed_records_are_coerced():
    report = generate_report(
        [
            Transaction(),
            Transaction(type="Sales", mode="Cash", amount_in="not a number", total_amount=None),
            Transaction(type="Sales", mode=" cash ", total_amount="12.5"),
        ]
    )

    assert report.revenue.cash_sales == 12.5
    assert report.liquidity.cash_in == 12.5
    assert report.transaction_count == 3


def test_report_dict_is_json_serializable(trading_day, day_inputs):
    payload = generate_report(trading_day, day_inputs).as_dict()

    restored = json.loads(json.dumps(payload))
    assert restored["revenue"]["total_revenue_generated"] == 180
    assert restored["liabilities"]["items"][0]["key"] == "Acme"
    assert restored["status"]["healthy"] is True


def test_multi_day_flag_passes_through(day_inputs):
    report = generate_report([], replace(day_inputs, is_single_day=False))

    assert report.is_single_day is False


def test_block_totals_follow_record_buckets(trading_day, day_inputs):
    report = generate_report(trading_day, day_inputs)

    def total(bucket, value):
        return sum(value(txn) for txn in trading_day if bucket in classify(txn))

    assert report.revenue.credit_recovery_total == pytest.approx(total(CREDIT_RECOVERY, incoming_value))
    assert report.expenses.total_expense_incurred == pytest.approx(total(EXPENSE_INCURRED, outgoing_value))
    assert report.liabilities.total_new_liability == pytest.approx(
        total(SUPPLIER_CREDIT_LIABILITY, outgoing_value)
    )
    assert report.liabilities.total_supplier_paid == pytest.approx(total(SUPPLIER_PAYMENT, outgoing_value))
