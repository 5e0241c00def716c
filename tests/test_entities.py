"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date, datetime, UTC
from decimal import Decimal

from shopledger.domain.entities import (
    Client,
    PartyLedger,
    Party,
    SessionInputs,
    Transaction,
)


def test_client_is_immutable():
    client = Client(id=1, name="Corner Store", currency="BHD", created_at=datetime.now(UTC))

    with pytest.raises(FrozenInstanceError):
        client.name = "Other"


def test_transaction_fields_default_to_none():
    txn = Transaction()

    assert txn.id is None
    assert txn.type is None
    assert txn.total_amount is None
    assert txn.party_type is None


def test_transaction_equality():
    a = Transaction(id=1, date=date(2024, 3, 14), total_amount=Decimal("5.00"))
    b = Transaction(id=1, date=date(2024, 3, 14), total_amount=Decimal("5.0"))

    assert a == b


def test_session_inputs_defaults():
    inputs = SessionInputs()

    assert inputs.opening_cash == 0
    assert inputs.actual_count == 0
    assert inputs.analyst_notes_text == ""
    assert inputs.is_single_day is True


def test_party_ledger_defaults_to_empty_summary():
    party = Party(
        id=1, client_id=1, name="Acme", type="Supplier", contact=None, tax_number=None,
        created_at=datetime.now(UTC),
    )
    ledger = PartyLedger(party=party, side="Supplier", start_date=date(2024, 3, 1), end_date=date(2024, 3, 2))

    assert ledger.transactions == ()
    assert ledger.summary.pending == 0
    assert ledger.summary.count == 0


def test_domain_package_exposes_services():
    import shopledger.domain as domain
    from shopledger.domain.report import ReportService

    assert domain.ReportService is ReportService
    assert set(domain.__all__) >= {"ClientService", "DailySessionService", "PartyLedgerService"}
    with pytest.raises(AttributeError):
        domain.SummaryService
