"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the report engine keeps working
on plain dataclasses whatever the table layout.
"""

from shopledger.domain import entities as domain
from shopledger.database.models import (
    Client as ORMClient,
    DailySession as ORMDailySession,
    Party as ORMParty,
    Transaction as ORMTransaction,
)


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        currency=orm_client.currency,
        created_at=orm_client.created_at,
    )


def party_to_domain(orm_party: ORMParty) -> domain.Party:
    """Convert SQLAlchemy Party model to domain Party entity."""
    return domain.Party(
        id=orm_party.id,
        client_id=orm_party.client_id,
        name=orm_party.name,
        type=orm_party.type,
        contact=orm_party.contact,
        tax_number=orm_party.tax_number,
        created_at=orm_party.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        client_id=orm_transaction.client_id,
        date=orm_transaction.date,
        type=orm_transaction.type,
        category=orm_transaction.category,
        mode=orm_transaction.mode,
        party_id=orm_transaction.party_id,
        party_name=orm_transaction.party_name,
        party_type=orm_transaction.party_type,
        amount_before_tax=orm_transaction.amount_before_tax,
        vat_percent=orm_transaction.vat_percent,
        tax_amount=orm_transaction.tax_amount,
        total_amount=orm_transaction.total_amount,
        amount_in=orm_transaction.amount_in,
        amount_out=orm_transaction.amount_out,
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
    )


def daily_session_to_domain(orm_session: ORMDailySession) -> domain.DailySession:
    """Convert SQLAlchemy DailySession model to domain DailySession entity."""
    return domain.DailySession(
        key=orm_session.key,
        client_id=orm_session.client_id,
        date_key=orm_session.date_key,
        opening_cash=orm_session.opening_cash,
        opening_bank=orm_session.opening_bank,
        actual_cash_drawer=orm_session.actual_cash_drawer,
        analyst_notes=orm_session.analyst_notes,
        version=orm_session.version,
        created_at=orm_session.created_at,
        updated_at=orm_session.updated_at,
    )
