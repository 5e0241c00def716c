"""SQLAlchemy models for shopledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Text,
    Index,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Client(Base):
    """Shop (tenant) model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    currency = Column(String, nullable=False, default="BHD")
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    parties = relationship("Party", back_populates="client")
    transactions = relationship("Transaction", back_populates="client")


class Party(Base):
    """Customer/supplier model."""

    __tablename__ = "parties"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    contact = Column(String, nullable=True)
    tax_number = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("client_id", "name", name="uq_client_party_name"),)

    # Relationships
    client = relationship("Client", back_populates="parties")


class Transaction(Base):
    """Transaction model.

    party_id is a plain column, not a foreign key: deleting a party keeps
    its historical transactions, which still carry party_name/party_type.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=True)
    mode = Column(String, nullable=False)
    party_id = Column(Integer, nullable=True)
    party_name = Column(String, nullable=True)
    party_type = Column(String, nullable=True)
    amount_before_tax = Column(Numeric(12, 2), nullable=True)
    vat_percent = Column(Numeric(6, 2), nullable=True)
    tax_amount = Column(Numeric(12, 2), nullable=True)
    total_amount = Column(Numeric(12, 2), nullable=True)
    amount_in = Column(Numeric(12, 2), nullable=True)
    amount_out = Column(Numeric(12, 2), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Reports always filter by client and date range
    __table_args__ = (Index("ix_transactions_client_date", "client_id", "date"),)

    # Relationships
    client = relationship("Client", back_populates="transactions")


class DailySession(Base):
    """Per-client, per-day report inputs, keyed by '<client_id>__<YYYY-MM-DD>'."""

    __tablename__ = "daily_sessions"

    key = Column(String, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    date_key = Column(String, nullable=False)
    opening_cash = Column(Numeric(12, 2), nullable=True)
    opening_bank = Column(Numeric(12, 2), nullable=True)
    actual_cash_drawer = Column(Numeric(12, 2), nullable=True)
    analyst_notes = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
