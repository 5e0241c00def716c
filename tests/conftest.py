"""Shared pytest fixtures for shopledger tests."""

import tempfile
import os
from datetime import date
import pytest

from shopledger.database.factories import create_sqlite_database
from shopledger.domain.client import ClientService
from shopledger.domain.daily_session import DailySessionService
from shopledger.domain.party import PartyService
from shopledger.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def party_service(temp_db):
    """Create a PartyService with a temporary database."""
    return PartyService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def session_service(temp_db):
    """Create a DailySessionService with a temporary database."""
    return DailySessionService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client for testing."""
    client_id = client_service.create_client(name="Corner Store")
    return client_service.get_client(client_id)


@pytest.fixture
def other_client(client_service):
    """A second client, for isolation checks."""
    client_id = client_service.create_client(name="Harbour Branch")
    return client_service.get_client(client_id)


@pytest.fixture
def customer(party_service, sample_client):
    party_id = party_service.create_party(sample_client.id, "Ali Customer", "Customer")
    return party_service.get_party(party_id)


@pytest.fixture
def supplier(party_service, sample_client):
    party_id = party_service.create_party(sample_client.id, "Acme Trading", "Supplier")
    return party_service.get_party(party_id)


@pytest.fixture
def report_day():
    return date(2024, 3, 14)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
