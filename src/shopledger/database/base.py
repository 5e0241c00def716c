"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from shopledger.domain.entities import (
    Client,
    DailySession,
    Party,
    Transaction,
)


class Database(ABC):
    """Abstract record store for shopledger.

    Every transaction and party query is scoped by client. Implementations
    raise StoreUnavailableError when the underlying store fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(self, name: str, currency: str) -> int:
        """Create a new client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_name(self, name: str) -> Optional[Client]:
        """Get client by exact name."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients."""
        pass

    @abstractmethod
    def get_client_transaction_count(self, client_id: int) -> int:
        """Count transactions owned by a client."""
        pass

    @abstractmethod
    def get_client_party_count(self, client_id: int) -> int:
        """Count parties owned by a client."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> None:
        """Delete a client and its daily sessions."""
        pass

    # Party operations
    @abstractmethod
    def create_party(
        self,
        client_id: int,
        name: str,
        party_type: str,
        contact: Optional[str] = None,
        tax_number: Optional[str] = None,
    ) -> int:
        """Create a party. Returns party ID."""
        pass

    @abstractmethod
    def get_party(self, party_id: int) -> Optional[Party]:
        """Get party by ID."""
        pass

    @abstractmethod
    def get_party_by_name(self, client_id: int, name: str) -> Optional[Party]:
        """Get a client's party by name (case-insensitive)."""
        pass

    @abstractmethod
    def query_parties(self, client_id: int) -> list[Party]:
        """List a client's parties ordered by name."""
        pass

    @abstractmethod
    def update_party(
        self,
        party_id: int,
        name: Optional[str] = None,
        party_type: Optional[str] = None,
        contact: Optional[str] = None,
        tax_number: Optional[str] = None,
    ) -> None:
        """Update party fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_party(self, party_id: int) -> None:
        """Delete a party. Transactions referencing it are kept."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        client_id: int,
        date: date,
        type: str,
        mode: str,
        category: Optional[str] = None,
        party_id: Optional[int] = None,
        party_name: Optional[str] = None,
        party_type: Optional[str] = None,
        amount_before_tax: Optional[Decimal] = None,
        vat_percent: Optional[Decimal] = None,
        tax_amount: Optional[Decimal] = None,
        total_amount: Optional[Decimal] = None,
        amount_in: Optional[Decimal] = None,
        amount_out: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def replace_transaction(self, transaction_id: int, **fields: Any) -> None:
        """Overwrite every stored field of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def query_transactions(
        self,
        client_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List a client's transactions within an inclusive date range.

        Ordered by date descending (most recent first).
        """
        pass

    # Daily session operations
    @abstractmethod
    def get_daily_session(self, key: str) -> Optional[DailySession]:
        """Get a daily session by key, or None if it was never saved."""
        pass

    @abstractmethod
    def query_daily_sessions(
        self, client_id: int, start_key: str, end_key: str
    ) -> list[DailySession]:
        """Get a client's sessions whose date key falls in [start_key, end_key], oldest first."""
        pass

    @abstractmethod
    def upsert_daily_session(
        self,
        key: str,
        client_id: int,
        date_key: str,
        fields: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> DailySession:
        """Create the session if needed and merge the given fields into it.

        Raises:
            ConflictError: If expected_version is given and does not match
        """
        pass
