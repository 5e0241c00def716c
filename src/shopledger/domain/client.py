"""Client (shop) domain service."""

import logging
from typing import Optional

from shopledger.database.base import Database
from shopledger.domain.entities import Client as ClientEntity
from shopledger.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    client_delete_blocked,
    client_not_found,
    duplicate_client_name,
)

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "BHD"


class ClientService:
    """Service for managing clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(self, name: str, currency: str = DEFAULT_CURRENCY) -> int:
        """Create a new client.

        Args:
            name: Shop name
            currency: Currency label used when rendering reports

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a client with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Client name is required.")
        if self.db.get_client_by_name(name) is not None:
            raise ConflictError(duplicate_client_name(name))

        client_id = self.db.create_client(
            name=name, currency=(currency or DEFAULT_CURRENCY).strip().upper()
        )
        logger.info("Created client %s (ID: %s)", name, client_id)
        return client_id

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID, or None if not found."""
        return self.db.get_client(client_id)

    def list_clients(self) -> list[ClientEntity]:
        """List all clients ordered by name."""
        return self.db.list_clients()

    def resolve_client(self, client: str | int) -> ClientEntity:
        """Resolve a client name or ID to a client.

        Raises:
            NotFoundError: If client is not found
        """
        if isinstance(client, int):
            client_obj = self.db.get_client(client)
            if client_obj is None:
                raise NotFoundError(client_not_found(client))
            return client_obj

        try:
            client_id = int(client)
        except (ValueError, TypeError):
            client_id = None

        if client_id is not None:
            client_obj = self.db.get_client(client_id)
            if client_obj is None:
                raise NotFoundError(client_not_found(client_id))
            return client_obj

        client_obj = self.db.get_client_by_name(str(client).strip())
        if client_obj is None:
            raise NotFoundError(f"Client '{client}' not found")
        return client_obj

    def delete_client(self, client_id: int) -> None:
        """Delete a client that has no parties or transactions.

        Raises:
            NotFoundError: If client not found
            DependencyError: If client still owns records
        """
        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))

        transaction_count = self.db.get_client_transaction_count(client_id)
        party_count = self.db.get_client_party_count(client_id)
        if transaction_count > 0 or party_count > 0:
            raise DependencyError(
                client_delete_blocked(client_id, transaction_count, party_count)
            )

        self.db.delete_client(client_id)
        logger.info("Deleted client %s", client_id)
