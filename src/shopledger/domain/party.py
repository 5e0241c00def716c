"""Party (customer/supplier) domain service."""

import logging
from typing import Optional

from shopledger.database.base import Database
from shopledger.domain.classification import canonical_party_type
from shopledger.domain.entities import PARTY_TYPES, Party as PartyEntity
from shopledger.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    client_not_found,
    duplicate_party_name,
    invalid_choice,
    party_not_found,
)

logger = logging.getLogger(__name__)


class PartyService:
    """Service for managing a client's parties.

    Deleting a party leaves historical transactions untouched; they keep the
    party name and type recorded at entry time.
    """

    def __init__(self, db: Database):
        """Initialize party service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate(self, client_id: int, name: str, party_type: str) -> tuple[str, str]:
        name = name.strip()
        if not name:
            raise ValidationError("Party name is required.")
        canonical = canonical_party_type(party_type)
        if canonical is None:
            raise ValidationError(invalid_choice("party type", party_type, PARTY_TYPES))
        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        return name, canonical

    def create_party(
        self,
        client_id: int,
        name: str,
        party_type: str,
        contact: Optional[str] = None,
        tax_number: Optional[str] = None,
    ) -> int:
        """Create a party for a client.

        Args:
            client_id: Owning client ID
            name: Party name, unique within the client (case-insensitive)
            party_type: Customer, Supplier or Both
            contact: Optional phone or e-mail
            tax_number: Optional tax registration number

        Returns:
            Party ID

        Raises:
            ValidationError: If name or type is invalid
            NotFoundError: If the client does not exist
            ConflictError: If the name is already used by the client
        """
        name, canonical = self._validate(client_id, name, party_type)
        if self.db.get_party_by_name(client_id, name) is not None:
            raise ConflictError(duplicate_party_name(name, client_id))

        party_id = self.db.create_party(
            client_id=client_id,
            name=name,
            party_type=canonical,
            contact=(contact or "").strip() or None,
            tax_number=(tax_number or "").strip() or None,
        )
        logger.info("Created %s party %s for client %s", canonical, name, client_id)
        return party_id

    def get_party(self, party_id: int) -> Optional[PartyEntity]:
        """Get party by ID, or None if not found."""
        return self.db.get_party(party_id)

    def list_parties(self, client_id: int, search: Optional[str] = None) -> list[PartyEntity]:
        """List a client's parties ordered by name.

        Args:
            client_id: Client ID
            search: Optional text matched against name, type, contact and
                tax number (case-insensitive)
        """
        parties = self.db.query_parties(client_id)
        needle = (search or "").strip().lower()
        if not needle:
            return parties
        return [
            p
            for p in parties
            if needle
            in " ".join(filter(None, (p.name, p.type, p.contact, p.tax_number))).lower()
        ]

    def resolve_party(self, client_id: int, party: str | int) -> PartyEntity:
        """Resolve a party ID or name within a client.

        Raises:
            NotFoundError: If no such party belongs to the client
        """
        party_id = party if isinstance(party, int) else None
        if party_id is None:
            try:
                party_id = int(party)
            except (ValueError, TypeError):
                party_id = None

        if party_id is not None:
            party_obj = self.db.get_party(party_id)
            if party_obj is None or party_obj.client_id != client_id:
                raise NotFoundError(party_not_found(party_id))
            return party_obj

        party_obj = self.db.get_party_by_name(client_id, str(party).strip())
        if party_obj is None:
            raise NotFoundError(party_not_found(str(party)))
        return party_obj

    def update_party(
        self,
        party_id: int,
        name: Optional[str] = None,
        party_type: Optional[str] = None,
        contact: Optional[str] = None,
        tax_number: Optional[str] = None,
    ) -> None:
        """Update the given party fields; None leaves a field unchanged.

        Raises:
            NotFoundError: If party not found
            ValidationError: If the new name or type is invalid
            ConflictError: If the new name is already used by the client
        """
        current = self.db.get_party(party_id)
        if current is None:
            raise NotFoundError(party_not_found(party_id))

        new_name, new_type = self._validate(
            current.client_id,
            name if name is not None else current.name,
            party_type if party_type is not None else current.type,
        )
        existing = self.db.get_party_by_name(current.client_id, new_name)
        if existing is not None and existing.id != party_id:
            raise ConflictError(duplicate_party_name(new_name, current.client_id))

        self.db.update_party(
            party_id=party_id,
            name=new_name,
            party_type=new_type,
            contact=contact,
            tax_number=tax_number,
        )

    def delete_party(self, party_id: int) -> None:
        """Delete a party.

        Raises:
            NotFoundError: If party not found
        """
        if self.db.get_party(party_id) is None:
            raise NotFoundError(party_not_found(party_id))
        self.db.delete_party(party_id)
        logger.info("Deleted party %s", party_id)
