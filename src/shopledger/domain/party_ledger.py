"""Party ledger domain service."""

import logging
import math
from datetime import date
from typing import Iterable, Optional

from shopledger.database.base import Database
from shopledger.domain.classification import (
    LIABILITY_TYPES,
    canonical_party_type,
    incoming_value,
    normalize_mode,
    normalize_type,
    outgoing_value,
    text,
)
from shopledger.domain.entities import Party, PartyLedger, PartySummary, Transaction
from shopledger.domain.errors import (
    ValidationError,
    invalid_choice,
    invalid_date_range,
)
from shopledger.domain.party import PartyService

logger = logging.getLogger(__name__)

LEDGER_SIDES = ("Customer", "Supplier")


def filter_by_party(
    transactions: Iterable[Transaction],
    party_id: Optional[int] = None,
    party_name: Optional[str] = None,
) -> list[Transaction]:
    """Select the records that belong to a party.

    A record matches on ``party_id`` or, because older records may only
    carry the name, on ``party_name`` compared case-insensitively.
    """
    wanted_name = text(party_name).lower()
    matched = []
    for txn in transactions:
        if party_id is not None and txn.party_id == party_id:
            matched.append(txn)
        elif wanted_name and text(txn.party_name).lower() == wanted_name:
            matched.append(txn)
    return matched


def summarize(transactions: Iterable[Transaction], party_type: str) -> PartySummary:
    """Compare credit extended to a party with what has been settled.

    Customers: credit sales against receipts. Suppliers: credit purchases
    and expenses against payments. ``pending`` may go negative when a party
    has overpaid.
    """
    transactions = list(transactions)
    is_customer = canonical_party_type(party_type) != "Supplier"

    given: list[float] = []
    settled: list[float] = []
    for txn in transactions:
        txn_type = normalize_type(txn.type)
        is_credit = normalize_mode(txn.mode) == "credit"
        if is_customer:
            if txn_type == "sales" and is_credit:
                given.append(incoming_value(txn))
            elif txn_type == "receipt":
                settled.append(incoming_value(txn))
        else:
            if txn_type in LIABILITY_TYPES and is_credit:
                given.append(outgoing_value(txn))
            elif txn_type == "payment":
                settled.append(outgoing_value(txn))

    credit_given = math.fsum(given)
    settled_total = math.fsum(settled)
    return PartySummary(
        credit_given=credit_given,
        settled=settled_total,
        pending=credit_given - settled_total,
        count=len(transactions),
    )


class PartyLedgerService:
    """Service for per-party statements."""

    def __init__(self, db: Database):
        """Initialize party ledger service.

        Args:
            db: Database instance
        """
        self.db = db
        self.parties = PartyService(db)

    def build_ledger(
        self,
        client_id: int,
        party: int | str,
        start_date: date,
        end_date: date,
        side: Optional[str] = None,
    ) -> PartyLedger:
        """Build a party statement over an inclusive date range.

        Args:
            client_id: Client ID
            party: Party ID or name
            start_date: First day of the range
            end_date: Last day of the range
            side: "Customer" or "Supplier"; defaults to the party's own type,
                and to Customer for parties of type Both

        Returns:
            PartyLedger with matching records, most recent first

        Raises:
            NotFoundError: If the party does not exist
            ValidationError: If the range or side is invalid
        """
        if start_date > end_date:
            raise ValidationError(invalid_date_range(start_date, end_date))

        party_obj: Party = self.parties.resolve_party(client_id, party)
        resolved_side = self._resolve_side(party_obj, side)

        records = self.db.query_transactions(client_id, start_date, end_date)
        matched = filter_by_party(records, party_id=party_obj.id, party_name=party_obj.name)
        logger.debug(
            "Party %s matched %d of %d records", party_obj.name, len(matched), len(records)
        )

        return PartyLedger(
            party=party_obj,
            side=resolved_side,
            start_date=start_date,
            end_date=end_date,
            transactions=tuple(matched),
            summary=summarize(matched, resolved_side),
        )

    def _resolve_side(self, party: Party, side: Optional[str]) -> str:
        if side is None:
            return "Supplier" if party.type == "Supplier" else "Customer"
        canonical = canonical_party_type(side)
        if canonical not in LEDGER_SIDES:
            raise ValidationError(invalid_choice("ledger side", side, LEDGER_SIDES))
        return canonical
