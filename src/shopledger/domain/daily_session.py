"""Daily session domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from shopledger.database.base import Database
from shopledger.domain.entities import DailySession, SessionInputs
from shopledger.domain.errors import ValidationError
from shopledger.utils.amount_parser import to_number
from shopledger.utils.date_parser import format_range_label, to_date_key

logger = logging.getLogger(__name__)

SESSION_FIELDS = ("opening_cash", "opening_bank", "actual_cash_drawer", "analyst_notes")
NUMERIC_SESSION_FIELDS = ("opening_cash", "opening_bank", "actual_cash_drawer")


def session_key(client_id: int | str, date_key: str) -> str:
    """Return the store key for a (client, day) session."""
    return f"{client_id}__{date_key}"


class DailySessionService:
    """Service for per-shop, per-day report inputs.

    Sessions are upsert-only: a missing session is never an error, and
    writes only touch the fields they name.
    """

    def __init__(self, db: Database):
        """Initialize daily session service.

        Args:
            db: Database instance
        """
        self.db = db

    def fetch(self, client_id: Optional[int], date_key: Optional[str]) -> Optional[DailySession]:
        """Get the session for a client and day, or None if none was saved."""
        if not client_id or not date_key:
            return None
        return self.db.get_daily_session(session_key(client_id, date_key))

    def upsert(
        self,
        client_id: int,
        date_key: str,
        expected_version: Optional[int] = None,
        **fields: Any,
    ) -> Optional[DailySession]:
        """Merge fields into the session, creating it if needed.

        Args:
            client_id: Client ID
            date_key: Day in YYYY-MM-DD form
            expected_version: If given, the write fails unless the stored
                session still has this version
            **fields: Any of opening_cash, opening_bank, actual_cash_drawer,
                analyst_notes; None values are left untouched

        Returns:
            The stored session, or None when client or day is missing

        Raises:
            ValidationError: If an unknown field is given
            ConflictError: If expected_version does not match
        """
        if not client_id or not date_key:
            return None

        unknown = sorted(set(fields) - set(SESSION_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown daily session field(s): {', '.join(unknown)}")

        patch: dict[str, Any] = {}
        for name, value in fields.items():
            if value is None:
                continue
            if name in NUMERIC_SESSION_FIELDS:
                patch[name] = Decimal(str(to_number(value)))
            else:
                patch[name] = str(value)

        key = session_key(client_id, date_key)
        session = self.db.upsert_daily_session(
            key=key,
            client_id=client_id,
            date_key=date_key,
            fields=patch,
            expected_version=expected_version,
        )
        logger.info("Saved daily session %s (%s)", key, ", ".join(sorted(patch)) or "no changes")
        return session

    def session_inputs(
        self,
        client_id: int,
        start_date: date,
        end_date: Optional[date] = None,
        label: Optional[str] = None,
    ) -> SessionInputs:
        """Build report inputs from the stored sessions.

        Opening balances come from the first day and the counted drawer from
        the last day; missing sessions contribute zeros. Analyst notes from
        every saved day in the range are joined oldest first.
        """
        end_date = end_date or start_date
        start_key = to_date_key(start_date)
        end_key = to_date_key(end_date)
        sessions = self.db.query_daily_sessions(client_id, start_key, end_key) if client_id else []
        first = next((s for s in sessions if s.date_key == start_key), None)
        last = next((s for s in sessions if s.date_key == end_key), None)
        notes = [s.analyst_notes for s in sessions if s.analyst_notes]

        return SessionInputs(
            selected_date_label=label or format_range_label(start_date, end_date),
            opening_cash=to_number(first.opening_cash) if first else 0.0,
            opening_bank=to_number(first.opening_bank) if first else 0.0,
            actual_count=to_number(last.actual_cash_drawer) if last else 0.0,
            analyst_notes_text="\n".join(notes),
            is_single_day=start_date == end_date,
        )
