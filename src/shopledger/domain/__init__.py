"""Domain layer for shopledger application."""

_SERVICES = {
    "ClientService": "shopledger.domain.client",
    "PartyService": "shopledger.domain.party",
    "TransactionService": "shopledger.domain.transaction",
    "DailySessionService": "shopledger.domain.daily_session",
    "ReportService": "shopledger.domain.report",
    "PartyLedgerService": "shopledger.domain.party_ledger",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
