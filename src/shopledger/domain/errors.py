"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or stale writes."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class StoreUnavailableError(DomainError):
    """The record store failed to read or write."""


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def party_not_found(party: int | str) -> str:
    """Return message for missing party by ID or name."""
    if isinstance(party, int):
        return f"Party {party} not found"
    return f"Party '{party}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_client_name(name: str) -> str:
    """Return message for duplicate client name."""
    return f"Client with name '{name}' already exists"


def duplicate_party_name(name: str, client_id: int) -> str:
    """Return message for duplicate party name within a client."""
    return f"Party with name '{name}' already exists for client {client_id}"


def invalid_choice(field: str, value: object, choices: tuple[str, ...]) -> str:
    """Return message for a value outside a closed set."""
    return f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}"


def invalid_date_range(start: object, end: object) -> str:
    """Return message when a range starts after it ends."""
    return f"Start date {start} is after end date {end}"


def stale_session(key: str, expected: int, actual: int) -> str:
    """Return message when a session write is based on an old version."""
    return (
        f"Daily session '{key}' was modified elsewhere "
        f"(expected version {expected}, found {actual})"
    )


def client_delete_blocked(
    client_id: int, transaction_count: int, party_count: int
) -> str:
    """Return message when client has dependent transactions or parties."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if party_count > 0:
        parts.append(f"{party_count} part{'ies' if party_count != 1 else 'y'}")
    return (
        f"Cannot delete client {client_id}: it has {', '.join(parts)}. "
        "Please delete them first."
    )
