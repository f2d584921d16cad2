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


class PersistenceUnavailableError(DomainError):
    """The trip database could not be opened or initialized."""


def trip_not_found(trip_id: int) -> str:
    """Return message for missing trip."""
    return f"Trip {trip_id} not found"


def persistence_unavailable(reason: object) -> str:
    """Return message when the database cannot be used."""
    return f"Trip database is unavailable: {reason}"
