"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input has the wrong shape or is out of range.

    ``errors`` maps a field name to the messages raised against it, so the
    boundary layer can show itemized feedback.
    """

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None) -> None:
        super().__init__(message)
        self.errors: dict[str, list[str]] = errors or {}


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidStateError(DomainException):
    """The entity is not in a state that allows the requested transition."""


class InsufficientStockError(DomainException):
    """Requested quantity exceeds what is available in stock."""


class ConflictError(DomainException):
    """The write collides with existing data (duplicate key, stale version)."""


class AccessDeniedError(DomainException):
    """The acting user does not own the entity."""
