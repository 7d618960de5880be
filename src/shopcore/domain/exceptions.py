"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each subclass carries a stable ``kind`` that callers can branch on without
parsing the message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "domain"


class ValidationError(DomainException):
    """Malformed or out-of-range input, or an illegal state transition."""

    kind = "validation"


class NotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "not_found"


class AuthorizationError(DomainException):
    """The entity exists but does not belong to the caller."""

    kind = "authorization"


class ConflictError(DomainException):
    """The request clashes with current state (e.g. insufficient stock)."""

    kind = "conflict"


class StorageError(DomainException):
    """The storage collaborator failed (I/O, corrupt data)."""

    kind = "storage"
