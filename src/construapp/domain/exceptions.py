"""Domain-level exceptions.

All business rule violations and store failures are expressed as
subclasses of DomainException so the CLI layer can catch them uniformly
and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AccessDeniedError(DomainException):
    """An admin-only operation was attempted outside admin mode."""


class StoreError(DomainException):
    """The remote document store rejected or failed an operation."""


class DuplicateOrderError(StoreError):
    """An order with the same idempotency key was already written."""
