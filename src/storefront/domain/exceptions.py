"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and translate them into
user-facing messages or status codes.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was malformed or a business invariant was violated.

    ``violations`` holds one ``{"field": ..., "message": ...}`` entry per
    problem when several were detected at once.
    """

    def __init__(self, message: str, violations: list[dict] | None = None) -> None:
        super().__init__(message)
        self.violations: list[dict] = list(violations or [])


class InsufficientStockError(ValidationError):
    """Not enough stock to reserve for an order."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceConflict(DomainException):
    """The store rejected a write (e.g. a duplicate order number).

    The whole creation request may be retried; a retry produces a new
    order number.
    """
