from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.INTERNAL


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.INVALID_FIELD

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class MissingField(ValidationError):
    kind = ErrorKind.MISSING_FIELD


class InvalidRange(ValidationError):
    """Raised when a date range starts after it ends."""

    kind = ErrorKind.INVALID_RANGE


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND


class StoreError(DomainError):
    """Failure reported by the persistence store."""


class StoreUnavailable(StoreError):
    """Connection or query failure. Never retried."""

    kind = ErrorKind.STORE_UNAVAILABLE


class ConstraintViolation(StoreError):
    """The store rejected a write for an integrity reason."""

    kind = ErrorKind.CONSTRAINT_VIOLATION
