"""
Custom exceptions for repository-related operations.

These errors describe *what* went wrong (an `ErrorKind`) and carry a message that
is safe to show to clients. They carry no transport knowledge; the HTTP layer maps
kinds to status codes in `refdata.api.v1.error_handlers`.
"""

from enum import Enum
from typing import Any, Iterable


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    NOT_NULL_VIOLATION = "not_null_violation"
    CHECK_VIOLATION = "check_violation"
    UNKNOWN = "unknown"


class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - message: human-friendly message (safe to show to clients)
    - kind: canonical classification consumed by the HTTP boundary
    - fields: optional list of field names related to the error (e.g., ['iso'])
    - constraint: optional DB constraint name (for logs only)
    - detail: optional structured detail (e.g. the requested id list)
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, detail: Any = None,
                 kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.detail = detail
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base


class InvalidArgumentError(RepositoryError):
    """Bad or missing id, empty bulk payload."""
    kind = ErrorKind.INVALID_ARGUMENT


class NotFoundError(RepositoryError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None,
                 detail: Any = None):
        super().__init__(message, fields=fields, detail=detail)


class DuplicateError(RepositoryError):
    kind = ErrorKind.UNIQUE_VIOLATION


class ForeignKeyViolationError(RepositoryError):
    kind = ErrorKind.FOREIGN_KEY_VIOLATION


class NotNullViolationError(RepositoryError):
    kind = ErrorKind.NOT_NULL_VIOLATION


class CheckViolationError(RepositoryError):
    kind = ErrorKind.CHECK_VIOLATION


__all__ = [
    "ErrorKind",
    "RepositoryError",
    "InvalidArgumentError",
    "NotFoundError",
    "DuplicateError",
    "ForeignKeyViolationError",
    "NotNullViolationError",
    "CheckViolationError",
]
