import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import DbErrorKind, NormalizedDbError, normalize_db_error
from .base import (
    RepositoryError,
    DuplicateError,
    ForeignKeyViolationError,
    NotNullViolationError,
    CheckViolationError,
)

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_COLUMN_PATTERNS = (
    # Postgres: 'null value in column "name" of relation ...'
    re.compile(r'null value in column "(?P<cols>[^"]+)"', re.IGNORECASE),
    # Postgres DETAIL: 'Key (iso)=(US) already exists.'
    re.compile(r"key \((?P<cols>[^)]+)\)=", re.IGNORECASE),
    # SQLite: 'UNIQUE constraint failed: countries.iso'
    re.compile(r"(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$", re.IGNORECASE),
    # MySQL: "Column 'name' cannot be null"
    re.compile(r"column '(?P<cols>[^']+)' cannot be null", re.IGNORECASE),
)


def extract_columns(normalized: NormalizedDbError) -> list[str] | None:
    """
    Best-effort extraction of column names from the driver message or detail.
    """
    for text in (normalized.detail, normalized.message):
        if not text:
            continue
        for pattern in _COLUMN_PATTERNS:
            m = pattern.search(text)
            if m:
                return [c.split(".")[-1].strip().strip('"') for c in re.split(r",\s*", m.group("cols"))]
    return None


# -----------------------
# Mapper
# -----------------------

_KIND_TO_ERROR: dict[DbErrorKind, tuple[type[RepositoryError], str]] = {
    DbErrorKind.UNIQUE_VIOLATION: (DuplicateError, "Duplicate record violates unique constraint"),
    DbErrorKind.FOREIGN_KEY_VIOLATION: (ForeignKeyViolationError, "Foreign key constraint violation"),
    DbErrorKind.NOT_NULL_VIOLATION: (NotNullViolationError, "Missing required field"),
    DbErrorKind.CHECK_VIOLATION: (CheckViolationError, "Check constraint violation"),
}


def map_db_error(exc: BaseException, model_name: str | None = None) -> RepositoryError:
    """
    Translate a storage-layer exception into an app-level RepositoryError.

    Client-class violations keep the driver's DETAIL line as their message when
    one is available; unknown errors get a generic, non-leaking message.
    """
    normalized = normalize_db_error(exc)
    model_part = model_name or "Record"

    mapped = _KIND_TO_ERROR.get(normalized.kind)
    if mapped is not None:
        error_cls, default_message = mapped
        columns = extract_columns(normalized)
        # Expected client-level scenarios (409/400): INFO with minimal context
        logger.info(
            "mapper.%s", normalized.kind.value,
            extra={"model": model_part, "fields": columns, "constraint": normalized.constraint,
                   "db_code": normalized.code},
        )
        return error_cls(normalized.detail or default_message, fields=columns, constraint=normalized.constraint)

    # Raw driver text stays at DEBUG only
    logger.debug("mapper.unknown_db_error_raw", extra={"model": model_part, "raw": normalized.message})
    return RepositoryError(f"Failed to operate on {model_part}")


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... DB ops that may fail ...

    Rolls back the session on any error, so every statement issued in the current
    transaction (all batches of a bulk call included) is discarded, then raises a
    mapped app-level exception. RepositoryErrors raised inside the block (e.g.
    NotFoundError) are logical outcomes and pass through without a rollback.
    """
    try:
        yield
    except RepositoryError:
        raise
    except Exception as exc:
        await _safe_rollback(db, model_name)
        mapped = map_db_error(exc, model_name)
        if type(mapped) is RepositoryError:
            # Unexpected: keep the stack trace for diagnostics
            logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise mapped from exc


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        # If rollback fails, that is unusual; log with stack at ERROR and keep the original error.
        logger.exception("Failed to rollback session", extra={"model": model_name})
