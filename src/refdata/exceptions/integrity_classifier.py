import re
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# =================================================================================================================
# Normalized shape
# =================================================================================================================


class DbErrorKind(str, Enum):
    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    NOT_NULL_VIOLATION = "not_null_violation"
    CHECK_VIOLATION = "check_violation"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NormalizedDbError:
    kind: DbErrorKind
    message: str
    code: str | None = None
    detail: str | None = None
    constraint: str | None = None


# =================================================================================================================
# Vendor code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


CODE_KIND_MAP: dict[str, DbErrorKind] = {
    # PostgreSQL SQLSTATE
    PostgresErrorCodes.UNIQUE_VIOLATION.value: DbErrorKind.UNIQUE_VIOLATION,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: DbErrorKind.FOREIGN_KEY_VIOLATION,
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: DbErrorKind.NOT_NULL_VIOLATION,
    PostgresErrorCodes.CHECK_VIOLATION.value: DbErrorKind.CHECK_VIOLATION,
    # MySQL / MariaDB errno and symbolic names
    "1062": DbErrorKind.UNIQUE_VIOLATION,
    "ER_DUP_ENTRY": DbErrorKind.UNIQUE_VIOLATION,
    "1451": DbErrorKind.FOREIGN_KEY_VIOLATION,
    "1452": DbErrorKind.FOREIGN_KEY_VIOLATION,
    "ER_ROW_IS_REFERENCED_2": DbErrorKind.FOREIGN_KEY_VIOLATION,
    "ER_NO_REFERENCED_ROW_2": DbErrorKind.FOREIGN_KEY_VIOLATION,
    "1048": DbErrorKind.NOT_NULL_VIOLATION,
    "ER_BAD_NULL_ERROR": DbErrorKind.NOT_NULL_VIOLATION,
    "3819": DbErrorKind.CHECK_VIOLATION,
    "ER_CHECK_CONSTRAINT_VIOLATED": DbErrorKind.CHECK_VIOLATION,
    # SQLite extended result names (sqlite3 exceptions expose these on 3.11+)
    "SQLITE_CONSTRAINT_UNIQUE": DbErrorKind.UNIQUE_VIOLATION,
    "SQLITE_CONSTRAINT_PRIMARYKEY": DbErrorKind.UNIQUE_VIOLATION,
    "SQLITE_CONSTRAINT_FOREIGNKEY": DbErrorKind.FOREIGN_KEY_VIOLATION,
    "SQLITE_CONSTRAINT_NOTNULL": DbErrorKind.NOT_NULL_VIOLATION,
    "SQLITE_CONSTRAINT_CHECK": DbErrorKind.CHECK_VIOLATION,
}

# Checked in this order; first match wins.
MESSAGE_PATTERNS: list[tuple[DbErrorKind, re.Pattern]] = [
    (DbErrorKind.UNIQUE_VIOLATION,
     re.compile(r"duplicate key|duplicate entry|unique constraint|unique_violation|unique failed", re.IGNORECASE)),
    (DbErrorKind.FOREIGN_KEY_VIOLATION,
     re.compile(r"foreign key|is not present in table", re.IGNORECASE)),
    (DbErrorKind.NOT_NULL_VIOLATION,
     re.compile(r"not null|null value in column|cannot be null", re.IGNORECASE)),
    (DbErrorKind.CHECK_VIOLATION,
     re.compile(r"check constraint|check failed", re.IGNORECASE)),
]

MAX_UNWRAP_DEPTH = 8

# Attributes (or mapping keys) that commonly hold a wrapped driver error.
UNWRAP_KEYS = (
    "orig",
    "__cause__",
    "cause",
    "original_error",
    "originalError",
    "inner_error",
    "innerError",
    "error",
    "response",
    "meta",
)

CODE_KEYS = ("sqlstate", "pgcode", "code", "errno", "sqlite_errorname")

_INTERESTING_MESSAGE = re.compile(r"constraint|duplicate|unique|foreign|null", re.IGNORECASE)
_SQLSTATE = re.compile(r"^[0-9A-Z]{5}$")
_DETAIL_LINE = re.compile(r"DETAIL:\s*(?P<detail>.+)")
_CONSTRAINT_NAME = re.compile(r'constraint "(?P<name>[^"]+)"', re.IGNORECASE)


# =================================================================================================================
# Helpers
# =================================================================================================================

def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    try:
        return getattr(obj, key, None)
    except Exception:  # a property on a foreign object blew up; treat as absent
        return None


def _as_driver_code(value: Any) -> str | None:
    """
    Return `value` as a string if it looks like a vendor error code.

    SQLAlchemy exceptions carry their own short `code` (e.g. "gkpj") pointing at
    its docs; that shape is rejected here so the walk keeps going to `orig`.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if not isinstance(value, str):
        return None
    value = value.strip()
    if _SQLSTATE.match(value) or value.startswith(("ER_", "SQLITE_")):
        return value
    return None


def _driver_code(obj: Any) -> str | None:
    for key in CODE_KEYS:
        code = _as_driver_code(_get(obj, key))
        if code:
            return code

    # PyMySQL / mysqlclient: args == (errno, message)
    if isinstance(obj, BaseException) and obj.args:
        first = obj.args[0]
        if isinstance(first, int) and not isinstance(first, bool):
            return str(first)
    return None


def _message(obj: Any) -> str:
    if isinstance(obj, Mapping):
        value = obj.get("message")
        return str(value) if value is not None else ""
    if isinstance(obj, BaseException):
        return str(obj)
    value = _get(obj, "message")
    return str(value) if isinstance(value, str) else ""


def _unwrap(error: Any) -> Any:
    """
    Walk nested wrappers breadth-first and return the first object that exposes a
    driver code, else the first one with a constraint-looking message. Falls back
    to `error` itself.

    ORM wrappers repeat the driver message in their own str(), so a message match
    alone does not end the walk; the driver object underneath carries the code and
    diagnostics.
    """
    visited: set[int] = set()
    frontier = [error]
    by_message = None

    for _ in range(MAX_UNWRAP_DEPTH + 1):
        next_frontier = []
        for candidate in frontier:
            if candidate is None or id(candidate) in visited:
                continue
            visited.add(id(candidate))

            if _driver_code(candidate):
                return candidate
            if by_message is None and _INTERESTING_MESSAGE.search(_message(candidate)):
                by_message = candidate

            for key in UNWRAP_KEYS:
                child = _get(candidate, key)
                if child is not None and not isinstance(child, (str, bytes, int, float, bool)):
                    next_frontier.append(child)
        if not next_frontier:
            break
        frontier = next_frontier

    return by_message if by_message is not None else error


def _detail_and_constraint(obj: Any, message: str) -> tuple[str | None, str | None]:
    detail = None
    constraint = None

    # psycopg / psycopg2 diagnostics
    diag = _get(obj, "diag")
    if diag is not None:
        detail = _get(diag, "message_detail")
        constraint = _get(diag, "constraint_name")

    # asyncpg-style direct attributes
    detail = detail or _get(obj, "detail")
    constraint = constraint or _get(obj, "constraint_name") or _get(obj, "constraint")

    if not detail:
        m = _DETAIL_LINE.search(message)
        if m:
            detail = m.group("detail").strip()
    if not constraint:
        m = _CONSTRAINT_NAME.search(message)
        if m:
            constraint = m.group("name")

    return (
        detail if isinstance(detail, str) else None,
        constraint if isinstance(constraint, str) else None,
    )


def _first_line(message: str) -> str:
    return message.strip().splitlines()[0] if message.strip() else ""


# =================================================================================================================
# Public API
# =================================================================================================================

def normalize_db_error(error: Any) -> NormalizedDbError:
    """
    Classify an arbitrary (possibly wrapped) storage error.

    Vendor codes win over message patterns; anything unrecognized becomes
    `DbErrorKind.UNKNOWN` carrying the stringified error. Never raises.
    """
    try:
        found = _unwrap(error)
        code = _driver_code(found)
        raw_message = _message(found) or str(found)
        detail, constraint = _detail_and_constraint(found, raw_message)
        message = _first_line(raw_message) or str(error)

        kind = CODE_KIND_MAP.get(code) if code else None
        if kind is None:
            for candidate_kind, pattern in MESSAGE_PATTERNS:
                if pattern.search(raw_message):
                    kind = candidate_kind
                    break

        if kind is None:
            logger.debug("normalizer.unrecognized", extra={"code": code, "error_type": type(found).__name__})
            kind = DbErrorKind.UNKNOWN

        return NormalizedDbError(kind=kind, message=message, code=code, detail=detail, constraint=constraint)
    except Exception:
        # A hostile __str__ or similar; classification must still produce a result.
        logger.debug("normalizer.failed", exc_info=True)
        return NormalizedDbError(kind=DbErrorKind.UNKNOWN, message="Unknown database error")
