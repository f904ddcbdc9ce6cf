from .base import (
    ErrorKind,
    RepositoryError,
    InvalidArgumentError,
    NotFoundError,
    DuplicateError,
    ForeignKeyViolationError,
    NotNullViolationError,
    CheckViolationError,
)
from .integrity_classifier import DbErrorKind, NormalizedDbError, normalize_db_error
from .mapper import db_error_handler, map_db_error

__all__ = [
    "ErrorKind",
    "RepositoryError",
    "InvalidArgumentError",
    "NotFoundError",
    "DuplicateError",
    "ForeignKeyViolationError",
    "NotNullViolationError",
    "CheckViolationError",
    "DbErrorKind",
    "NormalizedDbError",
    "normalize_db_error",
    "db_error_handler",
    "map_db_error",
]

# refdata/
# │
# ├── exceptions/
# │   ├── base.py                    # App-level errors (ErrorKind, RepositoryError, NotFoundError, ...)
# │   ├── integrity_classifier.py    # Driver-level errors -> NormalizedDbError
# │   └── mapper.py                  # NormalizedDbError -> app-level errors, db_error_handler
