"""
Logging filters.

- RequestIdFilter stamps every record with the current request id so formatters can
  reference `%(request_id)s` without a KeyError. The id lives in a ContextVar, which
  follows the request across `await` boundaries and asyncio tasks.
- RedactFilter masks sensitive values passed through `extra=` (e.g. a user payload
  logged at DEBUG) before any handler formats them.
"""
import logging
from logging import LogRecord
import contextvars
from typing import Any

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the request id for the current context; keep the token to reset it."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    def filter(self, record: LogRecord) -> bool:
        # An explicit extra={"request_id": ...} wins over the context value
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "password_hash",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "database_url",
        "postgres_password",
    }

    def _scrub(self, value: Any) -> Any:
        # one level deep: payload dicts passed as a single extra
        if isinstance(value, dict):
            return {k: (REDACTED if str(k).lower() in self.SENSITIVE else v) for k, v in value.items()}
        return value

    def filter(self, record: LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
            elif isinstance(value, dict) and key not in ("args", "msg"):
                record.__dict__[key] = self._scrub(value)
        return True
