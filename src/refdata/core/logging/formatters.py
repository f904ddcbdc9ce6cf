import json
import logging
from importlib.metadata import PackageNotFoundError, version
from logging import LogRecord
from typing import Any

DISTRIBUTION_NAME = "reference-data-api"

# Attributes every LogRecord has; anything else on a record came from `extra=`.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime", "taskName"}


def get_project_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # running from a source checkout that was never installed
        return "unknown"


PROJECT_VERSION = get_project_version()


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line: fixed envelope keys plus every `extra=` field.

    Values that are not JSON-serializable (UUIDs, datetimes) are stringified.
    """

    def __init__(self, *, env: str | None = None, service: str = "reference-data-api", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_record or key.startswith("_"):
                continue
            log_record[key] = value

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Human-readable, colour-coded single line for local development."""

    COLOR_CODES = {
        "DEBUG": "\033[36m",     # cyan
        "INFO": "\033[32m",      # green
        "WARNING": "\033[33m",   # yellow
        "ERROR": "\033[31m",     # red
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]

        line = (
            f"{self.formatTime(record, self.datefmt)} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<36} | "
            f"{getattr(record, 'request_id', '-'):<36} | "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            line = line + "\n" + self.formatException(record.exc_info)
        return line
