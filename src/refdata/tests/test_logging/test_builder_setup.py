# src/refdata/tests/test_logging/test_builder_setup.py
import logging

from refdata.core.logging.builder import make_dict_config, setup_logging
from refdata.core.logging.filters import RequestIdFilter


# Create a minimal Settings-like object for testing
class DummySettings:
    APP_NAME = "reference-data-api"
    ENV = "development"
    LOG_FORMAT = "json"
    LOG_LEVEL = "INFO"
    LOG_TO_STDOUT = False
    LOG_DIR = None  # will be set in test
    LOG_MAX_BYTES = 1000
    LOG_BACKUP_COUNT = 1
    ENABLE_SQL_LOGGING = False


def test_file_handlers_when_not_logging_to_stdout(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path

    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"].endswith("refdata.log")
    assert cfg["handlers"]["error_file"]["level"] == "ERROR"
    assert cfg["handlers"]["console"]["formatter"] == "json"
    assert cfg["formatters"]["json"]["service"] == "reference-data-api"


def test_stdout_only_uses_error_console(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path
    settings.LOG_TO_STDOUT = True
    settings.LOG_FORMAT = "text"

    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "error_console"}
    assert cfg["handlers"]["console"]["formatter"] == "standard"
    assert cfg["handlers"]["error_console"]["stream"] == "ext://sys.stderr"


def test_sql_logging_switch():
    settings = DummySettings()
    settings.LOG_TO_STDOUT = True

    assert make_dict_config(settings)["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    settings.ENABLE_SQL_LOGGING = True
    assert make_dict_config(settings)["loggers"]["sqlalchemy.engine"]["level"] == "INFO"


def test_every_handler_redacts_and_stamps_request_id(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path

    for handler in make_dict_config(settings)["handlers"].values():
        assert handler["filters"] == ["request_id", "redact"]


def test_setup_logging_creates_log_dir(tmp_path):
    settings = DummySettings()
    settings.LOG_DIR = tmp_path / "logs"
    assert not settings.LOG_DIR.exists()

    setup_logging(settings)
    try:
        assert settings.LOG_DIR.exists()
        root = logging.getLogger()
        assert root.handlers
        # applying twice keeps a single root-level request id filter
        setup_logging(settings)
        assert sum(isinstance(f, RequestIdFilter) for f in root.filters) == 1
    finally:
        # hand the session back its stdout configuration
        from refdata.config import get_settings
        setup_logging(get_settings())
