# src/refdata/tests/test_config/test_settings.py
from types import SimpleNamespace

import bcrypt
import pytest
from pydantic import ValidationError

from refdata.config import EngineLimits, Settings
from refdata.core.security import hash_password
from refdata.validators.config_validators import positive_int_or_default, to_lowercase, to_uppercase

BASE = {
    "POSTGRES_USERNAME": "app",
    "POSTGRES_PASSWORD": "pw",
    "POSTGRES_HOST": "db",
    "POSTGRES_DB": "refdata",
}


def make_settings(monkeypatch, **env) -> Settings:
    for key in (
        "APP_PAGINATION_MAXIMUM_LIMIT",
        "APP_PAGINATION_MINIMUM_LIMIT",
        "APP_PAGINATION_OFFSET",
        "APP_TRANSACTIONS_BATCH_SIZE",
        "DATABASE_URL_OVERRIDE",
        "TESTING",
        "TEST_POSTGRES_DB",
    ):
        monkeypatch.delenv(key, raising=False)
    for key, value in {**BASE, **env}.items():
        monkeypatch.setenv(key, value)
    # _env_file=None: only the variables set above count
    return Settings(_env_file=None)


@pytest.mark.parametrize(
    "value, expected",
    [(None, 7), ("", 7), ("abc", 7), ("0", 7), ("-5", 7), (True, 7), ("25", 25), (" 3 ", 3), (40, 40)],
)
def test_positive_int_or_default(value, expected):
    assert positive_int_or_default(value, 7) == expected


def test_case_helpers():
    assert to_uppercase(" debug ") == "DEBUG"
    assert to_lowercase(" JSON ") == "json"
    assert to_uppercase(None) is None


def test_engine_limit_defaults(monkeypatch):
    limits = make_settings(monkeypatch).engine_limits()
    assert limits == EngineLimits(max_limit=100, min_limit=10, default_offset=0, batch_size=1000)


def test_unusable_engine_limits_fall_back(monkeypatch):
    settings = make_settings(
        monkeypatch,
        APP_PAGINATION_MAXIMUM_LIMIT="0",
        APP_PAGINATION_MINIMUM_LIMIT="abc",
        APP_TRANSACTIONS_BATCH_SIZE="-1",
    )
    limits = settings.engine_limits()

    assert limits.max_limit == 100
    assert limits.min_limit == 10
    assert limits.batch_size == 1000


def test_engine_limits_from_env(monkeypatch):
    limits = make_settings(
        monkeypatch, APP_PAGINATION_MAXIMUM_LIMIT="500", APP_TRANSACTIONS_BATCH_SIZE="250"
    ).engine_limits()

    assert limits.max_limit == 500
    assert limits.batch_size == 250


def test_engine_limits_are_immutable(monkeypatch):
    limits = make_settings(monkeypatch).engine_limits()
    with pytest.raises(ValidationError):
        limits.batch_size = 1


def test_database_url_from_parts(monkeypatch):
    settings = make_settings(monkeypatch)
    assert settings.DATABASE_URL == "postgresql+psycopg://app:pw@db:5432/refdata"


def test_database_url_uses_test_database_when_testing(monkeypatch):
    settings = make_settings(monkeypatch, TESTING="true", TEST_POSTGRES_DB="refdata_test")
    assert settings.DATABASE_URL.endswith("/refdata_test")


def test_database_url_override_wins(monkeypatch):
    settings = make_settings(monkeypatch, DATABASE_URL_OVERRIDE="sqlite+aiosqlite:///./local.db")
    assert settings.DATABASE_URL == "sqlite+aiosqlite:///./local.db"


def test_log_settings_are_normalized(monkeypatch):
    settings = make_settings(monkeypatch, LOG_LEVEL="debug", LOG_FORMAT="TEXT")
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"


def test_password_hash_round_trip():
    hashed = hash_password("Str0ng!Pass", rounds=4)

    assert hashed.startswith("$2b$04$")
    assert bcrypt.checkpw(b"Str0ng!Pass", hashed.encode("utf-8"))
    assert not bcrypt.checkpw(b"wrong", hashed.encode("utf-8"))


def test_rounds_default_to_setting(monkeypatch):
    monkeypatch.setattr("refdata.core.security.get_settings", lambda: SimpleNamespace(BCRYPT_ROUNDS=5))
    assert hash_password("Str0ng!Pass").startswith("$2b$05$")
