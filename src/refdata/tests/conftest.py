"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and core utilities
that are needed across ALL types of tests (repositories, exceptions, APIs, logging).

Domain-specific fixtures (repositories, seeded rows) are located in:
- tests/test_fixtures/repository_fixtures.py

Every test gets its own in-memory SQLite database. Repositories and route
handlers really commit and roll back (bulk operations depend on it), so a
fresh database per test is what keeps tests isolated.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from typing import AsyncGenerator

# -------------------------------
# Environment defaults (IMPORTANT)
# -------------------------------
# Settings require the POSTGRES_* variables; provide harmless values before any
# refdata module builds a Settings instance. Real values from the environment win.
os.environ.setdefault("POSTGRES_USERNAME", "refdata")
os.environ.setdefault("POSTGRES_PASSWORD", "refdata")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_DB", "refdata")
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_TO_STDOUT", "true")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block above the refdata imports so model/metadata registration stays quiet.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from refdata.config import EngineLimits, get_engine_limits, get_settings
from refdata.core.logging.builder import setup_logging
from refdata.database.base import Base
from refdata.database.session import get_async_session
import refdata.models  # noqa: F401 – import to register models with Base.metadata

settings = get_settings()
logger = logging.getLogger(__name__)

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the entire test session so the same
    formatters and filters used by the app are active while tests run.
    """
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    # StaticPool: one shared connection, otherwise each checkout sees a new empty :memory: db
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool, echo=False)
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    maker = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session


@pytest.fixture()
def limits() -> EngineLimits:
    """Small batches so multi-batch behaviour shows up with a handful of rows."""
    return EngineLimits(max_limit=50, min_limit=10, default_offset=0, batch_size=2)


# ------------------------------------------------------------------------------------------------
# API FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def app(db_session: AsyncSession, limits: EngineLimits):
    from refdata.main import create_app

    application = create_app(settings)

    async def _session_override():
        yield db_session

    application.dependency_overrides[get_async_session] = _session_override
    application.dependency_overrides[get_engine_limits] = lambda: limits
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    # raise_app_exceptions=False: Starlette re-raises after the 500 handler has produced a response
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# Repository test fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    currency_repository,
    country_repository,
    language_repository,
    city_repository,
    location_repository,
    organization_repository,
    contact_repository,
    user_repository,
    create_currency,
    create_country,
    create_city,
    create_organization,
    create_contact,
    create_user,
    sample_currency,
    sample_country,
    sample_countries,
)
