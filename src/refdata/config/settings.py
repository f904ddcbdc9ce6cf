from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, ConfigDict, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, positive_int_or_default


# Fallbacks used when the pagination / batching knobs are unset or unusable.
DEFAULT_MAX_LIMIT = 100
DEFAULT_MIN_LIMIT = 10
DEFAULT_OFFSET = 0
DEFAULT_BATCH_SIZE = 1000


class EngineLimits(BaseModel):
    """
    Immutable pagination and batching limits shared by every resource repository.

    Resolved once at startup (see `Settings.engine_limits()`) and handed to each
    repository at construction time.
    """
    model_config = ConfigDict(frozen=True)

    max_limit: int = DEFAULT_MAX_LIMIT
    min_limit: int = DEFAULT_MIN_LIMIT
    default_offset: int = DEFAULT_OFFSET
    batch_size: int = DEFAULT_BATCH_SIZE


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"
    APP_NAME: str = "reference-data-api"
    APP_HOST: str = "localhost"
    APP_PORT: int = 3000

    # Database configuration
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str
    POSTGRES_PASSWORD: str
    POSTGRES_HOST: str
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # Full URL override (e.g. sqlite+aiosqlite:///./local.db); wins over the POSTGRES_* parts
    DATABASE_URL_OVERRIDE: str | None = None

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Pagination / batching
    APP_PAGINATION_MAXIMUM_LIMIT: int = DEFAULT_MAX_LIMIT
    APP_PAGINATION_MINIMUM_LIMIT: int = DEFAULT_MIN_LIMIT
    APP_PAGINATION_OFFSET: int = DEFAULT_OFFSET
    APP_TRANSACTIONS_BATCH_SIZE: int = DEFAULT_BATCH_SIZE

    # Password hashing (users)
    BCRYPT_ROUNDS: int = 12

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/refdata")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        - `DATABASE_URL_OVERRIDE` is used verbatim when set.
        - With `TESTING=True` and `TEST_POSTGRES_DB` set, the test database name is used
          so test runs never touch the main database.
        - Otherwise the URL is assembled from the POSTGRES_* settings.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        database = self.POSTGRES_DB
        if self.TESTING and self.TEST_POSTGRES_DB:
            database = self.TEST_POSTGRES_DB

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{database}"
        )

    def engine_limits(self) -> EngineLimits:
        return EngineLimits(
            max_limit=self.APP_PAGINATION_MAXIMUM_LIMIT,
            min_limit=self.APP_PAGINATION_MINIMUM_LIMIT,
            default_offset=self.APP_PAGINATION_OFFSET,
            batch_size=self.APP_TRANSACTIONS_BATCH_SIZE,
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        # dictConfig expects upper-case level names
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator("APP_PAGINATION_MAXIMUM_LIMIT", mode="before")
    @classmethod
    def fallback_max_limit(cls, v) -> int:
        return positive_int_or_default(v, DEFAULT_MAX_LIMIT)

    @field_validator("APP_PAGINATION_MINIMUM_LIMIT", mode="before")
    @classmethod
    def fallback_min_limit(cls, v) -> int:
        return positive_int_or_default(v, DEFAULT_MIN_LIMIT)

    @field_validator("APP_PAGINATION_OFFSET", mode="before")
    @classmethod
    def fallback_offset(cls, v) -> int:
        return positive_int_or_default(v, DEFAULT_OFFSET)

    @field_validator("APP_TRANSACTIONS_BATCH_SIZE", mode="before")
    @classmethod
    def fallback_batch_size(cls, v) -> int:
        return positive_int_or_default(v, DEFAULT_BATCH_SIZE)

    model_config = SettingsConfigDict(
        # .env lives at the repository root (next to pyproject.toml)
        env_file=str(Path(__file__).resolve().parents[3] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings never change after startup, so a single cached instance is shared.
@lru_cache()
def get_settings() -> Settings:
    return Settings()


@lru_cache()
def get_engine_limits() -> EngineLimits:
    return get_settings().engine_limits()
