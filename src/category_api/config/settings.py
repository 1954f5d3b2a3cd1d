from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # HTTP server
    APP_HOST: str = "localhost"
    APP_PORT: int = 3000

    # Shared secret expected in the X-API-KEY header
    API_KEY: str = "AUTH"

    # Database configuration
    # A full SQLAlchemy URL; when set it wins over the POSTGRES_* parts below.
    DATABASE_URL_OVERRIDE: str | None = None

    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "categories"

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    DB_CREATE_TABLES: bool = True

    # Connection pool
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 15
    DB_POOL_RECYCLE: int = 3600   # seconds (60 min connection lifetime)
    DB_POOL_TIMEOUT: int = 30     # seconds to wait for a free connection

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/category-api")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        - `DATABASE_URL_OVERRIDE`, when set, is returned as-is.
        - With `TESTING=True` and `TEST_POSTGRES_DB` set, the URL points at the test database.
        - Otherwise the URL is built from the POSTGRES_* parts.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        db_name = self.POSTGRES_DB
        if self.TESTING and self.TEST_POSTGRES_DB:
            db_name = self.TEST_POSTGRES_DB

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{db_name}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before the Literal check runs,
        so `LOG_LEVEL=debug` is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        # .env located next to the package root (src/category_api/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings object,
# so it is cached with @lru_cache().
@lru_cache()
def get_settings() -> Settings:
    return Settings()
