# src/category_api/tests/test_config/test_settings.py
from category_api.config.settings import Settings


def test_database_url_built_from_parts():
    settings = Settings(
        POSTGRES_USERNAME="app",
        POSTGRES_PASSWORD="pw",
        POSTGRES_HOST="db",
        POSTGRES_PORT=5433,
        POSTGRES_DB="categories",
    )

    assert settings.DATABASE_URL == "postgresql+psycopg://app:pw@db:5433/categories"


def test_database_url_uses_test_db_when_testing():
    settings = Settings(TESTING=True, TEST_POSTGRES_DB="categories_test")

    assert settings.DATABASE_URL.endswith("/categories_test")


def test_override_wins():
    settings = Settings(DATABASE_URL_OVERRIDE="sqlite+aiosqlite:///:memory:", TESTING=True, TEST_POSTGRES_DB="x")

    assert settings.DATABASE_URL == "sqlite+aiosqlite:///:memory:"


def test_log_settings_are_normalized():
    settings = Settings(LOG_LEVEL=" debug ", LOG_FORMAT="JSON")

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "json"


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.API_KEY == "AUTH"
    assert settings.APP_PORT == 3000
