import pytest

from common.api_error import ConfigurationError
from common.config import DbDriver, Environment, initialize_config, load_app_config

BASE_ENV = {
    "ENVIRONMENT": "development",
    "APP_TITLE": "Healthcare Admin",
    "APP_VERSION": "1.2.3",
    "LOG_LEVEL": "INFO",
    "JWT_SECRET": "dev-secret",
    "DB_DRIVER": "aiosqlite",
    "DB_NAME": "./dev.db",
}


@pytest.fixture
def env(monkeypatch):
    for key in (
        "DEFAULT_ADMIN_EMAIL",
        "DEFAULT_ADMIN_PASSWORD",
        "TOKEN_TTL_HOURS",
        "CORS_ORIGINS",
        "DB_AUTO_CREATE",
        "SLOW_REQUEST_THRESHOLD_MS",
    ):
        monkeypatch.delenv(key, raising=False)
    for key, value in BASE_ENV.items():
        monkeypatch.setenv(key, value)
    return monkeypatch


def test_loads_development_defaults(env) -> None:
    config = load_app_config()

    assert config.environment is Environment.DEVELOPMENT
    assert config.database.driver is DbDriver.AIOSQLITE
    assert config.database.get_connection_url() == "sqlite+aiosqlite:///./dev.db"
    assert config.auth.token_ttl_hours == 24
    assert config.auth.default_admin_email == "admin@healthcare.example.com"
    assert config.api.cors_origins == ["*"]


def test_reads_overrides(env) -> None:
    env.setenv("TOKEN_TTL_HOURS", "8")
    env.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    env.setenv("DB_AUTO_CREATE", "true")

    config = load_app_config()
    assert config.auth.token_ttl_hours == 8
    assert config.api.cors_origins == ["http://a.test", "http://b.test"]
    assert config.database.auto_create is True


def test_missing_secret_is_a_configuration_error(env) -> None:
    env.delenv("JWT_SECRET")
    with pytest.raises(ConfigurationError):
        initialize_config()


def test_bad_boolean_is_a_configuration_error(env) -> None:
    env.setenv("DB_AUTO_CREATE", "maybe")
    with pytest.raises(ConfigurationError):
        load_app_config()


def test_production_rejects_weak_settings(env) -> None:
    env.setenv("ENVIRONMENT", "production")
    env.setenv("DEFAULT_ADMIN_EMAIL", "ops@clinic.example.com")
    env.setenv("DEFAULT_ADMIN_PASSWORD", "a-real-password")

    # dev-secret is far below the production minimum
    with pytest.raises(ConfigurationError) as exc_info:
        initialize_config()
    assert any("JWT_SECRET" in problem for problem in exc_info.value.problems)


def test_postgres_requires_host(env) -> None:
    env.setenv("DB_DRIVER", "asyncpg")
    env.delenv("DB_HOST", raising=False)
    with pytest.raises(ConfigurationError):
        load_app_config()
