# common/config/app_config.py
"""
Complete application configuration with validation.
Database configuration with SSL support, auth and API settings.
"""

from typing import Optional, Any
from pydantic import BaseModel, Field, field_validator, model_validator, SecretStr
from .config_types import EnvBool, EnvLogLevel, DbDriver, SslMode, Environment
from .env_config import (
    require_env,
    get_env,
    get_env_int,
    get_env_bool,
    get_env_list,
)
from .logging_config import LoggingConfig
from pathlib import Path

_DEV_ADMIN_EMAIL = "admin@healthcare.example.com"
_DEV_ADMIN_PASSWORD = "admin123"


class DatabaseConfig(BaseModel):
    """
    Database configuration with SSL/TLS support.

    PostgreSQL needs host and port; for SQLite `name` is the database file
    path and the pool settings are ignored.
    """

    driver: DbDriver = Field(...)
    name: str = Field(..., min_length=1, description="Database name or SQLite file")

    host: Optional[str] = Field(default=None, min_length=1)
    port: Optional[int] = Field(default=None, gt=0, le=65535)

    # Authentication (keep separate from URL for security)
    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[SecretStr] = Field(default=None)  # Pydantic hides this in logs

    # Connection pooling
    pool_size: int = Field(default=10, ge=1, le=100)
    max_overflow: int = Field(default=20, ge=0, le=100)
    pool_timeout: int = Field(default=30, ge=1, le=300)
    pool_recycle: int = Field(default=3600, ge=300)  # Min 5 minutes

    # SSL/TLS Configuration
    ssl_mode: Optional[SslMode] = Field(default=None)
    ssl_cert_path: Optional[Path] = Field(default=None)
    ssl_key_path: Optional[Path] = Field(default=None)
    ssl_ca_path: Optional[Path] = Field(default=None)

    # Create tables on startup instead of requiring Alembic (dev/test only)
    auto_create: bool = False

    model_config = {"frozen": True}

    @field_validator("ssl_cert_path", "ssl_key_path", "ssl_ca_path")
    @classmethod
    def validate_ssl_paths(cls, v: Optional[Path]) -> Optional[Path]:
        """Validate SSL certificate paths exist."""
        if v is not None and not v.exists():
            raise ValueError(f"SSL file not found: {v}")
        return v

    @model_validator(mode="after")
    def validate_server_address(self) -> "DatabaseConfig":
        if not self.driver.is_sqlite and (self.host is None or self.port is None):
            raise ValueError(f"host and port are required for driver {self.driver.value}")
        return self

    def get_connection_url(self, include_password: bool = False) -> str:
        """
        Build SQLAlchemy connection URL.

        Args:
            include_password: If True, include password in URL (use for actual connections)
                            If False, mask it (use for logging)
        """
        if self.driver.is_sqlite:
            return f"sqlite+aiosqlite:///{self.name}"

        if self.username:
            if include_password and self.password:
                auth = f"{self.username}:{self.password.get_secret_value()}"
            else:
                auth = f"{self.username}:****"
            return f"postgresql+{self.driver.value}://{auth}@{self.host}:{self.port}/{self.name}"

        return f"postgresql+{self.driver.value}://{self.host}:{self.port}/{self.name}"

    def requires_ssl(self) -> bool:
        """Check if SSL is required based on configuration."""
        return self.ssl_mode in [
            SslMode.REQUIRE,
            SslMode.VERIFY_CA,
            SslMode.VERIFY_FULL,
        ]

    def to_dict_safe(self) -> dict[str, Any]:
        """Convert to dict with sensitive data masked (safe for logging)."""
        data = self.model_dump()
        if data.get("password"):
            data["password"] = "****"
        return data


class AuthConfig(BaseModel):
    """
    Token signing and default admin bootstrap settings.
    """

    jwt_secret: SecretStr
    jwt_algorithm: str = Field(default="HS256", pattern=r"^HS(256|384|512)$")
    token_ttl_hours: int = Field(default=24, gt=0, le=24 * 30)
    default_admin_email: str = Field(..., min_length=3)
    default_admin_password: SecretStr

    model_config = {"frozen": True}

    @field_validator("jwt_secret")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("JWT secret must not be empty")
        return v


class ApiConfig(BaseModel):
    """
    HTTP surface configuration.
    """

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    slow_request_threshold_ms: float = Field(default=1000.0, gt=0)

    model_config = {"frozen": True}


class AppConfig(BaseModel):
    """
    Complete application configuration.

    All configuration is loaded from environment variables and validated
    at startup. Invalid configuration will fail fast with clear error messages.
    """

    app_title: str = Field(..., min_length=1)
    app_version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")  # Semantic versioning
    environment: Environment

    logging: LoggingConfig
    auth: AuthConfig
    database: Optional[DatabaseConfig] = None
    api: ApiConfig = Field(default_factory=ApiConfig)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_production_settings(self) -> "AppConfig":
        """
        Validate production-specific requirements.
        """
        if self.environment.is_production:
            if self.database is None:
                raise ValueError("Database config required in production")
            if self.database.auto_create:
                raise ValueError("DB_AUTO_CREATE not allowed in production")
            if self.logging.log_level == EnvLogLevel.DEBUG:
                raise ValueError("DEBUG log level not allowed in production")
            if len(self.auth.jwt_secret.get_secret_value()) < 32:
                raise ValueError("JWT_SECRET must be at least 32 characters in production")
            if self.auth.default_admin_password.get_secret_value() == _DEV_ADMIN_PASSWORD:
                raise ValueError("DEFAULT_ADMIN_PASSWORD must be changed in production")
        return self


def load_database_config(environment: Environment) -> Optional[DatabaseConfig]:
    """
    Load database configuration from environment.

    Environment variables:
    Always:
    - DB_DRIVER: Database driver (asyncpg, psycopg, aiosqlite); unset means no database
    - DB_NAME: Database name (SQLite: file path)
    - DB_AUTO_CREATE: true to create tables at startup (dev/test)

    PostgreSQL drivers, required:
    - DB_HOST, DB_PORT
    - DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_TIMEOUT, DB_POOL_RECYCLE

    PostgreSQL drivers, optional (dev) / required (prod):
    - DB_USER, DB_PASSWORD, DB_SSL_MODE

    Optional:
    - DB_SSL_CERT, DB_SSL_KEY, DB_SSL_CA
    """
    driver_str = get_env("DB_DRIVER")
    if not driver_str:
        return None

    try:
        driver = DbDriver(driver_str)
    except ValueError:
        valid_drivers = [d.value for d in DbDriver]
        raise ValueError(
            f"Invalid DB_DRIVER: {driver_str}. Must be one of: {valid_drivers}"
        )

    name = require_env("DB_NAME")
    auto_create = get_env_bool("DB_AUTO_CREATE", EnvBool.FALSE)

    if driver.is_sqlite:
        return DatabaseConfig(driver=driver, name=name, auto_create=auto_create)

    # Required fields (no defaults!)
    host = require_env("DB_HOST")
    port_str = require_env("DB_PORT")
    pool_size_str = require_env("DB_POOL_SIZE")
    max_overflow_str = require_env("DB_MAX_OVERFLOW")
    pool_timeout_str = require_env("DB_POOL_TIMEOUT")
    pool_recycle_str = require_env("DB_POOL_RECYCLE")

    if environment.is_production:
        # Production: credentials are REQUIRED
        username = require_env("DB_USER")
        password_str: Optional[str] = require_env("DB_PASSWORD")
        ssl_mode_str: Optional[str] = require_env("DB_SSL_MODE")
    else:
        username = get_env("DB_USER")
        password_str = get_env("DB_PASSWORD")
        ssl_mode_str = get_env("DB_SSL_MODE")

    ssl_mode: Optional[SslMode] = None
    if ssl_mode_str:
        try:
            ssl_mode = SslMode(ssl_mode_str)
        except ValueError:
            valid_modes = [m.value for m in SslMode]
            raise ValueError(
                f"Invalid DB_SSL_MODE: {ssl_mode_str}. Must be one of: {valid_modes}"
            )

    ssl_cert = get_env("DB_SSL_CERT")
    ssl_key = get_env("DB_SSL_KEY")
    ssl_ca = get_env("DB_SSL_CA")

    return DatabaseConfig(
        driver=driver,
        host=host,
        port=int(port_str),
        name=name,
        username=username,
        password=SecretStr(password_str) if password_str else None,
        pool_size=int(pool_size_str),
        max_overflow=int(max_overflow_str),
        pool_timeout=int(pool_timeout_str),
        pool_recycle=int(pool_recycle_str),
        ssl_mode=ssl_mode,
        ssl_cert_path=Path(ssl_cert) if ssl_cert else None,
        ssl_key_path=Path(ssl_key) if ssl_key else None,
        ssl_ca_path=Path(ssl_ca) if ssl_ca else None,
        auto_create=auto_create,
    )


def load_auth_config(environment: Environment) -> AuthConfig:
    """
    Environment variables:
    - JWT_SECRET (required)
    - TOKEN_TTL_HOURS (default 24)
    - DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD (required in production)
    """
    if environment.is_production:
        admin_email = require_env("DEFAULT_ADMIN_EMAIL")
        admin_password = require_env("DEFAULT_ADMIN_PASSWORD")
    else:
        admin_email = get_env("DEFAULT_ADMIN_EMAIL") or _DEV_ADMIN_EMAIL
        admin_password = get_env("DEFAULT_ADMIN_PASSWORD") or _DEV_ADMIN_PASSWORD

    return AuthConfig(
        jwt_secret=SecretStr(require_env("JWT_SECRET")),
        token_ttl_hours=get_env_int("TOKEN_TTL_HOURS", 24),
        default_admin_email=admin_email,
        default_admin_password=SecretStr(admin_password),
    )


def load_api_config() -> ApiConfig:
    return ApiConfig(
        cors_origins=get_env_list("CORS_ORIGINS", "*"),
        slow_request_threshold_ms=float(get_env("SLOW_REQUEST_THRESHOLD_MS") or 1000),
    )


def load_app_config() -> AppConfig:
    """
    Load complete application configuration.

    Raises:
        ValidationError: If configuration is invalid
        ConfigurationError: If required env vars are missing
    """
    from .logging_config import load_logging_config

    env_str = require_env("ENVIRONMENT")

    try:
        environment = Environment(env_str)
    except ValueError:
        valid_envs = [e.value for e in Environment]
        raise ValueError(
            f"Invalid ENVIRONMENT: {env_str}. Must be one of: {valid_envs}"
        )

    return AppConfig(
        app_title=require_env("APP_TITLE"),
        app_version=require_env("APP_VERSION"),
        environment=environment,
        logging=load_logging_config(),
        auth=load_auth_config(environment),
        database=load_database_config(environment),
        api=load_api_config(),
    )


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "AuthConfig",
    "ApiConfig",
    "load_app_config",
]
