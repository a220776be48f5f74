# app/db/db_manager.py
"""
Database manager focused on connection management and session handling.
Schema migrations are handled separately via Alembic CLI.

Design principles:
- Single responsibility: Connection/session management only
- Fail fast: Invalid configuration crashes on startup
- Explicit over implicit: tables are only auto-created when DB_AUTO_CREATE is set
"""

import time
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
    AsyncEngine,
)
from sqlalchemy import text
from sqlalchemy.pool import NullPool
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Any, Optional
from common import DatabaseConfig
from common.logger import get_app_logger
from .models import DbBaseModel

logger = get_app_logger(__name__)


class DbManager:
    """
    Database connection and session manager.

    Responsibilities:
    - Async engine/connection pool management
    - Session lifecycle management
    - Health checks
    - Connection and migration validation

    NOT responsible for:
    - Schema migration (use Alembic CLI); create_schema() exists for
      development and tests only

    Usage:
        # Startup
        db_manager = DbManager.from_config(config.database)
        await db_manager.verify_connection()

        # Runtime
        async with db_manager.session() as session:
            result = await session.execute(...)

        # Shutdown
        await db_manager.dispose()
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        echo: bool = False,
        connect_args: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize database manager.

        Args:
            url: Database URL (postgresql+asyncpg:// or sqlite+aiosqlite://)
            pool_size: Number of persistent connections
            max_overflow: Additional connections beyond pool_size
            pool_timeout: Seconds to wait for connection from pool
            pool_recycle: Recycle connections after N seconds
            pool_pre_ping: Test connections before using
            echo: Log all SQL statements (use for debugging)
            connect_args: Driver-specific connection arguments (SSL, etc.)
        """
        self._validate_url(url)
        self.is_sqlite = url.startswith("sqlite")

        if self.is_sqlite:
            # One connection per session; SQLite has no server-side pool
            self.engine: AsyncEngine = create_async_engine(
                url=url,
                echo=echo,
                poolclass=NullPool,
                connect_args=connect_args or {},
            )
        else:
            self.engine = create_async_engine(
                url=url,
                echo=echo,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
                pool_pre_ping=pool_pre_ping,
                connect_args=connect_args or {},
            )

        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info(
            "DbManager initialized",
            sqlite=self.is_sqlite,
            pool_size=None if self.is_sqlite else pool_size,
            max_overflow=None if self.is_sqlite else max_overflow,
        )

    @classmethod
    def from_config(cls, config: DatabaseConfig, **kwargs: Any) -> "DbManager":
        """
        Create DbManager from DatabaseConfig with SSL support.

        Example:
            db_manager = DbManager.from_config(config.database)
        """
        url = config.get_connection_url(include_password=True)
        connect_args = kwargs.pop("connect_args", {})

        ssl_mode = config.ssl_mode.value if config.ssl_mode else None
        if ssl_mode and config.driver.value == "asyncpg":
            import ssl as ssl_module

            if ssl_mode == "disable":
                connect_args["ssl"] = False
            elif config.requires_ssl():
                ssl_context = ssl_module.create_default_context()
                if config.ssl_ca_path:
                    ssl_context.load_verify_locations(cafile=str(config.ssl_ca_path))
                if config.ssl_cert_path and config.ssl_key_path:
                    ssl_context.load_cert_chain(
                        certfile=str(config.ssl_cert_path),
                        keyfile=str(config.ssl_key_path),
                    )
                if ssl_mode == "verify-full":
                    ssl_context.check_hostname = True
                    ssl_context.verify_mode = ssl_module.CERT_REQUIRED
                else:
                    ssl_context.check_hostname = False
                    if ssl_mode == "require":
                        ssl_context.verify_mode = ssl_module.CERT_NONE

                connect_args["ssl"] = ssl_context

        return cls(
            url=url,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            pool_recycle=config.pool_recycle,
            connect_args=connect_args,
            **kwargs,
        )

    @staticmethod
    def _validate_url(url: str) -> None:
        """Validate database URL format."""
        if not url or not url.startswith(
            ("postgresql+asyncpg://", "postgresql+psycopg://", "sqlite+aiosqlite://")
        ):
            raise ValueError(
                f"Invalid database URL. Expected postgresql+asyncpg://, "
                f"postgresql+psycopg:// or sqlite+aiosqlite://, got: {url[:20]}..."
            )

    async def verify_connection(self) -> None:
        """
        Verify database connection on startup.
        Fails fast if connection cannot be established.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("✓ Database connection verified")
        except Exception as e:
            logger.error("❌ Database connection failed", error=str(e))
            raise ConnectionError(f"Failed to connect to database: {e}") from e

    async def verify_migrations_current(self) -> str:
        """
        Check that Alembic has been run against this database.

        Returns:
            The current migration revision

        Raises:
            RuntimeError: If alembic_version table doesn't exist
        """
        if self.is_sqlite:
            exists_query = (
                "SELECT COUNT(*) FROM sqlite_master "
                "WHERE type = 'table' AND name = 'alembic_version'"
            )
        else:
            exists_query = (
                "SELECT COUNT(*) FROM information_schema.tables "
                "WHERE table_name = 'alembic_version'"
            )

        async with self.engine.connect() as conn:
            table_exists = (await conn.execute(text(exists_query))).scalar()
            if not table_exists:
                raise RuntimeError(
                    "alembic_version table not found. "
                    "Have you run 'alembic upgrade head'?"
                )

            result = await conn.execute(text("SELECT version_num FROM alembic_version"))
            current_version = result.scalar()

        if not current_version:
            raise RuntimeError("alembic_version is empty; run 'alembic upgrade head'")

        logger.info("Current migration version", revision=current_version)
        return str(current_version)

    async def create_schema(self) -> None:
        """Create every table from model metadata. Development and tests only."""
        async with self.engine.begin() as conn:
            await conn.run_sync(DbBaseModel.metadata.create_all)
        logger.warning("Schema created from model metadata (DB_AUTO_CREATE)")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional database session.

        Automatically commits on success, rolls back on exception.

        Usage:
            async with db_manager.session() as session:
                worker = await session.get(Worker, worker_id)
                worker.salary = 6000
                # Commits automatically on exit
        """
        session = self.session_maker()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.warning("Session rolled back", error_type=type(e).__name__)
            raise
        finally:
            await session.close()

    async def health_check(self) -> dict[str, Any]:
        """
        Health check with round-trip latency.

        Example:
            {"healthy": True, "response_time_ms": 5.2, "pool_status": "..."}
        """
        start = time.perf_counter()
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            return {"healthy": False, "error": str(e)}

        return {
            "healthy": True,
            "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
            "pool_status": self.engine.pool.status(),
        }

    async def dispose(self) -> None:
        """
        Dispose of all connections and cleanup resources.
        Call this on application shutdown.
        """
        await self.engine.dispose()
        logger.info("✓ Database connections disposed")


__all__ = ["DbManager"]
