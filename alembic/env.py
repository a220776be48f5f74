"""
Alembic environment configuration.
Uses the same DatabaseConfig (and SSL handling) as the application by
borrowing DbManager's async engine.
"""

import asyncio
import os
import sys
from logging.config import fileConfig
from alembic import context
from dotenv import load_dotenv
from sqlalchemy.engine import Connection

# Add project to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from app.db import DbManager
from app.db.models import DbBaseModel
from common.config import get_config, initialize_config
from common.api_error import ConfigurationError

load_dotenv()
try:
    initialize_config()
except ConfigurationError as e:
    # Can't use logger yet, but that's OK - this is a fatal startup error
    print(f"FATAL: Configuration error:\n{e}")
    sys.exit(1)

# Alembic Config object
config = context.config

app_config = get_config()
if not app_config.database:
    raise RuntimeError("Database configuration not found in environment (DB_DRIVER)")

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# Target metadata for autogenerate
target_metadata = DbBaseModel.metadata


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.
    Calls to context.execute() emit SQL to script output.
    """
    context.configure(
        url=app_config.database.get_connection_url(include_password=True),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=app_config.database.driver.is_sqlite,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # SQLite cannot ALTER most constraints in place
        render_as_batch=app_config.database.driver.is_sqlite,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Run migrations over the application's async engine."""
    db_manager = DbManager.from_config(app_config.database)
    try:
        async with db_manager.engine.connect() as connection:
            await connection.run_sync(do_run_migrations)
            await connection.commit()
    finally:
        await db_manager.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
