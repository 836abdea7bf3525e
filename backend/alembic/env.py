"""
Alembic Migration Environment — Bookmarks API
==============================================

What:  Runs migrations for the `bookmarks` table through the async engine.
How:   The URL comes from bookmark_api.config.settings (never from
       alembic.ini), so migrations and the running service always point at
       the same database. Online mode bridges the async engine into
       Alembic's synchronous API with connection.run_sync().

Usage (from backend/):
    alembic upgrade head
    alembic downgrade base
    alembic upgrade head --sql     # offline: print SQL instead of running it
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from bookmark_api.config import settings
from bookmark_api.database import Base
from bookmark_api.models.bookmark import Bookmark  # noqa: F401  (registers the table)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
config.set_main_option("sqlalchemy.url", settings.database_url)


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    # NullPool: a migration run opens one connection and exits
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(_migrate)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
