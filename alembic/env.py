"""Alembic migrations for casebook-service.

The service talks to its database through an async driver
(sqlite+aiosqlite by default), so online migrations open an async
connection and hand Alembic a sync view of it via ``run_sync``.
"""

import asyncio
import os
import sys
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from casebook.config import settings  # noqa: E402
from casebook.infrastructure.database.models import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def resolve_database_url() -> str:
    """Pick the URL to migrate: DATABASE_URL, then alembic.ini, then service settings."""
    url = os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    return url or settings.database_url


def configure(**kwargs) -> None:
    # SQLite cannot ALTER most constraints in place
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_offline() -> None:
    """Emit SQL to stdout without connecting."""
    configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


config.set_main_option("sqlalchemy.url", resolve_database_url())

if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
