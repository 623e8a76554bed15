"""Database client for SQLite/PostgreSQL connections."""

import asyncio
import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from casebook.infrastructure.persistence.transaction import SQLAlchemyTransactionScope
from .models import Base

logger = logging.getLogger(__name__)


class DatabaseClient:
    """Async database client for SQLAlchemy."""

    def __init__(
        self,
        database_url: str,
        storage_timeout_seconds: Optional[float] = None,
        echo: bool = False,
    ):
        """
        Initialize database engine and session factory.

        Args:
            database_url: SQLAlchemy async URL
            storage_timeout_seconds: Bound applied to every call made through a scope
            echo: Log emitted SQL
        """
        self.database_url = database_url
        self.storage_timeout_seconds = storage_timeout_seconds

        # For SQLite, use NullPool to avoid connection issues
        # For PostgreSQL, use default pool
        pool_class = NullPool if "sqlite" in database_url else None

        self.engine = create_async_engine(
            database_url,
            echo=echo,
            poolclass=pool_class,
        )

        self.async_session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info(f"Database client initialized with URL: {database_url}")

    def transaction_scope(self) -> SQLAlchemyTransactionScope:
        """Open a new unit of work. Use as ``async with client.transaction_scope() as scope``."""
        return SQLAlchemyTransactionScope(
            self.async_session_maker,
            timeout_seconds=self.storage_timeout_seconds,
        )

    async def verify_connection(self, retries: int = 5, delay_seconds: float = 1.0):
        """Verify database connection with retry logic.

        This is called before table creation to ensure the database is ready.
        Retries with exponential backoff for K8s/scale-to-zero scenarios.
        """
        attempt = 0
        while True:
            try:
                async with self.engine.begin() as conn:
                    await conn.execute(text("SELECT 1"))
                break
            except OperationalError as e:
                attempt += 1
                if attempt >= retries:
                    raise
                wait = delay_seconds * (2 ** (attempt - 1))
                logger.warning(
                    f"Database not ready (attempt {attempt}/{retries}): {e}; retrying in {wait:.1f}s"
                )
                await asyncio.sleep(wait)
        logger.info("Database connection verified")

    async def create_tables(self):
        """Create all database tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def close(self):
        """Close database engine."""
        await self.engine.dispose()
        logger.info("Database client closed")
