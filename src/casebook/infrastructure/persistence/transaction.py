"""Transaction scope: the unit-of-work boundary for every public operation.

A scope is an async context manager. Leaving the block normally commits,
leaving it with an exception rolls back, and the session is closed on every
exit path. Repositories receive the scope and route all statements through
``execute`` so each storage call is timeout-bound and failures surface as
``StorageError``.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from casebook.exceptions import StorageError

logger = logging.getLogger(__name__)


class TransactionScope(ABC):
    """Abstract unit-of-work boundary."""

    @abstractmethod
    async def execute(self, statement: Any) -> Any:
        """Run a statement inside the scope.

        Raises:
            StorageError: If the statement fails or times out
        """

    @abstractmethod
    async def commit(self) -> None:
        """Commit writes made so far."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard writes made since the last commit."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""

    async def __aenter__(self) -> "TransactionScope":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                await self.commit()
            else:
                logger.warning(f"Rolling back transaction after {exc_type.__name__}: {exc}")
                await self.rollback()
        finally:
            await self.close()
        return False


class SQLAlchemyTransactionScope(TransactionScope):
    """Transaction scope backed by one SQLAlchemy ``AsyncSession``."""

    def __init__(
        self,
        session_maker: async_sessionmaker,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Initialize scope.

        Args:
            session_maker: Factory for the session owned by this scope
            timeout_seconds: Upper bound for each storage call (None = unbounded)
        """
        self._session_maker = session_maker
        self._timeout = timeout_seconds
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            self._session = self._session_maker()
        return self._session

    async def _bounded(self, awaitable, operation: str):
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise StorageError(
                f"{operation} timed out after {self._timeout}s"
            ) from e
        except SQLAlchemyError as e:
            raise StorageError(f"{operation} failed: {e}") from e

    async def execute(self, statement: Any) -> Any:
        return await self._bounded(self.session.execute(statement), "Storage call")

    async def commit(self) -> None:
        if self._session is None:
            return
        try:
            await self._bounded(self._session.commit(), "Commit")
        except StorageError:
            await self.rollback()
            raise

    async def rollback(self) -> None:
        if self._session is None:
            return
        try:
            await self._session.rollback()
        except SQLAlchemyError as e:
            # The original failure is what propagates; close() discards the connection
            logger.error(f"Rollback failed: {e}")

    async def close(self) -> None:
        if self._session is None:
            return
        try:
            await self._session.close()
        finally:
            self._session = None


TransactionScopeFactory = Callable[[], TransactionScope]
