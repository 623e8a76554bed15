"""Unit tests for the transaction scope

Commit on normal exit, rollback on error, and every storage call bounded by
the configured timeout.
"""

import asyncio

import pytest
from sqlalchemy import insert, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.exceptions import NotFoundError, StorageError
from casebook.infrastructure.database import DatabaseClient, InstitutionDB


async def _institution_ids(db):
    async with db.transaction_scope() as scope:
        result = await scope.execute(select(InstitutionDB.id))
        return sorted(result.scalars().all())


@pytest.mark.unit
class TestTransactionScope:
    """Test commit/rollback boundaries"""

    async def test_commits_on_normal_exit(self, db):
        """Happy path: writes are visible after the block"""
        async with db.transaction_scope() as scope:
            await scope.execute(insert(InstitutionDB).values(id="inst-2", acronym="USP"))

        assert await _institution_ids(db) == ["inst-1", "inst-2"]

    async def test_rolls_back_on_exception(self, db):
        """Error case: domain errors discard the scope's writes"""
        with pytest.raises(NotFoundError):
            async with db.transaction_scope() as scope:
                await scope.execute(insert(InstitutionDB).values(id="inst-3"))
                raise NotFoundError("case", "missing")

        assert await _institution_ids(db) == ["inst-1"]

    async def test_explicit_commit_survives_later_error(self, db):
        """Writes committed mid-scope persist even if the scope then fails"""
        with pytest.raises(NotFoundError):
            async with db.transaction_scope() as scope:
                await scope.execute(insert(InstitutionDB).values(id="inst-4"))
                await scope.commit()
                await scope.execute(insert(InstitutionDB).values(id="inst-5"))
                raise NotFoundError("case", "missing")

        assert await _institution_ids(db) == ["inst-1", "inst-4"]

    async def test_sql_failure_becomes_storage_error(self, db):
        """Error case: SQLAlchemy errors surface as StorageError"""
        with pytest.raises(StorageError) as exc_info:
            async with db.transaction_scope() as scope:
                await scope.execute(insert(InstitutionDB).values(id="inst-1"))

        assert exc_info.value.kind == "storage_error"
        assert await _institution_ids(db) == ["inst-1"]

    async def test_slow_call_times_out(self, tmp_path, monkeypatch):
        """Error case: a call exceeding the bound fails with StorageError"""
        client = DatabaseClient(
            f"sqlite+aiosqlite:///{tmp_path / 'slow.db'}",
            storage_timeout_seconds=0.05,
        )

        async def slow_execute(self, statement, *args, **kwargs):
            await asyncio.sleep(1)

        monkeypatch.setattr(AsyncSession, "execute", slow_execute)

        try:
            with pytest.raises(StorageError, match="timed out"):
                async with client.transaction_scope() as scope:
                    await scope.execute(text("SELECT 1"))
        finally:
            await client.close()

    async def test_untouched_scope_opens_no_session(self, db):
        """Edge case: entering and leaving without statements is a no-op"""
        scope = db.transaction_scope()
        async with scope:
            pass

        assert scope._session is None
