"""Unit tests for CaseVersionStore

Versions are append-only; the current content is the newest version in
(created_at, seq) order.
"""

from datetime import datetime, timedelta, timezone

import pytest

from casebook.infrastructure.persistence import CaseVersionStore


@pytest.mark.unit
class TestCaseVersionStore:
    """Test append, history and current-content resolution"""

    async def test_resolve_current_returns_last_appended(self, db, make_case):
        """Happy path: each append becomes the current content"""
        case = await make_case(source="v1")

        for source in ("v2", "v3", "v4"):
            async with db.transaction_scope() as scope:
                await CaseVersionStore(scope).append(case.id, source)

            async with db.transaction_scope() as scope:
                assert await CaseVersionStore(scope).resolve_current(case.id) == source

    async def test_append_never_rewrites_earlier_versions(self, db, make_case):
        """Earlier versions keep their id and content after later appends"""
        case = await make_case(source="v1")
        before = case.versions[0]

        async with db.transaction_scope() as scope:
            await CaseVersionStore(scope).append(case.id, "v2")

        async with db.transaction_scope() as scope:
            history = await CaseVersionStore(scope).history(case.id)

        assert [v.source for v in history] == ["v1", "v2"]
        assert history[0].id == before.id
        assert history[0].source == before.source

    async def test_same_timestamp_resolves_by_insertion_order(self, db, make_case):
        """Versions sharing created_at are ordered by storage sequence"""
        case = await make_case(source="v1")
        stamp = datetime.now(timezone.utc) + timedelta(minutes=5)

        async with db.transaction_scope() as scope:
            store = CaseVersionStore(scope)
            await store.append(case.id, "first", created_at=stamp)
            await store.append(case.id, "second", created_at=stamp)

        async with db.transaction_scope() as scope:
            store = CaseVersionStore(scope)
            history = await store.history(case.id)
            current = await store.resolve_current(case.id)

        assert [v.source for v in history] == ["v1", "first", "second"]
        assert history[1].seq < history[2].seq
        assert current == "second"

    async def test_resolve_current_without_versions(self, db):
        """Edge case: unknown case has no current content"""
        async with db.transaction_scope() as scope:
            assert await CaseVersionStore(scope).resolve_current("no-such-case") is None

    async def test_append_rejects_none_source(self, db, make_case):
        """Error case: None source is a programming error"""
        case = await make_case()

        with pytest.raises(ValueError):
            async with db.transaction_scope() as scope:
                await CaseVersionStore(scope).append(case.id, None)

    async def test_purge_removes_all_versions(self, db, make_case):
        case = await make_case(source="v1")
        async with db.transaction_scope() as scope:
            await CaseVersionStore(scope).append(case.id, "v2")

        async with db.transaction_scope() as scope:
            removed = await CaseVersionStore(scope).purge(case.id)

        async with db.transaction_scope() as scope:
            remaining = await CaseVersionStore(scope).history(case.id)

        assert removed == 2
        assert remaining == []
