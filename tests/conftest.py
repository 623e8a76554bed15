"""Pytest fixtures for casebook-service tests.

Each test gets its own SQLite file under ``tmp_path`` seeded with one
institution and a handful of users owned by other services.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert

from casebook.config import Settings
from casebook.core import CaseLifecycle, ShareCoordinator
from casebook.infrastructure.database import DatabaseClient, InstitutionDB, UserDB
from casebook.main import create_app
from casebook.models import CaseCreateRequest, User

INSTITUTION = {"id": "inst-1", "acronym": "UNICAMP", "title": "Universidade Estadual de Campinas"}

USERS = {
    "author": {"id": "user-author", "username": "ana", "role": "author", "grade": "professor", "institution_id": "inst-1"},
    "coauthor": {"id": "user-coauthor", "username": "bruno", "role": "author", "grade": "resident", "institution_id": "inst-1"},
    "player": {"id": "user-player", "username": "carla", "role": "player", "grade": "student", "institution_id": "inst-1"},
    "guest": {"id": "user-guest", "username": "davi", "role": "guest", "grade": None, "institution_id": "inst-1"},
    "orphan": {"id": "user-orphan", "username": "eva", "role": "author", "grade": "professor", "institution_id": "inst-missing"},
}


def sqlite_url(tmp_path, name: str = "casebook.db") -> str:
    return f"sqlite+aiosqlite:///{tmp_path / name}"


async def seed_directory(client: DatabaseClient):
    """Insert the institution and users this service only reads."""
    async with client.transaction_scope() as scope:
        await scope.execute(insert(InstitutionDB).values(**INSTITUTION))
        for row in USERS.values():
            await scope.execute(insert(UserDB).values(**row))


@pytest.fixture
async def db(tmp_path):
    """Database client on a fresh, seeded SQLite file."""
    client = DatabaseClient(sqlite_url(tmp_path), storage_timeout_seconds=5.0)
    await client.create_tables()
    await seed_directory(client)
    yield client
    await client.close()


@pytest.fixture
def users():
    """Seeded users keyed by their role in the tests."""
    return {key: User(**row) for key, row in USERS.items()}


@pytest.fixture
def lifecycle(db):
    return CaseLifecycle(db.transaction_scope)


@pytest.fixture
def coordinator(db):
    return ShareCoordinator(db.transaction_scope)


@pytest.fixture
def make_case(lifecycle, users):
    """Factory creating a case authored by the seeded author."""

    async def _make(source: str = "v1", **fields):
        request = CaseCreateRequest(source=source, **fields)
        return await lifecycle.create(request, users["author"])

    return _make


@pytest.fixture
def api_client(tmp_path):
    """TestClient over an app wired to a seeded SQLite file."""
    url = sqlite_url(tmp_path, "api.db")

    async def _prepare():
        client = DatabaseClient(url)
        try:
            await client.create_tables()
            await seed_directory(client)
        finally:
            await client.close()

    asyncio.run(_prepare())

    app = create_app(Settings(database_url=url, connect_retries=1, log_level="WARNING"))
    with TestClient(app) as client:
        yield client
