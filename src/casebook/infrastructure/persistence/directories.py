"""Read-only lookups of users and institutions.

Both are owned by other services; this one only reads them.
"""

from typing import Optional

from sqlalchemy import select

from casebook.infrastructure.database.models import InstitutionDB, UserDB
from casebook.infrastructure.persistence.transaction import TransactionScope
from casebook.models import Institution, User


class UserDirectory:
    """Lookup of users and their roles."""

    def __init__(self, scope: TransactionScope):
        self.scope = scope

    async def get(self, user_id: str) -> Optional[User]:
        result = await self.scope.execute(select(UserDB).where(UserDB.id == user_id))
        row = result.scalars().first()
        return User.model_validate(row) if row is not None else None

    async def get_for_update(self, user_id: str) -> Optional[User]:
        """
        Read a user and lock its row until the scope ends.

        Serializes concurrent link changes for one user on databases with
        row locks. SQLite omits FOR UPDATE and relies on its write lock.
        """
        result = await self.scope.execute(
            select(UserDB).where(UserDB.id == user_id).with_for_update()
        )
        row = result.scalars().first()
        return User.model_validate(row) if row is not None else None


class InstitutionDirectory:
    """Key-value lookup of institutions."""

    def __init__(self, scope: TransactionScope):
        self.scope = scope

    async def get(self, institution_id: Optional[str]) -> Optional[Institution]:
        if institution_id is None:
            return None
        result = await self.scope.execute(
            select(InstitutionDB).where(InstitutionDB.id == institution_id)
        )
        row = result.scalars().first()
        return Institution.model_validate(row) if row is not None else None
