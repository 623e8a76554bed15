"""Persistence of user-case links (the users_cases pivot)."""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import delete, insert, select

from casebook.infrastructure.database.models import UserCaseLinkDB
from casebook.infrastructure.persistence.transaction import TransactionScope
from casebook.models import SharePermission, UserCaseLink


class LinkRepository:
    """
    Raw access to user-case links.

    Holds no sharing rules; the one-link-per-user invariant is enforced by
    ShareCoordinator.
    """

    def __init__(self, scope: TransactionScope):
        self.scope = scope

    async def for_user(self, user_id: str) -> List[UserCaseLink]:
        result = await self.scope.execute(
            select(UserCaseLinkDB)
            .where(UserCaseLinkDB.user_id == user_id)
            .order_by(UserCaseLinkDB.id.asc())
        )
        return [UserCaseLink.model_validate(row) for row in result.scalars().all()]

    async def for_case(self, case_id: str) -> List[UserCaseLink]:
        result = await self.scope.execute(
            select(UserCaseLinkDB)
            .where(UserCaseLinkDB.case_id == case_id)
            .order_by(UserCaseLinkDB.id.asc())
        )
        return [UserCaseLink.model_validate(row) for row in result.scalars().all()]

    async def attach(self, user_id: str, case_id: str, permission: SharePermission) -> None:
        await self.scope.execute(
            insert(UserCaseLinkDB).values(
                user_id=user_id,
                case_id=case_id,
                permission=permission.value,
                created_at=datetime.now(timezone.utc),
            )
        )

    async def detach_user(self, user_id: str) -> int:
        """Remove every link of a user, whatever case it points at."""
        result = await self.scope.execute(
            delete(UserCaseLinkDB).where(UserCaseLinkDB.user_id == user_id)
        )
        return result.rowcount

    async def detach_case(self, case_id: str) -> int:
        """Remove every link pointing at a case."""
        result = await self.scope.execute(
            delete(UserCaseLinkDB).where(UserCaseLinkDB.case_id == case_id)
        )
        return result.rowcount
