"""Coarse, entity-scoped access records."""

import logging
from datetime import datetime, timezone
from typing import List
from uuid import uuid4

from sqlalchemy import insert, select

from casebook.infrastructure.database.models import PermissionDB
from casebook.infrastructure.persistence.transaction import TransactionScope
from casebook.models import Permission

logger = logging.getLogger(__name__)

CASES_TABLE = "cases"


class PermissionRegistry:
    """
    Permission records such as "institution X may read case Y at clearance 1".

    Records are immutable once written and are not deduplicated: calling
    ``create_default`` twice for one case writes two rows.
    """

    def __init__(self, scope: TransactionScope):
        self.scope = scope

    async def create_default(
        self,
        case_id: str,
        institution_id: str,
        clearance: str = "1",
        entity: str = "institution",
    ) -> str:
        """
        Write the permission record created alongside a new case.

        Args:
            case_id: Protected case
            institution_id: Scope identifier (subject)
            clearance: Ordinal access level
            entity: Scope kind

        Returns:
            New permission ID
        """
        permission_id = str(uuid4())
        await self.scope.execute(
            insert(PermissionDB).values(
                id=permission_id,
                entity=entity,
                subject=institution_id,
                clearance=clearance,
                table_name=CASES_TABLE,
                table_id=case_id,
                created_at=datetime.now(timezone.utc),
            )
        )

        logger.debug(
            f"Created {entity} permission {permission_id} "
            f"(subject={institution_id}, clearance={clearance}) for case {case_id}"
        )
        return permission_id

    async def list_for(self, table: str, table_id: str) -> List[Permission]:
        """List permission records protecting one row, oldest first."""
        result = await self.scope.execute(
            select(PermissionDB)
            .where(PermissionDB.table_name == table, PermissionDB.table_id == table_id)
            .order_by(PermissionDB.created_at.asc())
        )
        return [self._row_to_permission(row) for row in result.scalars().all()]

    def _row_to_permission(self, row: PermissionDB) -> Permission:
        return Permission(
            id=row.id,
            entity=row.entity,
            subject=row.subject,
            clearance=row.clearance,
            table=row.table_name,
            table_id=row.table_id,
            created_at=row.created_at,
        )
