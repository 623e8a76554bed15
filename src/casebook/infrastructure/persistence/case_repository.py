"""Case Repository for case rows.

This module provides the repository pattern for the Case record. Versions,
permissions and links live in their own stores; relations are explicit
queries keyed by ``case_id``.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import delete, insert, select, update

from casebook.infrastructure.database.models import CaseDB
from casebook.infrastructure.persistence.transaction import TransactionScope
from casebook.models import Case

# Fields a client may set; everything else is provenance or bookkeeping
DESCRIPTIVE_FIELDS = (
    "title",
    "description",
    "language",
    "domain",
    "specialty",
    "keywords",
    "original_date",
    "complexity",
)


class CaseRepository:
    """
    Case row persistence.

    Uses SQLAlchemy Core statements routed through the transaction scope.
    """

    def __init__(self, scope: TransactionScope):
        """
        Initialize repository with the active transaction scope.

        Args:
            scope: TransactionScope owning the session
        """
        self.scope = scope

    async def insert(self, case: Case) -> Case:
        """
        Insert a new case row.

        Raises:
            StorageError: If the insert fails (e.g. duplicate ID)
        """
        await self.scope.execute(insert(CaseDB).values(**case.model_dump()))
        return case

    async def get(self, case_id: str) -> Optional[Case]:
        """
        Retrieve case by ID.

        Returns:
            Case if found, None otherwise
        """
        result = await self.scope.execute(select(CaseDB).where(CaseDB.id == case_id))
        row = result.scalars().first()
        if row is None:
            return None
        return Case.model_validate(row)

    async def exists(self, case_id: str) -> bool:
        result = await self.scope.execute(select(CaseDB.id).where(CaseDB.id == case_id))
        return result.first() is not None

    async def overwrite_fields(
        self,
        case_id: str,
        fields: Dict[str, Any],
        updated_at: Optional[datetime] = None,
    ) -> bool:
        """
        Overwrite every descriptive field of a case.

        Fields missing from ``fields`` are set to NULL.

        Returns:
            True if the case exists
        """
        values = {name: fields.get(name) for name in DESCRIPTIVE_FIELDS}
        values["updated_at"] = updated_at or datetime.now(timezone.utc)

        result = await self.scope.execute(
            update(CaseDB).where(CaseDB.id == case_id).values(**values)
        )
        return result.rowcount > 0

    async def touch(self, case_id: str, updated_at: datetime) -> None:
        """Set updated_at to the timestamp of a newly appended version."""
        await self.scope.execute(
            update(CaseDB).where(CaseDB.id == case_id).values(updated_at=updated_at)
        )

    async def associate_institution(self, case_id: str, institution_id: str) -> None:
        """Point a case at its institution."""
        await self.scope.execute(
            update(CaseDB).where(CaseDB.id == case_id).values(institution_id=institution_id)
        )

    async def delete(self, case_id: str) -> bool:
        """
        Delete case row by ID.

        Returns:
            True if deleted, False if not found
        """
        result = await self.scope.execute(delete(CaseDB).where(CaseDB.id == case_id))
        return result.rowcount > 0
