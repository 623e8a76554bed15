"""Append-only version history of case content."""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import delete, insert, select

from casebook.infrastructure.database.models import CaseVersionDB
from casebook.infrastructure.persistence.transaction import TransactionScope
from casebook.models import CaseVersion

logger = logging.getLogger(__name__)


class CaseVersionStore:
    """
    Owns the version history of every case.

    Versions are inserted, never updated. "Current" content is the last
    version in (created_at, seq) order; ``seq`` is assigned by storage in
    insertion order, so two versions with the same timestamp still resolve
    deterministically.

    The store never touches the case row. Keeping ``cases.updated_at`` in
    step with the newest version is the caller's job.
    """

    def __init__(self, scope: TransactionScope):
        """
        Initialize store with the scope it writes through.

        Args:
            scope: Active transaction scope
        """
        self.scope = scope

    async def append(
        self,
        case_id: str,
        source: str,
        created_at: Optional[datetime] = None,
    ) -> str:
        """
        Append a new version to a case.

        Args:
            case_id: Owning case
            source: Version content (opaque text)
            created_at: Timestamp to record; defaults to now (UTC)

        Returns:
            New version ID

        Raises:
            ValueError: If source is None
            StorageError: If the insert fails
        """
        if source is None:
            raise ValueError("version source must not be None")

        version_id = str(uuid4())
        await self.scope.execute(
            insert(CaseVersionDB).values(
                id=version_id,
                case_id=case_id,
                source=source,
                created_at=created_at or datetime.now(timezone.utc),
            )
        )

        logger.debug(f"Appended version {version_id} to case {case_id}")
        return version_id

    async def history(self, case_id: str) -> List[CaseVersion]:
        """Return all versions of a case, oldest first."""
        result = await self.scope.execute(
            select(CaseVersionDB)
            .where(CaseVersionDB.case_id == case_id)
            .order_by(CaseVersionDB.created_at.asc(), CaseVersionDB.seq.asc())
        )
        return [CaseVersion.model_validate(row) for row in result.scalars().all()]

    async def resolve_current(self, case_id: str) -> Optional[str]:
        """
        Resolve the current content of a case.

        Returns:
            Source of the most recent version, or None if the case has none
        """
        versions = await self.history(case_id)
        if not versions:
            return None
        return versions[-1].source

    async def purge(self, case_id: str) -> int:
        """
        Delete every version of a case (case destruction only).

        Returns:
            Number of versions deleted
        """
        result = await self.scope.execute(
            delete(CaseVersionDB).where(CaseVersionDB.case_id == case_id)
        )
        return result.rowcount
