"""Artifact store interface.

Artifacts (uploaded images, attachments) belong to another subsystem. Case
destruction only needs "delete everything of this case", run inside the
caller's transaction scope.
"""

from abc import ABC, abstractmethod

from sqlalchemy import delete

from casebook.infrastructure.database.models import ArtifactDB
from casebook.infrastructure.persistence.transaction import TransactionScope


class ArtifactStore(ABC):
    """
    Abstract artifact collaborator.

    Implementations:
    - SQLArtifactStore: artifacts table in the shared database
    """

    def __init__(self, scope: TransactionScope):
        self.scope = scope

    @abstractmethod
    async def delete_for_case(self, case_id: str) -> int:
        """
        Delete all artifacts of a case.

        Returns:
            Number of artifacts deleted

        Raises:
            StorageError: If deletion fails
        """


class SQLArtifactStore(ArtifactStore):
    """Artifact rows in the artifacts table."""

    async def delete_for_case(self, case_id: str) -> int:
        result = await self.scope.execute(
            delete(ArtifactDB).where(ArtifactDB.case_id == case_id)
        )
        return result.rowcount
