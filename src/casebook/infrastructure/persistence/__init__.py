"""Case persistence layer - Repository Pattern implementation."""

from casebook.infrastructure.persistence.artifact_repository import (
    ArtifactStore,
    SQLArtifactStore,
)
from casebook.infrastructure.persistence.case_repository import (
    DESCRIPTIVE_FIELDS,
    CaseRepository,
)
from casebook.infrastructure.persistence.directories import (
    InstitutionDirectory,
    UserDirectory,
)
from casebook.infrastructure.persistence.link_repository import LinkRepository
from casebook.infrastructure.persistence.permission_registry import (
    CASES_TABLE,
    PermissionRegistry,
)
from casebook.infrastructure.persistence.transaction import (
    SQLAlchemyTransactionScope,
    TransactionScope,
    TransactionScopeFactory,
)
from casebook.infrastructure.persistence.version_store import CaseVersionStore

__all__ = [
    "ArtifactStore",
    "SQLArtifactStore",
    "DESCRIPTIVE_FIELDS",
    "CaseRepository",
    "InstitutionDirectory",
    "UserDirectory",
    "LinkRepository",
    "CASES_TABLE",
    "PermissionRegistry",
    "SQLAlchemyTransactionScope",
    "TransactionScope",
    "TransactionScopeFactory",
    "CaseVersionStore",
]
