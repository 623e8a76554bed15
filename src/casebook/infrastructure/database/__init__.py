"""Database infrastructure package."""

from .client import DatabaseClient
from .models import (
    ArtifactDB,
    Base,
    CaseDB,
    CaseVersionDB,
    InstitutionDB,
    PermissionDB,
    UserCaseLinkDB,
    UserDB,
)

__all__ = [
    "DatabaseClient",
    "ArtifactDB",
    "Base",
    "CaseDB",
    "CaseVersionDB",
    "InstitutionDB",
    "PermissionDB",
    "UserCaseLinkDB",
    "UserDB",
]
