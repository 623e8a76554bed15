"""Case data models for casebook-service.

Plain records returned by the repositories. Relations are resolved by
explicit repository calls, never by lazy attribute access.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SharePermission(str, Enum):
    """Permission level carried by a user-case link."""

    READ = "read"
    WRITE = "write"
    SHARE = "share"


class UserRole(str, Enum):
    """Roles that matter for sharing eligibility.

    Any other role string stored on a user is treated as ineligible.
    """

    AUTHOR = "author"
    PLAYER = "player"


class Case(BaseModel):
    """Case row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    domain: Optional[str] = None
    specialty: Optional[str] = None
    keywords: Optional[str] = None
    original_date: Optional[str] = None
    complexity: Optional[str] = None

    author_id: Optional[str] = None
    author_grade: Optional[str] = None
    institution_id: Optional[str] = None

    created_at: datetime
    updated_at: datetime


class CaseVersion(BaseModel):
    """One immutable snapshot of a case's content."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    case_id: str
    source: str
    seq: int
    created_at: datetime


class CaseDetail(Case):
    """Case with its resolved content, history and institution."""

    source: Optional[str] = None
    versions: List[CaseVersion] = Field(default_factory=list)
    institution: Optional[str] = Field(default=None, description="Institution acronym")
    institution_title: Optional[str] = None


class Permission(BaseModel):
    """Coarse, entity-scoped access grant on a protected row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    entity: str
    subject: Optional[str] = None
    clearance: str
    table: str
    table_id: str
    created_at: datetime


class UserCaseLink(BaseModel):
    """The single active sharing relationship of a user."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    case_id: str
    permission: SharePermission
    created_at: datetime


class User(BaseModel):
    """User as seen by this service (read-only)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: Optional[str] = None
    role: Optional[str] = None
    grade: Optional[str] = None
    institution_id: Optional[str] = None

    def has_role(self, *roles: str) -> bool:
        """Return True if the user's role is one of ``roles``."""
        return self.role in roles


class Institution(BaseModel):
    """Institution key-value record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    acronym: Optional[str] = None
    title: Optional[str] = None
