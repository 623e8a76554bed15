"""API request and response models."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from casebook.models.case import Case, CaseDetail, CaseVersion


class CaseFields(BaseModel):
    """Descriptive fields shared by create and update."""

    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    language: Optional[str] = None
    domain: Optional[str] = None
    specialty: Optional[str] = None
    keywords: Optional[str] = None
    original_date: Optional[str] = None
    complexity: Optional[str] = None


class CaseCreateRequest(CaseFields):
    """Request to create a new case with its first version."""

    source: str = Field(description="Content of the first version")

    # Overrides for the default permission record
    permission_entity: Optional[str] = None
    permission_subject_id: Optional[str] = None
    permission_clearance: Optional[str] = None


class CaseUpdateRequest(CaseFields):
    """Request to update a case.

    Omitted descriptive fields are cleared. A version is appended only when
    ``source`` is given.
    """

    source: Optional[str] = None


class LinkUserRequest(BaseModel):
    """Request to share a case with a user.

    ``permission`` is a plain string so unknown levels reach the share
    coordinator and fail as invalid_permission instead of a schema error.
    """

    user_id: str
    case_id: str
    permission: str


class CaseVersionResponse(BaseModel):
    """One entry of a case's history."""

    id: str
    source: str
    created_at: datetime

    @classmethod
    def from_version(cls, version: CaseVersion) -> "CaseVersionResponse":
        return cls(id=version.id, source=version.source, created_at=version.created_at)


class CaseResponse(BaseModel):
    """Response containing a single case row."""

    id: str
    title: Optional[str]
    description: Optional[str]
    language: Optional[str]
    domain: Optional[str]
    specialty: Optional[str]
    keywords: Optional[str]
    original_date: Optional[str]
    complexity: Optional[str]
    author_id: Optional[str]
    author_grade: Optional[str]
    institution_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_case(cls, case: Case) -> "CaseResponse":
        """Convert Case model to response."""
        return cls(**case.model_dump(include=set(cls.model_fields)))


class CaseDetailResponse(CaseResponse):
    """Response containing a case with its current content and history."""

    source: Optional[str] = None
    versions: List[CaseVersionResponse] = Field(default_factory=list)
    institution: Optional[str] = None
    institution_title: Optional[str] = None

    @classmethod
    def from_detail(cls, detail: CaseDetail) -> "CaseDetailResponse":
        """Convert CaseDetail model to response."""
        base = CaseResponse.from_case(detail).model_dump()
        return cls(
            **base,
            source=detail.source,
            versions=[CaseVersionResponse.from_version(v) for v in detail.versions],
            institution=detail.institution,
            institution_title=detail.institution_title,
        )


class LinkUserResponse(BaseModel):
    """Response to a successful link request."""

    message: str
    user_id: str
    case_id: str
    permission: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str
    database: str
