"""Models package."""

from .case import (
    Case,
    CaseDetail,
    CaseVersion,
    Institution,
    Permission,
    SharePermission,
    User,
    UserCaseLink,
    UserRole,
)
from .requests import (
    CaseCreateRequest,
    CaseDetailResponse,
    CaseFields,
    CaseResponse,
    CaseUpdateRequest,
    CaseVersionResponse,
    HealthResponse,
    LinkUserRequest,
    LinkUserResponse,
)

__all__ = [
    "Case",
    "CaseDetail",
    "CaseVersion",
    "Institution",
    "Permission",
    "SharePermission",
    "User",
    "UserCaseLink",
    "UserRole",
    "CaseCreateRequest",
    "CaseDetailResponse",
    "CaseFields",
    "CaseResponse",
    "CaseUpdateRequest",
    "CaseVersionResponse",
    "HealthResponse",
    "LinkUserRequest",
    "LinkUserResponse",
]
