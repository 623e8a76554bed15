"""Case API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from casebook.core import CaseLifecycle, ShareCoordinator
from casebook.exceptions import CasebookError, NotFoundError
from casebook.infrastructure.database import DatabaseClient
from casebook.infrastructure.persistence import UserDirectory
from casebook.models import (
    CaseCreateRequest,
    CaseDetailResponse,
    CaseResponse,
    CaseUpdateRequest,
    LinkUserRequest,
    LinkUserResponse,
    User,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/cases", tags=["cases"])

# The core exposes error kinds; the status code is chosen here
STATUS_BY_KIND = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_permission": status.HTTP_400_BAD_REQUEST,
    "self_share_rejected": status.HTTP_400_BAD_REQUEST,
    "role_ineligible": status.HTTP_403_FORBIDDEN,
    "storage_error": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: CasebookError) -> HTTPException:
    """Translate a service error into an HTTPException."""
    code = STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    detail = error.to_dict()
    if error.kind == "storage_error":
        # Storage messages may carry SQL; keep them in the logs
        logger.error(f"Storage failure: {error.message}")
        detail = {"kind": error.kind, "message": "storage unavailable"}
    return HTTPException(status_code=code, detail=detail)


def get_db_client(request: Request) -> DatabaseClient:
    """Dependency to get the database client wired at startup."""
    return request.app.state.db_client


async def get_case_lifecycle(request: Request) -> CaseLifecycle:
    """Dependency to get case lifecycle with the client's scope factory."""
    db_client = get_db_client(request)
    app_settings = request.app.state.settings
    return CaseLifecycle(
        db_client.transaction_scope,
        default_permission_entity=app_settings.default_permission_entity,
        default_clearance=app_settings.default_clearance,
    )


async def get_share_coordinator(request: Request) -> ShareCoordinator:
    """Dependency to get share coordinator with the client's scope factory."""
    return ShareCoordinator(get_db_client(request).transaction_scope)


async def get_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-ID")) -> str:
    """Get user ID from X-User-ID header (set by API Gateway).

    The API Gateway validates user tokens and adds X-User-* headers after
    stripping any client-provided ones. Services trust these headers without
    additional validation.

    Raises:
        HTTPException: If X-User-ID header is missing
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-ID header required (should be added by API Gateway)",
        )

    return x_user_id


async def get_current_user(
    request: Request,
    user_id: str = Depends(get_user_id),
) -> User:
    """Resolve the acting user (id, role, institution) from the users table."""
    try:
        async with get_db_client(request).transaction_scope() as scope:
            user = await UserDirectory(scope).get(user_id)
    except CasebookError as e:
        raise to_http_exception(e) from e

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown user {user_id}",
        )
    return user


@router.post(
    "",
    response_model=CaseDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new case",
    description="""
Creates a case together with its first version.

**Workflow**:
1. Case row written with a generated ID, author ID and author grade
2. First version appended with the supplied `source`
3. Default permission written (institution scope, clearance "1" unless overridden)
4. Case associated with the author's institution

All four steps commit together or not at all.

**Request Body Example**:
```json
{
  "title": "Chest pain in the ED",
  "language": "en",
  "domain": "cardiology",
  "source": "# Case\\nA 54-year-old patient..."
}
```

**Authorization**: Requires X-User-ID header from the API gateway
    """,
    responses={
        201: {"description": "Case created successfully"},
        401: {"description": "Unauthorized - missing or unknown X-User-ID"},
        404: {"description": "Author's institution not found"},
        503: {"description": "Storage failure - nothing was written"},
    },
)
async def create_case(
    request: CaseCreateRequest,
    user: User = Depends(get_current_user),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
) -> CaseDetailResponse:
    """Create a new case."""
    try:
        detail = await lifecycle.create(request, user)
    except CasebookError as e:
        raise to_http_exception(e) from e
    return CaseDetailResponse.from_detail(detail)


@router.post(
    "/link",
    response_model=LinkUserResponse,
    summary="Share a case with a user",
    description="""
Links a target user to a case with `read`, `write` or `share` permission.

A user holds at most one link at a time. Linking removes every link the
target already has (to any case) before granting the new one.

**Eligibility**:
- `read`: target must be a player or an author
- `write` / `share`: target must be an author

When the target is ineligible the request fails with 403 **and** the
target's previous links stay removed.

**Request Body Example**:
```json
{"user_id": "a1b2...", "case_id": "c3d4...", "permission": "read"}
```
    """,
    responses={
        200: {"description": "User and case linked"},
        400: {"description": "Invalid permission, or sharing with oneself"},
        403: {"description": "Target user's role is not eligible"},
        404: {"description": "Target user or case not found"},
    },
)
async def link_user(
    request: LinkUserRequest,
    user: User = Depends(get_current_user),
    coordinator: ShareCoordinator = Depends(get_share_coordinator),
) -> LinkUserResponse:
    """Link a user to a case."""
    try:
        link = await coordinator.link(user, request.user_id, request.case_id, request.permission)
    except CasebookError as e:
        raise to_http_exception(e) from e

    return LinkUserResponse(
        message="user and case successfully linked",
        user_id=link.user_id,
        case_id=link.case_id,
        permission=link.permission.value,
    )


@router.get(
    "/{case_id}",
    response_model=CaseDetailResponse,
    summary="Get case",
    description="Returns the case, its current source, its full version history and its institution.",
    responses={404: {"description": "Case not found"}},
)
async def get_case(
    case_id: str,
    user: User = Depends(get_current_user),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
) -> CaseDetailResponse:
    try:
        detail = await lifecycle.get(case_id)
    except CasebookError as e:
        raise to_http_exception(e) from e
    return CaseDetailResponse.from_detail(detail)


@router.put(
    "/{case_id}",
    response_model=CaseDetailResponse,
    summary="Update case",
    description="""
Overwrites the case's descriptive fields and appends a new version.

Fields omitted from the body are **cleared**, not left unchanged. A version
is appended only when `source` is present.
    """,
    responses={404: {"description": "Case not found"}},
)
async def update_case(
    case_id: str,
    request: CaseUpdateRequest,
    user: User = Depends(get_current_user),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
) -> CaseDetailResponse:
    try:
        detail = await lifecycle.update(case_id, request)
    except CasebookError as e:
        raise to_http_exception(e) from e
    return CaseDetailResponse.from_detail(detail)


@router.delete(
    "/{case_id}",
    response_model=CaseResponse,
    summary="Delete case",
    description="Deletes the case with its versions, artifacts and user links, and returns the deleted case.",
    responses={404: {"description": "Case not found"}},
)
async def delete_case(
    case_id: str,
    user: User = Depends(get_current_user),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
) -> CaseResponse:
    try:
        case = await lifecycle.destroy(case_id)
    except NotFoundError as e:
        logger.warning(f"User {user.id} attempted to delete missing case {case_id}")
        raise to_http_exception(e) from e
    except CasebookError as e:
        raise to_http_exception(e) from e
    return CaseResponse.from_case(case)
