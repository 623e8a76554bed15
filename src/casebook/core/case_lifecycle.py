"""Case business logic - creation, reads, updates and cascading deletion."""

import logging
from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from casebook.exceptions import NotFoundError
from casebook.infrastructure.persistence import (
    ArtifactStore,
    CaseRepository,
    CaseVersionStore,
    DESCRIPTIVE_FIELDS,
    InstitutionDirectory,
    LinkRepository,
    PermissionRegistry,
    SQLArtifactStore,
    TransactionScope,
    TransactionScopeFactory,
)
from casebook.models import (
    Case,
    CaseCreateRequest,
    CaseDetail,
    CaseUpdateRequest,
    User,
)

logger = logging.getLogger(__name__)


class CaseLifecycle:
    """Business logic for case lifecycle operations.

    Every operation runs inside one TransactionScope, so create, update and
    destroy each commit all of their writes or none of them.
    """

    def __init__(
        self,
        scope_factory: TransactionScopeFactory,
        artifact_store_factory: Callable[[TransactionScope], ArtifactStore] = SQLArtifactStore,
        default_permission_entity: str = "institution",
        default_clearance: str = "1",
    ):
        """Initialize case lifecycle.

        Args:
            scope_factory: Opens a new TransactionScope per operation
            artifact_store_factory: Builds the artifact collaborator for a scope
            default_permission_entity: Entity of the permission written at creation
            default_clearance: Clearance of the permission written at creation
        """
        self.scope_factory = scope_factory
        self.artifact_store_factory = artifact_store_factory
        self.default_permission_entity = default_permission_entity
        self.default_clearance = default_clearance

    async def create(self, request: CaseCreateRequest, author: User) -> CaseDetail:
        """Create a case with its first version and default permission.

        Args:
            request: Descriptive fields, first source and permission overrides
            author: Authenticated user creating the case

        Returns:
            Created case with its version list

        Raises:
            NotFoundError: If the author's institution does not exist
            StorageError: If any write fails (nothing persists)
        """
        now = datetime.now(timezone.utc)
        case = Case(
            id=str(uuid4()),
            **request.model_dump(include=set(DESCRIPTIVE_FIELDS)),
            author_id=author.id,
            author_grade=author.grade,
            created_at=now,
            updated_at=now,
        )

        async with self.scope_factory() as scope:
            cases = CaseRepository(scope)
            versions = CaseVersionStore(scope)

            await cases.insert(case)
            await versions.append(case.id, request.source, created_at=now)

            await PermissionRegistry(scope).create_default(
                case.id,
                request.permission_subject_id or author.institution_id,
                clearance=request.permission_clearance or self.default_clearance,
                entity=request.permission_entity or self.default_permission_entity,
            )

            institution = await InstitutionDirectory(scope).get(author.institution_id)
            if institution is None:
                raise NotFoundError("institution", str(author.institution_id))
            await cases.associate_institution(case.id, institution.id)

            history = await versions.history(case.id)

        logger.info(f"Created case {case.id} for user {author.id}")

        return CaseDetail(
            **case.model_dump(exclude={"institution_id"}),
            institution_id=institution.id,
            source=history[-1].source,
            versions=history,
            institution=institution.acronym,
            institution_title=institution.title,
        )

    async def get(self, case_id: str) -> CaseDetail:
        """Get a case with its current content, history and institution.

        Raises:
            NotFoundError: If the case does not exist
        """
        async with self.scope_factory() as scope:
            case = await CaseRepository(scope).get(case_id)
            if case is None:
                raise NotFoundError("case", case_id)

            history = await CaseVersionStore(scope).history(case_id)
            institution = await InstitutionDirectory(scope).get(case.institution_id)

        return CaseDetail(
            **case.model_dump(),
            source=history[-1].source if history else None,
            versions=history,
            institution=institution.acronym if institution else None,
            institution_title=institution.title if institution else None,
        )

    async def update(self, case_id: str, request: CaseUpdateRequest) -> CaseDetail:
        """Overwrite a case's descriptive fields and append a version.

        Omitted fields are cleared. A version is appended only when the
        request carries a source; ``updated_at`` then matches that version.

        The version timestamp is taken after the field overwrite holds the
        case's write lock, so concurrent updates stamp versions in the same
        order as they commit.

        Raises:
            NotFoundError: If the case does not exist
            StorageError: If any write fails (nothing persists)
        """
        async with self.scope_factory() as scope:
            cases = CaseRepository(scope)
            if not await cases.overwrite_fields(case_id, request.model_dump()):
                raise NotFoundError("case", case_id)

            if request.source is not None:
                stamp = datetime.now(timezone.utc)
                await CaseVersionStore(scope).append(case_id, request.source, created_at=stamp)
                await cases.touch(case_id, stamp)

        logger.info(f"Updated case {case_id}")

        return await self.get(case_id)

    async def destroy(self, case_id: str) -> Case:
        """Delete a case with its versions, artifacts and user links.

        Permission records are left in place.

        Returns:
            Snapshot of the deleted case

        Raises:
            NotFoundError: If the case does not exist (rolled back)
            StorageError: If any delete fails (rolled back)
        """
        async with self.scope_factory() as scope:
            cases = CaseRepository(scope)
            case = await cases.get(case_id)
            if case is None:
                raise NotFoundError("case", case_id)

            purged = await CaseVersionStore(scope).purge(case_id)
            artifacts = await self.artifact_store_factory(scope).delete_for_case(case_id)
            detached = await LinkRepository(scope).detach_case(case_id)
            await cases.delete(case_id)

        logger.info(
            f"Deleted case {case_id} "
            f"({purged} versions, {artifacts} artifacts, {detached} links)"
        )
        return case
