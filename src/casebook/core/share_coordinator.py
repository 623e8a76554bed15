"""Per-user case sharing workflow."""

import logging
from typing import Dict, Optional, Tuple

from casebook.exceptions import (
    InvalidPermissionError,
    NotFoundError,
    RoleIneligibleError,
    SelfShareRejectedError,
)
from casebook.infrastructure.persistence import (
    CaseRepository,
    LinkRepository,
    TransactionScopeFactory,
    UserDirectory,
)
from casebook.models import SharePermission, User, UserCaseLink, UserRole

logger = logging.getLogger(__name__)

# Roles a target user needs for each permission level
ELIGIBLE_ROLES: Dict[SharePermission, Tuple[str, ...]] = {
    SharePermission.READ: (UserRole.PLAYER.value, UserRole.AUTHOR.value),
    SharePermission.WRITE: (UserRole.AUTHOR.value,),
    SharePermission.SHARE: (UserRole.AUTHOR.value,),
}


class ShareCoordinator:
    """Grants and revokes the single active case link of a user.

    A user holds at most one link at a time, across all cases: linking
    first removes every existing link of the target user, wherever it
    points, then grants the new one.

    Role gating runs after that revoke. When the target's role does not
    qualify, the revoke is committed anyway and RoleIneligibleError is
    raised, leaving the user with no link at all.

    The target user's row is locked before the revoke, so concurrent links
    for one user apply one after the other.
    """

    def __init__(self, scope_factory: TransactionScopeFactory):
        """Initialize coordinator.

        Args:
            scope_factory: Opens a new TransactionScope per operation
        """
        self.scope_factory = scope_factory

    @staticmethod
    def parse_permission(permission: object) -> SharePermission:
        """Validate a requested permission level.

        Raises:
            InvalidPermissionError: If not one of read, write, share
        """
        if isinstance(permission, SharePermission):
            return permission
        try:
            return SharePermission(permission)
        except ValueError as e:
            raise InvalidPermissionError(permission) from e

    async def link(
        self,
        acting_user: User,
        target_user_id: str,
        case_id: str,
        permission: object,
    ) -> UserCaseLink:
        """Share a case with a user, replacing any link the user had.

        Args:
            acting_user: User performing the share
            target_user_id: User receiving the link
            case_id: Case being shared
            permission: Requested level (read, write or share)

        Returns:
            The new link

        Raises:
            InvalidPermissionError: Unknown level (no state change)
            SelfShareRejectedError: acting user == target user (no state change)
            NotFoundError: Target user or case missing (no state change)
            RoleIneligibleError: Target's role does not qualify (links revoked)
            StorageError: Persistence failure (rolled back)
        """
        level = self.parse_permission(permission)

        if acting_user.id == target_user_id:
            logger.warning(f"User {acting_user.id} attempted to share case {case_id} with themselves")
            raise SelfShareRejectedError(acting_user.id)

        async with self.scope_factory() as scope:
            target = await UserDirectory(scope).get_for_update(target_user_id)
            if target is None:
                raise NotFoundError("user", target_user_id)

            if not await CaseRepository(scope).exists(case_id):
                raise NotFoundError("case", case_id)

            links = LinkRepository(scope)
            revoked = await links.detach_user(target.id)

            required = ELIGIBLE_ROLES[level]
            if not target.has_role(*required):
                await scope.commit()
                logger.warning(
                    f"User {target.id} (role={target.role}) ineligible for {level.value} "
                    f"on case {case_id}; {revoked} previous link(s) stay revoked"
                )
                raise RoleIneligibleError(target.id, level.value, required)

            await links.attach(target.id, case_id, level)
            granted = (await links.for_user(target.id))[-1]

        logger.info(
            f"User {acting_user.id} linked user {target.id} to case {case_id} "
            f"with {level.value} permission (replaced {revoked} link(s))"
        )
        return granted

    async def current_link(self, user_id: str) -> Optional[UserCaseLink]:
        """Return the user's active link, if any."""
        async with self.scope_factory() as scope:
            links = await LinkRepository(scope).for_user(user_id)
        return links[-1] if links else None

    async def unlink(self, user_id: str) -> int:
        """Remove every link of a user.

        Returns:
            Number of links removed
        """
        async with self.scope_factory() as scope:
            removed = await LinkRepository(scope).detach_user(user_id)
        logger.info(f"Detached {removed} link(s) from user {user_id}")
        return removed
