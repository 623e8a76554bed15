"""Exception hierarchy for casebook-service.

Every error carries a ``kind`` so the HTTP boundary can pick a status code
without inspecting messages:

    - NotFoundError: case, user or institution absent
    - InvalidPermissionError: requested share level not in {read, write, share}
    - SelfShareRejectedError: a user tried to share a case with themselves
    - RoleIneligibleError: target user's role does not qualify for the level
    - StorageError: any persistence failure, including timeouts

Usage:
    from casebook.exceptions import NotFoundError

    if case is None:
        raise NotFoundError("case", case_id)
"""

from __future__ import annotations


class CasebookError(Exception):
    """Base exception for casebook-service.

    All custom exceptions inherit from this class, allowing callers to catch
    every service error with a single except clause.
    """

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Return the error as a boundary-friendly payload."""
        return {"kind": self.kind, "message": self.message}


class NotFoundError(CasebookError):
    """A case, user or institution does not exist."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(f"{resource} {identifier} not found")
        self.resource = resource
        self.identifier = identifier


class InvalidPermissionError(CasebookError):
    """Requested share level is not one of read, write or share.

    Raised before any mutation.
    """

    kind = "invalid_permission"

    def __init__(self, permission: object) -> None:
        super().__init__(f"invalid permission: {permission!r}")
        self.permission = permission


class SelfShareRejectedError(CasebookError):
    """Acting user and target user are the same.

    Raised before any mutation.
    """

    kind = "self_share_rejected"

    def __init__(self, user_id: str) -> None:
        super().__init__("cannot share a case with oneself")
        self.user_id = user_id


class RoleIneligibleError(CasebookError):
    """Target user's role does not qualify for the requested level.

    Raised after the target's previous links were revoked. The revoke is
    committed, so the user is left with no active link.
    """

    kind = "role_ineligible"

    def __init__(self, user_id: str, permission: str, required_roles: tuple) -> None:
        roles = " or ".join(required_roles)
        super().__init__(
            f"target user must be {roles} to be eligible for {permission} permission"
        )
        self.user_id = user_id
        self.permission = permission
        self.required_roles = required_roles


class StorageError(CasebookError):
    """Persistence failed or timed out.

    The enclosing transaction scope is rolled back. May contain internal
    details; log it, do not echo it to clients verbatim.
    """

    kind = "storage_error"
