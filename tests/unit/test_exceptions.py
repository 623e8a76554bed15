"""Unit tests for the exception hierarchy"""

import pytest

from casebook.exceptions import (
    CasebookError,
    InvalidPermissionError,
    NotFoundError,
    RoleIneligibleError,
    SelfShareRejectedError,
    StorageError,
)


@pytest.mark.unit
class TestExceptions:
    """Test error kinds and payloads"""

    @pytest.mark.parametrize(
        "error, kind",
        [
            (NotFoundError("case", "c-1"), "not_found"),
            (InvalidPermissionError("owner"), "invalid_permission"),
            (SelfShareRejectedError("u-1"), "self_share_rejected"),
            (RoleIneligibleError("u-1", "write", ("author",)), "role_ineligible"),
            (StorageError("disk full"), "storage_error"),
        ],
    )
    def test_kind_and_payload(self, error, kind):
        assert isinstance(error, CasebookError)
        assert error.kind == kind
        assert error.to_dict() == {"kind": kind, "message": error.message}

    def test_not_found_message(self):
        error = NotFoundError("case", "c-1")
        assert error.message == "case c-1 not found"
        assert error.resource == "case"
        assert error.identifier == "c-1"

    def test_role_ineligible_lists_required_roles(self):
        error = RoleIneligibleError("u-1", "read", ("player", "author"))
        assert "player or author" in error.message
        assert "read" in error.message
