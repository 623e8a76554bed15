"""Core business logic."""

from .case_lifecycle import CaseLifecycle
from .share_coordinator import ELIGIBLE_ROLES, ShareCoordinator

__all__ = ["CaseLifecycle", "ELIGIBLE_ROLES", "ShareCoordinator"]
