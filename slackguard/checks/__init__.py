"""Security checks run against a Slack workspace."""

from typing import List

from .app_permissions import AppPermissionsCheck
from .base import Check, ScanContext
from .external_sharing import ExternalSharingCheck
from .inactive_users import InactiveUsersCheck
from .users import UserSecurityCheck
from .workspace import WorkspaceSecurityCheck

# Registration order is the order findings appear in a report
DEFAULT_CHECKS = (
    WorkspaceSecurityCheck,
    UserSecurityCheck,
    InactiveUsersCheck,
    AppPermissionsCheck,
    ExternalSharingCheck,
)


def default_checks() -> List[Check]:
    """Instantiate the default check set."""
    return [check_cls() for check_cls in DEFAULT_CHECKS]


__all__ = [
    "AppPermissionsCheck",
    "Check",
    "DEFAULT_CHECKS",
    "ExternalSharingCheck",
    "InactiveUsersCheck",
    "ScanContext",
    "UserSecurityCheck",
    "WorkspaceSecurityCheck",
    "default_checks",
]
