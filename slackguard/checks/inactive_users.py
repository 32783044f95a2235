"""Stale and leftover account hygiene."""

import time
from typing import Iterable, List, Optional

from ..models.findings import ComplianceMapping, Finding
from ..models.workspace import Member
from .base import Check, ScanContext

INACTIVITY_WINDOW_SECONDS = 365 * 24 * 60 * 60
INACTIVE_HIGH_THRESHOLD = 10
DEACTIVATED_LOW_THRESHOLD = 20
MISSING_PHOTO_INFO_THRESHOLD = 5


def assess_inactive_users(
    team_id: str,
    team_name: str,
    users: Iterable[Member],
    now: Optional[float] = None,
) -> List[Finding]:
    """Flag stale accounts, leftover deactivated accounts and incomplete profiles.

    ``now`` is a unix timestamp and defaults to the current time. A member
    with no recorded update timestamp is never counted as inactive.
    """
    findings: List[Finding] = []
    users = list(users)
    now = time.time() if now is None else now
    cutoff = now - INACTIVITY_WINDOW_SECONDS

    active_users = [u for u in users if u.is_active]

    inactive = [u for u in active_users if 0 < u.last_updated < cutoff]
    if inactive:
        count = len(inactive)
        findings.append(Finding.create(
            title=f"{count} Inactive User Accounts",
            description=(
                f"Found {count} user accounts that haven't been updated in over a year. "
                "Inactive accounts pose a security risk and should be deactivated."
            ),
            severity='high' if count > INACTIVE_HIGH_THRESHOLD else 'medium',
            category='access_control',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Review inactive users and deactivate accounts that are no longer needed. "
                "Go to Workspace Settings > Members and deactivate unused accounts."
            ),
            compliance=[
                ComplianceMapping('SOC2', 'CC6.3', 'User access reviews'),
                ComplianceMapping('ISO27001', 'A.9.2.5', 'Review of user access rights'),
                ComplianceMapping('GDPR', 'Article 5', 'Data minimization'),
            ],
        ))

    deactivated = [u for u in users if u.deleted and not u.is_bot]
    if len(deactivated) > DEACTIVATED_LOW_THRESHOLD:
        count = len(deactivated)
        findings.append(Finding.create(
            title=f"{count} Deactivated User Accounts",
            description=(
                f"Workspace has {count} deactivated user accounts. Consider removing these "
                "accounts to reduce clutter and potential security risks."
            ),
            severity='low',
            category='access_control',
            resource_id=team_id,
            resource_name=team_name,
            remediation="Clean up deactivated user accounts periodically to maintain good workspace hygiene.",
            compliance=[
                ComplianceMapping('SOC2', 'CC6.3', 'User access reviews'),
            ],
        ))

    without_photos = [u for u in active_users if not u.has_profile_photo]
    if len(without_photos) > MISSING_PHOTO_INFO_THRESHOLD:
        count = len(without_photos)
        findings.append(Finding.create(
            title=f"{count} Users Without Profile Photos",
            description=(
                f"Found {count} active users without profile photos. This could indicate "
                "incomplete account setup or potential security risks."
            ),
            severity='info',
            category='compliance',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Encourage users to complete their profiles with photos for better "
                "identification and security."
            ),
            compliance=[
                ComplianceMapping('SOC2', 'CC6.1', 'User identification and authentication'),
            ],
        ))

    return findings


class InactiveUsersCheck(Check):
    """Stale, deactivated and incomplete accounts."""

    name = "inactive_users"
    description = "Accounts untouched for a year, leftover deactivated accounts, missing photos"

    async def evaluate(self, context: ScanContext) -> List[Finding]:
        return assess_inactive_users(context.team_id, context.team_name, context.users)
