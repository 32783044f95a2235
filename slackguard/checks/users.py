"""Per-member authentication posture."""

from typing import Iterable, List

from ..models.findings import ComplianceMapping, Finding
from ..models.workspace import Member
from .base import Check, ScanContext

# More members than this without 2FA makes the finding high severity
MFA_GAP_HIGH_THRESHOLD = 5


def assess_users(team_id: str, team_name: str, users: Iterable[Member]) -> List[Finding]:
    """Flag active members without 2FA and report guest accounts."""
    findings: List[Finding] = []
    active_users = [u for u in users if u.is_active]

    without_2fa = [u for u in active_users if not u.has_two_factor]
    if without_2fa:
        count = len(without_2fa)
        findings.append(Finding.create(
            title=f"{count} Users Without 2FA",
            description=(
                f"Found {count} active users who have not enabled two-factor authentication. "
                "These accounts can be compromised with a stolen password alone."
            ),
            severity='high' if count > MFA_GAP_HIGH_THRESHOLD else 'medium',
            category='authentication',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Ask these users to enable two-factor authentication, or require it "
                "workspace-wide in Workspace Settings > Authentication."
            ),
            compliance=[
                ComplianceMapping('SOC2', 'CC6.1', 'Logical and physical access controls'),
                ComplianceMapping('ISO27001', 'A.9.4.2', 'Secure log-on procedures'),
                ComplianceMapping('HIPAA', '164.312(d)', 'Person or entity authentication'),
                ComplianceMapping('OWASP', 'A07:2021', 'Identification and authentication failures'),
            ],
        ))

    guests = [u for u in active_users if u.is_guest]
    if guests:
        count = len(guests)
        findings.append(Finding.create(
            title=f"{count} Guest Accounts",
            description=(
                f"Workspace has {count} guest accounts with restricted access. "
                "Guests are usually external collaborators; confirm they still need access."
            ),
            severity='info',
            category='access_control',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Review guest accounts periodically and set expiration dates for "
                "temporary collaborators."
            ),
            compliance=[
                ComplianceMapping('SOC2', 'CC6.3', 'User access reviews'),
            ],
        ))

    return findings


class UserSecurityCheck(Check):
    """Member 2FA enrolment and guest accounts."""

    name = "user_security"
    description = "Members without two-factor authentication and guest accounts"

    async def evaluate(self, context: ScanContext) -> List[Finding]:
        return assess_users(context.team_id, context.team_name, context.users)
