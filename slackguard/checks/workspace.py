"""Workspace-wide authentication settings."""

from typing import List

from ..models.findings import ComplianceMapping, Finding
from ..models.workspace import TeamInfo
from .base import Check, ScanContext


def assess_workspace(team_id: str, team_name: str, team: TeamInfo) -> List[Finding]:
    """Flag missing 2FA enforcement and a missing email domain allow-list."""
    findings: List[Finding] = []

    if not team.enforces_two_factor:
        findings.append(Finding.create(
            title="2FA Not Enforced",
            description=(
                "Two-factor authentication is not required for members of this workspace. "
                "Accounts protected only by a password are easier to take over."
            ),
            severity='high',
            category='authentication',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Go to Workspace Settings > Authentication and require two-factor "
                "authentication for all members."
            ),
            compliance=[
                ComplianceMapping('SOC2', 'CC6.1', 'Logical and physical access controls'),
                ComplianceMapping('ISO27001', 'A.9.4.2', 'Secure log-on procedures'),
                ComplianceMapping('HIPAA', '164.312(d)', 'Person or entity authentication'),
                ComplianceMapping('OWASP', 'A07:2021', 'Identification and authentication failures'),
            ],
        ))

    if not team.has_email_domain_restriction:
        findings.append(Finding.create(
            title="No Email Domain Restrictions",
            description=(
                "The workspace does not restrict sign-ups to approved email domains. "
                "Anyone with an invitation link can join with any address."
            ),
            severity='medium',
            category='access_control',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Go to Workspace Settings > Joining This Workspace and limit sign-ups "
                "to your organization's email domains."
            ),
            compliance=[
                ComplianceMapping('SOC2', 'CC6.2', 'User registration and authorization'),
                ComplianceMapping('ISO27001', 'A.9.2.1', 'User registration and de-registration'),
            ],
        ))

    return findings


class WorkspaceSecurityCheck(Check):
    """Workspace authentication settings."""

    name = "workspace_security"
    description = "Two-factor enforcement and email domain restrictions"

    async def evaluate(self, context: ScanContext) -> List[Finding]:
        return assess_workspace(context.team_id, context.team_name, context.team)
