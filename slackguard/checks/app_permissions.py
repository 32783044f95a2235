"""Third-party app permission risk."""

from typing import Iterable, List

from ..models.findings import ComplianceMapping, Finding
from ..models.workspace import InstalledApp
from .base import Check, ScanContext

# Substrings of scopes that grant access to sensitive data
SENSITIVE_SCOPES = (
    'files:read',
    'files:write',
    'channels:history',
    'groups:history',
    'im:history',
    'mpim:history',
    'users:read.email',
    'admin',
)
SENSITIVE_APPS_HIGH_THRESHOLD = 5
APP_COUNT_LOW_THRESHOLD = 50


def is_sensitive_app(app: InstalledApp) -> bool:
    """Check if any granted scope contains a sensitive scope."""
    return any(
        sensitive in scope
        for scope in app.scopes
        for sensitive in SENSITIVE_SCOPES
    )


def assess_app_permissions(team_id: str, team_name: str, apps: Iterable[InstalledApp]) -> List[Finding]:
    """Flag apps holding sensitive scopes and an oversized app inventory."""
    findings: List[Finding] = []
    apps = list(apps)

    sensitive_apps = [app for app in apps if is_sensitive_app(app)]
    if sensitive_apps:
        count = len(sensitive_apps)
        findings.append(Finding.create(
            title=f"{count} Apps with Sensitive Permissions",
            description=(
                f"Found {count} apps with access to sensitive data (files, message history, "
                "emails, admin). Review these apps to ensure they're necessary and trustworthy."
            ),
            severity='high' if count > SENSITIVE_APPS_HIGH_THRESHOLD else 'medium',
            category='access_control',
            resource_id=team_id,
            resource_name=team_name,
            remediation=(
                "Go to Workspace Settings > Apps > Manage and review apps with sensitive "
                "permissions. Remove apps that are no longer needed."
            ),
            compliance=[
                ComplianceMapping('SOC2', 'CC6.6', 'Logical access security measures'),
                ComplianceMapping('GDPR', 'Article 32', 'Security of processing'),
                ComplianceMapping('ISO27001', 'A.9.4.1', 'Information access restriction'),
            ],
        ))

    if len(apps) > APP_COUNT_LOW_THRESHOLD:
        count = len(apps)
        findings.append(Finding.create(
            title=f"{count} Apps Installed",
            description=(
                f"Workspace has {count} apps installed. Large numbers of apps increase the "
                "attack surface and make security management difficult."
            ),
            severity='low',
            category='configuration',
            resource_id=team_id,
            resource_name=team_name,
            remediation="Review and remove unused or unnecessary apps to reduce security risks.",
            compliance=[
                ComplianceMapping('SOC2', 'CC6.6', 'Logical access security measures'),
            ],
        ))

    return findings


class AppPermissionsCheck(Check):
    """Installed apps and their scopes. Needs an admin scope to see anything."""

    name = "app_permissions"
    description = "Apps with sensitive scopes and the number of installed apps"

    async def evaluate(self, context: ScanContext) -> List[Finding]:
        apps = await context.fetcher.fetch_app_permissions()
        return assess_app_permissions(context.team_id, context.team_name, apps)
